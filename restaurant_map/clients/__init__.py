"""Clients for external API interactions."""
from restaurant_map.clients.places_client import PlacesClient, PlacesAPIError

__all__ = ["PlacesClient", "PlacesAPIError"]
