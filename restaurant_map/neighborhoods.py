"""
Known LA-area neighborhoods used to anchor the name/neighborhood split when
parsing restaurant lines.
"""
from typing import Tuple

NEIGHBORHOODS: Tuple[str, ...] = (
    "Koreatown",
    "North Hollywood",
    "San Gabriel Valley",
    "Artesia",
    "Boyle Heights",
    "Sherman Oaks",
    "Newport Beach",
    "Glendale",
    "Pasadena",
    "Temple City",
    "South Gate",
    "Little Ethiopia",
    "Garden Grove",
    "Northridge",
    "Pico-Union",
    "Westchester",
    "Hollywood",
    "View Park-Windsor Hills",
    "Hermosa Beach",
    "East Hollywood",
    "Cudahy",
    "Downtown L.A.",
    "Huntington Park",
    "West Los Angeles",
    "Hancock Park",
    "Santa Ana",
    "Atwater Village",
    "Beverly Hills",
    "Alhambra",
    "San Juan Capistrano",
    "Santa Monica",
    "Chinatown",
    "Hyde Park",
    "Studio City",
    "El Sereno",
    "Venice",
    "West Hollywood",
    "Los Feliz",
    "West Adams",
    "Long Beach",
    "Culver City",
    "Lincoln Heights",
    "Echo Park",
    "Pico-Robertson",
    "Costa Mesa",
    "Anaheim",
    "Torrance",
    "Inglewood",
    "Mid-Wilshire",
    "Silver Lake",
    "Palms",
    "Larchmont",
    "Glassell Park",
    "Historic South-Central",
    "Arleta",
)

# Longest first so "West Hollywood" wins over "Hollywood". sorted() is stable,
# equal-length names keep their declaration order.
NEIGHBORHOODS_BY_LENGTH: Tuple[str, ...] = tuple(
    sorted(NEIGHBORHOODS, key=len, reverse=True)
)
