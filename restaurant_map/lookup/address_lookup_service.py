# restaurant_map/lookup/address_lookup_service.py

from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Union

from loguru import logger

from restaurant_map.clients import PlacesAPIError, PlacesClient
from restaurant_map.clients.places_client import build_text_query
from restaurant_map.config import COST_PER_REQUEST, MAX_DISPLAY_RESULTS
from restaurant_map.console import OperatorConsole
from restaurant_map.csv_io import save_restaurants
from restaurant_map.models import LookupSummary, PlaceCandidate, Restaurant

MANUAL_PROMPT = "  Enter address manually or press Enter to skip: "
RULE = "=" * 80


class AddressLookupService:
    """
    Resolve restaurant addresses one at a time through the Places text search,
    falling back to the operator whenever the answer is ambiguous or missing.
    """

    def __init__(
        self,
        output_file: Union[str, Path],
        client: PlacesClient,
        console: OperatorConsole,
        cost_per_request: float = COST_PER_REQUEST,
    ):
        self.output_file = output_file
        self.client = client
        self.console = console
        self.cost_per_request = cost_per_request
        self.cache: Dict[str, str] = {}
        self.request_count = 0

    def save_progress(self, restaurants: List[Restaurant]) -> None:
        save_restaurants(self.output_file, restaurants)
        self.console.say(f"  💾 Progress saved to {self.output_file}")

    async def search(self, restaurant: Restaurant) -> List[PlaceCandidate]:
        """Issue one search for `restaurant`. Counts the request even if it fails."""
        self.request_count += 1
        text_query = build_text_query(restaurant.name, restaurant.neighborhood)
        self.console.say(f'  🔍 Searching Google Places: "{text_query}"')
        return await self.client.search_text(text_query)

    def select_from_multiple(self, restaurant: Restaurant, results: List[PlaceCandidate]) -> str:
        """
        Let the operator pick one of several candidates, skip, or type an address.

        Returns:
            str: The chosen formatted address, typed address, or "" for skip.
        """
        self.console.say(
            f'\n📍 Multiple locations found for "{restaurant.name}" in {restaurant.neighborhood}:\n'
        )

        display_results = results[:MAX_DISPLAY_RESULTS]
        for index, result in enumerate(display_results, start=1):
            self.console.say(f"  {index}. {result.display_name} - {result.formatted_address}")

        skip_option = len(display_results) + 1
        manual_option = len(display_results) + 2
        self.console.say(f"  {skip_option}. Skip this restaurant")
        self.console.say(f"  {manual_option}. Enter address manually\n")

        choice = self.console.choose(f"Select option (1-{manual_option}): ", manual_option)
        if choice == skip_option:
            return ""
        if choice == manual_option:
            return self.console.ask("Enter address: ")
        return display_results[choice - 1].formatted_address

    async def lookup_address(self, restaurant: Restaurant) -> str:
        """
        Resolve the address for a single restaurant.

        Cached results (including a cached skip) are reused without a request.
        Zero results and failed requests fall back to manual entry.
        """
        cache_key = restaurant.cache_key

        if cache_key in self.cache:
            logger.debug(f"Cache hit for '{cache_key}'")
            self.console.say("  ✓ Using cached result")
            return self.cache[cache_key]

        if restaurant.has_address:
            self.console.say(f"  ✓ Address already exists: {restaurant.address}")
            return restaurant.address

        try:
            results = await self.search(restaurant)
        except PlacesAPIError as e:
            self.console.say(f"  ❌ Google Places API error: {e}")
            address = self.console.ask(MANUAL_PROMPT)
        else:
            if not results:
                self.console.say("  ⚠️  No results found")
                address = self.console.ask(MANUAL_PROMPT)
            elif len(results) == 1:
                address = results[0].formatted_address
                self.console.say(f"  ✓ Found: {address}")
            else:
                address = self.select_from_multiple(restaurant, results)

        self.cache[cache_key] = address
        return address

    def summarize(self, restaurants: List[Restaurant]) -> LookupSummary:
        return LookupSummary(
            total=len(restaurants),
            with_address=sum(1 for r in restaurants if r.has_address),
            requests=self.request_count,
            estimated_cost=self.request_count * self.cost_per_request,
        )

    async def process_restaurants(self, restaurants: List[Restaurant]) -> List[Restaurant]:
        """
        Look up every restaurant that has no address yet.

        Args:
            restaurants (List[Restaurant]): Full ordered record list.

        Returns:
            List[Restaurant]: A new list in the same order with addresses filled in.
        """
        needs_lookup = [r for r in restaurants if not r.has_address]
        already_has_address = len(restaurants) - len(needs_lookup)

        self.console.say(f"\n{RULE}")
        self.console.say(f"GOOGLE PLACES ADDRESS LOOKUP - Processing {len(restaurants)} restaurants")
        self.console.say(f"{RULE}\n")

        if already_has_address > 0:
            self.console.say(f"✓ Skipping {already_has_address} restaurants that already have addresses\n")

        results = list(restaurants)
        processed = 0

        for i, restaurant in enumerate(results):
            if restaurant.has_address:
                continue

            processed += 1
            self.console.say(
                f"\n[{processed}/{len(needs_lookup)}] {restaurant.name} ({restaurant.neighborhood})"
            )

            address = await self.lookup_address(restaurant)
            results[i] = replace(restaurant, address=address)

            if address:
                self.save_progress(results)

        self.report_summary(self.summarize(results))
        return results

    def report_summary(self, summary: LookupSummary) -> None:
        self.console.say(f"\n{RULE}")
        self.console.say("SUMMARY")
        self.console.say(RULE)
        self.console.say(f"Total restaurants: {summary.total}")
        self.console.say(f"Addresses found: {summary.with_address}")
        self.console.say(f"API requests made: {summary.requests}")
        self.console.say(f"Estimated cost: ${summary.estimated_cost:.2f}")
