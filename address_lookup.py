import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from restaurant_map.clients import PlacesClient
from restaurant_map.config import API_ENV_FILE, DEFAULT_CSV_INPUT, LOG_LEVEL
from restaurant_map.console import OperatorConsole
from restaurant_map.credentials import REMEDIATION, CredentialsError, load_api_key
from restaurant_map.csv_io import load_restaurants, save_restaurants
from restaurant_map.lookup.address_lookup_service import RULE, AddressLookupService


async def main(argv: Optional[List[str]] = None, console: Optional[OperatorConsole] = None) -> int:
    """
    Fill in missing addresses in a restaurant CSV, in place.

    - Loads the Places API key and the CSV.
    - Looks up each restaurant without an address, asking the operator when needed.
    - Saves after every resolved address, and once more at the end.

    Returns:
        int: Process exit status.
    """
    parser = argparse.ArgumentParser(description="Look up restaurant addresses with Google Places.")
    parser.add_argument("input_file", nargs="?", default=DEFAULT_CSV_INPUT, help="Restaurant CSV file")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    console = console or OperatorConsole()
    input_file = args.input_file

    console.say(RULE)
    console.say("GOOGLE PLACES API ADDRESS LOOKUP")
    console.say(RULE + "\n")

    console.say(f"🔑 Loading API key from {Path(API_ENV_FILE).name}...")
    try:
        api_key = load_api_key()
    except CredentialsError as e:
        print(f"❌ Error: Could not load API key from {API_ENV_FILE}", file=sys.stderr)
        print(f"   {e}", file=sys.stderr)
        print(f"\n{REMEDIATION}", file=sys.stderr)
        return 1
    console.say("✓ API key loaded\n")

    console.say(f"📂 Loading {input_file}...")
    try:
        restaurants = load_restaurants(input_file)
    except (OSError, ValueError) as e:
        print(f"❌ Error: Could not load {input_file}: {e}", file=sys.stderr)
        return 1
    console.say(f"✓ Loaded {len(restaurants)} restaurants\n")

    needs_lookup = [r for r in restaurants if not r.has_address]
    console.say(f"📍 {len(needs_lookup)} restaurants need address lookup\n")

    if not needs_lookup:
        console.say("✓ All restaurants already have addresses!")
        console.say(f"\nYou can now import {input_file} to Google My Maps.\n")
        return 0

    if not console.confirm("Continue? (Y/n): "):
        console.say("Cancelled.")
        return 0

    async with PlacesClient(api_key) as client:
        service = AddressLookupService(input_file, client, console)
        updated = await service.process_restaurants(restaurants)

    console.say("\n💾 Saving final results...")
    save_restaurants(input_file, updated)
    console.say(f"✓ Updated {input_file}")

    console.say(f"\n{RULE}")
    console.say("✓ ADDRESS LOOKUP COMPLETE!")
    console.say(f"{RULE}\n")
    console.say("Next steps:")
    console.say(f"1. Review {input_file} for any missing addresses")
    console.say("2. Import to Google My Maps (https://mymaps.google.com)")
    console.say("3. Create your custom restaurant map!\n")
    return 0


def run() -> None:
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted. Addresses resolved so far were saved; rerun to continue.", file=sys.stderr)
        status = 130
    sys.exit(status)


if __name__ == "__main__":
    run()
