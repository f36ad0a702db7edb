import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from restaurant_map.config import DEFAULT_TEXT_INPUT, LOG_LEVEL, SAMPLE_SIZE
from restaurant_map.csv_io import save_restaurants
from restaurant_map.line_parser import ParseError, parse_lines
from restaurant_map.models import Restaurant

RULE = "=" * 80


def output_path_for(input_file: str) -> Path:
    """restaurants.txt -> restaurants.csv, next to the input."""
    return Path(input_file).with_suffix(".csv")


def print_sample(restaurants: List[Restaurant], limit: int = SAMPLE_SIZE) -> None:
    print(f"Sample (first {limit}):")
    print("-" * 80)
    for index, r in enumerate(restaurants[:limit], start=1):
        print(f"{index:>2}. {r.name:<35} | {r.neighborhood:<25} | {r.cuisine:<20} | {r.price}")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse a flat-text restaurant list and write it out as CSV with empty addresses.

    Returns:
        int: Process exit status.
    """
    parser = argparse.ArgumentParser(description="Parse a restaurant text list into CSV.")
    parser.add_argument("input_file", nargs="?", default=DEFAULT_TEXT_INPUT, help="Restaurant text file")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    input_file = args.input_file
    output_file = output_path_for(input_file)

    print(RULE)
    print("LA RESTAURANTS - PARSED DATA")
    print(RULE + "\n")

    print(f"📂 Loading {input_file}...")
    try:
        raw = Path(input_file).read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Error: Could not read {input_file}: {e}", file=sys.stderr)
        return 1
    print("✓ Loaded\n")

    try:
        restaurants = parse_lines(raw)
    except ParseError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(f"Parsed {len(restaurants)} restaurants\n")
    print_sample(restaurants)

    try:
        save_restaurants(output_file, restaurants)
    except OSError as e:
        print(f"❌ Error: Could not write {output_file}: {e}", file=sys.stderr)
        return 1
    print(f"✓ Saved to {output_file} (addresses empty - ready for address lookup)\n")

    print(RULE)
    print("NEXT STEPS")
    print(RULE)
    print(f"""
Next, run the address lookup tool:

  address-lookup {output_file}

This will:
  - Automatically look up addresses using Google Places API
  - Prompt you to confirm or select from multiple matches
  - Update {output_file} with the addresses

After that, import {output_file} to Google My Maps
""")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
