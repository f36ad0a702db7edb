from typing import List, Optional
from loguru import logger

from restaurant_map.models import Restaurant
from restaurant_map.neighborhoods import NEIGHBORHOODS_BY_LENGTH

BULLET = "•"
CURRENCY_SYMBOL = "$"


class ParseError(ValueError):
    """Raised when a restaurant line cannot be split into its fields."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(message)


def _pop_price(parts: List[str]) -> str:
    """Remove and return the last segment carrying a currency symbol, or ""."""
    for i in range(len(parts) - 1, -1, -1):
        if parts[i] and CURRENCY_SYMBOL in parts[i]:
            return parts.pop(i)
    return ""


def _find_neighborhood(blob: str) -> Optional[str]:
    for hood in NEIGHBORHOODS_BY_LENGTH:
        if hood in blob:
            return hood
    return None


def parse_line(line: str) -> Restaurant:
    """
    Parse one restaurant line into a Restaurant record.

    Lines look like 'Name Neighborhood • Cuisine • Price'. The price segment is
    optional; the neighborhood must be one of the known names and is matched
    longest-first against the leading segment.

    Args:
        line (str): A trimmed, non-empty input line.

    Returns:
        Restaurant: Parsed record with an empty address.

    Raises:
        ParseError: If no known neighborhood or no cuisine can be found.
    """
    parts = [p.strip() for p in line.split(BULLET)]

    price = _pop_price(parts)

    blob = parts[0] if parts else ""
    cuisine = parts[1] if len(parts) > 1 else ""

    name = blob
    neighborhood = _find_neighborhood(blob)
    if neighborhood:
        # Name is whatever precedes the last occurrence
        idx = blob.rfind(neighborhood)
        name = blob[:idx].strip()

    if not neighborhood:
        raise ParseError(
            f'Could not find neighborhood in line: "{line}"\n'
            f'Parsed: name="{name}", firstPart="{blob}"',
            line,
        )

    if not cuisine:
        raise ParseError(
            f'Could not find cuisine in line: "{line}"\n'
            f'Parsed: name="{name}", neighborhood="{neighborhood}"',
            line,
        )

    return Restaurant(
        name=name,
        neighborhood=neighborhood,
        cuisine=cuisine,
        price=price,
    )


def parse_lines(text: str) -> List[Restaurant]:
    """Parse every non-blank line of `text`. The first bad line aborts the run."""
    restaurants = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        restaurants.append(parse_line(line))
    logger.debug(f"Parsed {len(restaurants)} restaurant lines")
    return restaurants
