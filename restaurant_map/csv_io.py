import io
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd
from loguru import logger

from restaurant_map.models import Restaurant

CSV_COLUMNS = ["Name", "Neighborhood", "Address", "Cuisine", "Price"]
REQUIRED_COLUMNS = ["Name", "Neighborhood", "Cuisine", "Price"]


def serialize_restaurants_csv(restaurants: Iterable[Restaurant]) -> str:
    """
    Render restaurants as CSV text.

    The header is always present and always in CSV_COLUMNS order, even when
    there are no rows.
    """
    rows = [
        {
            "Name": r.name,
            "Neighborhood": r.neighborhood,
            "Address": r.address,
            "Cuisine": r.cuisine,
            "Price": r.price,
        }
        for r in restaurants
    ]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n")


def parse_restaurants_csv(csv_content: str) -> List[Restaurant]:
    """
    Parse CSV text into Restaurant records, keyed by column name.

    A missing Address column defaults every address to "". Every cell is kept
    as a string; pandas' NA coercion is disabled so values like "NA" survive.

    Raises:
        ValueError: If any column other than Address is missing.
    """
    if not csv_content.strip():
        return []

    df = pd.read_csv(
        io.StringIO(csv_content),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing required column(s): {', '.join(missing)}")

    has_address = "Address" in df.columns
    restaurants = []
    for _, row in df.iterrows():
        restaurants.append(
            Restaurant(
                name=row["Name"],
                neighborhood=row["Neighborhood"],
                address=row["Address"] if has_address else "",
                cuisine=row["Cuisine"],
                price=row["Price"],
            )
        )
    return restaurants


def load_restaurants(file_path: Union[str, Path]) -> List[Restaurant]:
    """Load restaurants from a CSV file on disk."""
    content = Path(file_path).read_text(encoding="utf-8")
    restaurants = parse_restaurants_csv(content)
    logger.debug(f"Loaded {len(restaurants)} restaurants from {file_path}")
    return restaurants


def save_restaurants(file_path: Union[str, Path], restaurants: Iterable[Restaurant]) -> None:
    """Rewrite `file_path` with the full restaurant list."""
    Path(file_path).write_text(serialize_restaurants_csv(restaurants), encoding="utf-8")
