"""
Typed data models for the restaurant map pipeline.
All data structures shared between the parser and the lookup stage live here.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class Restaurant:
    """One restaurant entry, parsed from text or loaded from CSV."""
    name: str
    neighborhood: str
    cuisine: str
    price: str
    address: str = ""  # Empty until resolved by the lookup stage

    @property
    def cache_key(self) -> str:
        return f"{self.name}|{self.neighborhood}"

    @property
    def has_address(self) -> bool:
        return bool(self.address and self.address.strip())


@dataclass
class PlaceCandidate:
    """A single place returned by the Places text search."""
    id: str
    display_name: str
    formatted_address: str
    types: List[str] = field(default_factory=list)


@dataclass
class LookupSummary:
    """End-of-run totals for an address lookup pass."""
    total: int
    with_address: int
    requests: int
    estimated_cost: float
