from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    NOT_STOCKED = "NOT_STOCKED"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    UNSERVICEABLE = "UNSERVICEABLE"
    NOT_FOUND = "NOT_FOUND"
    TRANSIENT_ERROR = "TRANSIENT_ERROR"
    MISSING_INPUT = "MISSING_INPUT"


def location_id_from_gid(gid: str) -> str:
    """gid://shopify/Location/88352981234 -> 88352981234"""
    return (gid or "").split("/")[-1]


@dataclass(frozen=True)
class QuantityEntry:
    name: str
    quantity: Optional[int] = None


@dataclass(frozen=True)
class InventoryLevel:
    location_gid: str
    location_name: str
    quantities: List[QuantityEntry] = field(default_factory=list)

    @property
    def location_id(self) -> str:
        return location_id_from_gid(self.location_gid)


@dataclass(frozen=True)
class InventoryRecord:
    location_id: str
    location_name: str
    quantity: int


def available_quantity(quantities: Sequence[QuantityEntry]) -> int:
    entry = next((q for q in quantities if q.name == "available"), None)
    if entry is None or entry.quantity is None:
        return 0
    return int(entry.quantity)


def match(location_id: str, levels: Sequence[InventoryLevel]) -> Optional[InventoryRecord]:
    """
    Pick the inventory level held at `location_id`.

    Every level is scanned; if the location appears more than once the last
    one wins.
    """
    matched = None
    for level in levels:
        if level.location_id == location_id:
            matched = InventoryRecord(
                location_id=level.location_id,
                location_name=level.location_name,
                quantity=available_quantity(level.quantities),
            )
    return matched


def count_matches(location_id: str, levels: Sequence[InventoryLevel]) -> int:
    return sum(1 for level in levels if level.location_id == location_id)


def decide(record: Optional[InventoryRecord]) -> AvailabilityStatus:
    if record is None:
        return AvailabilityStatus.NOT_STOCKED
    if record.quantity <= 0:
        return AvailabilityStatus.OUT_OF_STOCK
    return AvailabilityStatus.AVAILABLE
