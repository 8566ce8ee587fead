"""
Pincode -> warehouse location coverage.

The table is loaded once at startup and never mutated afterwards. Location
order is the order of the source data; when a pincode appears under more than
one location, the first location in that order wins.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from core.logging import get_logger

logger = get_logger(__name__)


DEFAULT_LOCATION_PINCODES: Dict[str, List[str]] = {
    # Gurugram
    "88352981234": ["110001", "110002", "110003", "122001", "122002", "201301"],
    # Bangalore
    "88353014002": [
        "560001", "560002", "560003", "560004", "560008", "560009", "560010", "560011",
        "560017", "560038", "560041", "560043", "560068", "560085", "560103",
    ],
}


class CoverageConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Resolution:
    location_id: Optional[str] = None

    @property
    def serviceable(self) -> bool:
        return self.location_id is not None


UNSERVICEABLE = Resolution()


class LocationCoverageTable:
    def __init__(self, entries: Iterable[Tuple[str, Iterable[str]]]):
        self._entries: Tuple[Tuple[str, frozenset], ...] = tuple(
            (str(location_id).strip(), frozenset(str(p).strip() for p in pincodes))
            for location_id, pincodes in entries
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "LocationCoverageTable":
        return cls(mapping.items())

    @property
    def location_ids(self) -> List[str]:
        return [location_id for location_id, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, pincode: str) -> Resolution:
        code = (pincode or "").strip()
        if not code:
            return UNSERVICEABLE
        for location_id, pincodes in self._entries:
            if code in pincodes:
                return Resolution(location_id)
        return UNSERVICEABLE

    def duplicates(self) -> Dict[str, List[str]]:
        """Pincodes listed under more than one location, with every owner in table order."""
        owners: Dict[str, List[str]] = {}
        for location_id, pincodes in self._entries:
            for code in pincodes:
                owners.setdefault(code, []).append(location_id)
        return {code: ids for code, ids in sorted(owners.items()) if len(ids) > 1}

    def as_dict(self) -> Dict[str, List[str]]:
        return {location_id: sorted(pincodes) for location_id, pincodes in self._entries}


def _read_coverage_file(path: str) -> Dict[str, List[str]]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CoverageConfigError(f"Cannot read coverage file {path}: {e}") from e

    if not isinstance(raw, dict) or not raw:
        raise CoverageConfigError(f"Coverage file {path} must be a non-empty JSON object")
    for location_id, pincodes in raw.items():
        # bool is an int subclass; true/false are not pincodes
        if not isinstance(pincodes, list) or not all(
            isinstance(p, (str, int)) and not isinstance(p, bool) for p in pincodes
        ):
            raise CoverageConfigError(
                f"Coverage for location {location_id} must be a list of pincodes"
            )
    return raw


def load_coverage_table(path: Optional[str] = None) -> LocationCoverageTable:
    if path:
        table = LocationCoverageTable.from_mapping(_read_coverage_file(path))
        source = path
    else:
        table = LocationCoverageTable.from_mapping(DEFAULT_LOCATION_PINCODES)
        source = "builtin"

    dupes = table.duplicates()
    if dupes:
        logger.warning(
            "Pincodes mapped to more than one location; first location wins",
            duplicates=dupes,
        )

    logger.info(
        "Loaded location coverage",
        source=source,
        locations=table.location_ids,
        pincodes=sum(len(v) for v in table.as_dict().values()),
    )
    return table
