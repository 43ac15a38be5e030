"""
Local collection state for Tracklist views.

An ordered, in-memory copy of one resource's records. It is never the
source of truth: it only changes by replacing everything with a fetched
list, or by merging a single record the API returned.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


Record = dict[str, Any]


@dataclass
class CollectionState:
    """Ordered records keyed by their store-assigned ``id``."""

    records: list[Record] = field(default_factory=list)

    def replace(self, records: list[Record]) -> None:
        """Replace the whole collection (the only bulk synchronization point)."""
        self.records = [dict(r) for r in records]

    def append(self, record: Record) -> None:
        """Add a record created by the API, keeping its server-assigned id."""
        self.records.append(dict(record))

    def insert(self, record: Record) -> None:
        """Place a record before the first one with a larger id, keeping id order."""
        position = len(self.records)
        for i, existing in enumerate(self.records):
            if existing.get("id", 0) > record["id"]:
                position = i
                break
        self.records.insert(position, dict(record))

    def substitute(self, record: Record) -> bool:
        """
        Swap in the API's version of a record.

        Returns:
            False if no local record has that id.
        """
        for i, existing in enumerate(self.records):
            if existing.get("id") == record.get("id"):
                self.records[i] = dict(record)
                return True
        return False

    def remove(self, record_id: int) -> bool:
        """Drop the record with this id. Returns False if it wasn't present."""
        before = len(self.records)
        self.records = [r for r in self.records if r.get("id") != record_id]
        return len(self.records) != before

    def get(self, record_id: int) -> Optional[Record]:
        for record in self.records:
            if record.get("id") == record_id:
                return record
        return None

    @property
    def ids(self) -> list[int]:
        return [r.get("id") for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
