"""In-memory collection store.

Every entity type lives in its own keyed map. Records are plain dicts with
camelCase keys, exactly as they are sent over the wire. Nothing here is
persisted; a fresh ``EHRStore`` is created per application instance.
"""

import random
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]

_ID_ALPHABET = string.digits + string.ascii_lowercase


class Collection:
    """Keyed map of records for a single entity type."""

    def __init__(self, name: str, prefix: str):
        self.name = name
        self.prefix = prefix
        self._items: Dict[str, Record] = {}

    def get(self, record_id: str) -> Optional[Record]:
        return self._items.get(record_id)

    def set(self, record_id: str, record: Record) -> None:
        self._items[record_id] = record

    def has(self, record_id: str) -> bool:
        return record_id in self._items

    def delete(self, record_id: str) -> bool:
        return self._items.pop(record_id, None) is not None

    def values(self) -> List[Record]:
        return list(self._items.values())

    def where(self, **fields: Any) -> List[Record]:
        """Return records whose fields equal the given values."""
        return [
            record for record in self._items.values()
            if all(record.get(key) == value for key, value in fields.items())
        ]

    def __len__(self) -> int:
        return len(self._items)


class EHRStore:
    """All collections of the EHR demo."""

    def __init__(self):
        self.patients = Collection("patients", "P")
        self.appointments = Collection("appointments", "A")
        self.prescriptions = Collection("prescriptions", "RX")
        self.lab_results = Collection("lab_results", "L")
        self.vitals = Collection("vitals", "V")
        self.medical_records = Collection("medical_records", "MR")

    @property
    def collections(self) -> List[Collection]:
        return [
            self.patients,
            self.appointments,
            self.prescriptions,
            self.lab_results,
            self.vitals,
            self.medical_records,
        ]

    def generate_id(self, collection: Collection) -> str:
        """Generate an id that is not yet used in ``collection``."""
        while True:
            record_id = generate_id(collection.prefix)
            if not collection.has(record_id):
                return record_id


def generate_id(prefix: str) -> str:
    """Build ``<prefix><epoch millis><9 random base-36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix}{int(time.time() * 1000)}{suffix}"


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def next_timestamp(previous: Optional[str]) -> str:
    """Return "now", nudged forward so it sorts strictly after ``previous``."""
    now = datetime.now(timezone.utc)
    if previous:
        earlier = parse_timestamp(previous)
        if now <= earlier:
            now = earlier + timedelta(microseconds=1)
    return format_timestamp(now)
