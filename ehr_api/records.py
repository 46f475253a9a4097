"""Record lifecycle helpers shared by every router.

Create stamps a fresh id and identical ``createdAt``/``updatedAt``; update
shallow-merges the changes and keeps ``id``/``createdAt``; delete removes the
record outright.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ehr_api.exceptions import NotFoundError
from ehr_api.store import Collection, EHRStore, Record, next_timestamp, parse_timestamp, utc_now_iso

logger = logging.getLogger(__name__)


def get_or_404(collection: Collection, record_id: str, entity: str) -> Record:
    record = collection.get(record_id)
    if record is None:
        raise NotFoundError(entity)
    return record


def require_patient(store: EHRStore, patient_id: Optional[str]) -> Record:
    """Existence check on the parent patient of a child record."""
    if not patient_id:
        raise NotFoundError("Patient")
    return get_or_404(store.patients, patient_id, "Patient")


def create_record(store: EHRStore, collection: Collection, fields: Record) -> Record:
    now = utc_now_iso()
    record = {
        **fields,
        "id": store.generate_id(collection),
        "createdAt": now,
        "updatedAt": now,
    }
    collection.set(record["id"], record)
    logger.info(f"Created {collection.name} record {record['id']}")
    return record


def update_record(collection: Collection, record_id: str, changes: Record, entity: str) -> Record:
    existing = get_or_404(collection, record_id, entity)
    updated = {
        **existing,
        **changes,
        "id": existing["id"],
        "createdAt": existing["createdAt"],
        "updatedAt": next_timestamp(existing.get("updatedAt")),
    }
    collection.set(record_id, updated)
    return updated


def delete_record(collection: Collection, record_id: str, entity: str) -> None:
    if not collection.delete(record_id):
        raise NotFoundError(entity)
    logger.info(f"Deleted {collection.name} record {record_id}")


def sort_by_time(records: Iterable[Record], field: str, newest_first: bool = False) -> List[Record]:
    """Sort on an ISO timestamp field; records missing it sort last."""
    records = list(records)
    present = [r for r in records if r.get(field)]
    missing = [r for r in records if not r.get(field)]
    present.sort(key=lambda r: parse_timestamp(r[field]), reverse=newest_first)
    return present + missing


def apply_limit(records: List[Record], limit: Optional[int]) -> List[Record]:
    """Truncate to ``limit`` records; a missing or zero limit keeps them all."""
    if not limit:
        return records
    return records[:limit]


def contains(term: str) -> Callable[..., bool]:
    """Case-insensitive substring predicate over several string values."""
    needle = term.lower()

    def match(*values: Optional[str]) -> bool:
        return any(needle in (value or "").lower() for value in values)

    return match
