"""Shared schema building blocks."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Naive datetimes are interpreted as UTC so records always sort together.
UtcDateTime = Annotated[datetime, AfterValidator(_ensure_utc)]


class CamelModel(BaseModel):
    """Wire model using camelCase keys; snake_case names are accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_record(self) -> dict:
        """Dump to the JSON-ready dict stored in a collection."""
        return self.model_dump(by_alias=True, mode="json")

    def to_changes(self) -> dict:
        """Dump only the fields the client actually sent."""
        return self.model_dump(by_alias=True, mode="json", exclude_unset=True, exclude_none=True)


class StoredRecord(CamelModel):
    """Fields assigned by the server to every record."""

    id: str
    created_at: str
    updated_at: str


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""
    error: str
