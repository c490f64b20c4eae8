"""Field types shared across response schemas."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import PlainSerializer


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


# Stored timestamps are naive UTC; the offset is added on the way out
UtcDatetime = Annotated[datetime, PlainSerializer(_as_utc)]
