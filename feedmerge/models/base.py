"""Base model class for persisted models."""

from datetime import datetime, timezone

import pendulum
from pydantic import BaseModel, ConfigDict

EPOCH = pendulum.from_timestamp(0, tz="UTC")


def format_instant(value: datetime) -> str:
    """Format an instant as UTC ISO-8601 with milliseconds and a trailing Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class WireModel(BaseModel):
    """Base model for everything written to the published collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
