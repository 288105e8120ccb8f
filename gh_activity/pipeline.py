"""Filter, sort and truncate a list of events."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, time
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from gh_activity.models.events import EventRecord

OLDEST = datetime.min.replace(tzinfo=UTC)

SortKey = Literal["date", "type"]


class PipelineOptions(BaseModel):
    """Options for process(). Unset options leave the events untouched."""

    filter_type: str | None = Field(default=None, description="Keep only this exact event type")
    sort_key: SortKey | None = Field(default=None, description="'date' (newest first) or 'type'")
    limit: int | None = Field(default=None, ge=0, description="Keep at most this many events")
    from_date: date | None = Field(default=None, description="Earliest day to keep, inclusive")
    to_date: date | None = Field(default=None, description="Latest day to keep, inclusive")

    @field_validator("filter_type", mode="before")
    @classmethod
    def blank_filter_is_none(cls, v: str | None) -> str | None:
        return v or None


def _sort_timestamp(event: EventRecord) -> datetime:
    return event.created or OLDEST


def _in_window(event: EventRecord, options: PipelineOptions) -> bool:
    created = event.created
    if created is None:
        return False
    if options.from_date and created < datetime.combine(options.from_date, time.min, UTC):
        return False
    if options.to_date and created > datetime.combine(options.to_date, time.max, UTC):
        return False
    return True


def filter_events(events: Sequence[EventRecord], options: PipelineOptions) -> list[EventRecord]:
    result = list(events)
    if options.filter_type is not None:
        result = [e for e in result if e.type == options.filter_type]
    if options.from_date or options.to_date:
        result = [e for e in result if _in_window(e, options)]
    return result


def sort_events(events: Sequence[EventRecord], sort_key: SortKey | None) -> list[EventRecord]:
    if sort_key == "date":
        # Stable with reverse=True, so equal timestamps keep API order
        return sorted(events, key=_sort_timestamp, reverse=True)
    if sort_key == "type":
        return sorted(events, key=lambda e: e.type)
    return list(events)


def process(
    events: Sequence[EventRecord], options: PipelineOptions | None = None
) -> list[EventRecord]:
    """Apply filter, then sort, then truncate. The input is not modified."""
    options = options or PipelineOptions()
    result = sort_events(filter_events(events, options), options.sort_key)
    if options.limit is not None:
        result = result[: options.limit]
    return result
