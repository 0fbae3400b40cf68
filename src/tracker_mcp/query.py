"""
Query parameter encoding for list endpoints.

Each query model emits only the fields that differ from their zero value,
keyed in sorted order so the encoded string is stable for equal queries.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict

from .models import StoryState


def format_timestamp(value: datetime) -> str:
    """
    RFC 3339 with second precision.
    Naive datetimes are taken as UTC; a zero offset renders as 'Z'.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.replace(microsecond=0)
    if value.utcoffset() == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat(timespec="seconds")


class Query(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def _fields(self) -> Dict[str, str]:
        return {}

    def params(self) -> Dict[str, str]:
        return dict(sorted(self._fields().items()))

    def encode(self) -> str:
        return urlencode(list(self.params().items()))


class StoriesQuery(Query):
    state: Optional[StoryState] = None
    label: str = ""
    filter: List[str] = []

    accepted_before: Optional[datetime] = None
    accepted_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    created_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None
    updated_after: Optional[datetime] = None

    limit: int = 0
    offset: int = 0

    def _fields(self) -> Dict[str, str]:
        params: Dict[str, str] = {}

        if self.state:
            params["with_state"] = StoryState(self.state).value
        if self.label:
            params["with_label"] = self.label
        if self.filter:
            params["filter"] = " ".join(self.filter)

        for name in (
            "accepted_before",
            "accepted_after",
            "created_before",
            "created_after",
            "updated_before",
            "updated_after",
        ):
            value = getattr(self, name)
            if value is not None:
                params[name] = format_timestamp(value)

        if self.limit:
            params["limit"] = str(self.limit)
        if self.offset:
            params["offset"] = str(self.offset)
        return params


class ActivityQuery(Query):
    limit: int = 0
    offset: int = 0
    # epoch milliseconds
    occurred_before: int = 0
    occurred_after: int = 0
    since_version: int = 0

    def _fields(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for name in (
            "limit",
            "offset",
            "occurred_before",
            "occurred_after",
            "since_version",
        ):
            value = getattr(self, name)
            if value:
                params[name] = str(value)
        return params


class TaskQuery(Query):
    pass


class CommentsQuery(Query):
    pass


__all__ = [
    "Query",
    "StoriesQuery",
    "ActivityQuery",
    "TaskQuery",
    "CommentsQuery",
    "format_timestamp",
]
