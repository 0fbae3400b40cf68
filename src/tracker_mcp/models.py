from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class StoryType(str, Enum):
    FEATURE = "feature"
    BUG = "bug"
    CHORE = "chore"
    RELEASE = "release"


class StoryState(str, Enum):
    UNSCHEDULED = "unscheduled"
    PLANNED = "planned"
    STARTED = "started"
    FINISHED = "finished"
    DELIVERED = "delivered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TrackerModel(BaseModel):
    """
    Base record for Tracker resources.
    Unknown response keys are ignored; request bodies omit fields that are
    still at their default value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


# --- People / Projects ---


class Person(TrackerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    initials: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None


class Me(Person):
    """The authenticated user, as returned by /me."""


class TimeZone(TrackerModel):
    kind: Optional[str] = None
    olson_name: Optional[str] = None
    offset: Optional[str] = None


class Project(TrackerModel):
    id: Optional[int] = None
    kind: Optional[str] = None
    name: Optional[str] = None
    version: Optional[int] = None
    iteration_length: Optional[int] = None
    week_start_day: Optional[str] = None
    point_scale: Optional[str] = None
    point_scale_is_custom: bool = False
    bugs_and_chores_are_estimatable: bool = False
    automatic_planning: bool = False
    enable_tasks: bool = False
    time_zone: Optional[TimeZone] = None
    velocity_averaged_over: Optional[int] = None
    number_of_done_iterations_to_show: Optional[int] = None
    has_google_domain: bool = False
    enable_incoming_emails: bool = False
    initial_velocity: Optional[int] = None
    public: bool = False
    atom_enabled: bool = False
    project_type: Optional[str] = None
    start_date: Optional[str] = None
    start_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    account_id: Optional[int] = None
    current_iteration_number: Optional[int] = None
    enable_following: bool = False


class ProjectMembership(TrackerModel):
    id: Optional[int] = None
    person: Optional[Person] = None


# --- Stories and their children ---


class Label(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    kind: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Blocker(TrackerModel):
    id: Optional[int] = None
    description: Optional[str] = None


class Comment(TrackerModel):
    id: Optional[int] = None
    text: Optional[str] = None


class Task(TrackerModel):
    id: Optional[int] = None
    story_id: Optional[int] = None
    description: Optional[str] = None
    complete: bool = False
    position: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Story(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    url: Optional[str] = None

    name: Optional[str] = None
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    current_state: Optional[StoryState] = None
    estimate: Optional[int] = None

    labels: Optional[List[Label]] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    blockers: Optional[List[Blocker]] = None


class NewStory(TrackerModel):
    """Create payload carrying nested tasks and owner/story references."""

    name: Optional[str] = None
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    current_state: Optional[StoryState] = None
    labels: Optional[List[Label]] = None
    tasks: Optional[List[Task]] = None
    story_ids: Optional[List[int]] = None
    owner_ids: Optional[List[int]] = None


class Activity(TrackerModel):
    kind: Optional[str] = None
    guid: Optional[str] = None
    project_version: Optional[int] = None
    message: Optional[str] = None
    highlight: Optional[str] = None
    changes: Optional[List[Any]] = None
    primary_resources: Optional[List[Any]] = None
    project: Optional[Any] = None
    performed_by: Optional[Any] = None
    occurred_at: Optional[datetime] = None


# --- Response metadata ---


class Pagination(BaseModel):
    total: int = 0
    offset: int = 0
    limit: int = 0
    returned: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def next_offset(self) -> Optional[int]:
        """Offset of the following page, or None when this page was the last."""
        if not self.limit:
            return None
        nxt = self.offset + self.returned
        return nxt if nxt < self.total else None


__all__ = [
    "StoryType",
    "StoryState",
    "TrackerModel",
    "Person",
    "Me",
    "TimeZone",
    "Project",
    "ProjectMembership",
    "Label",
    "Blocker",
    "Comment",
    "Task",
    "Story",
    "NewStory",
    "Activity",
    "Pagination",
]
