"""tracker_mcp package exports."""

from .client import TrackerClient
from .connection import DEFAULT_BASE_URL, Connection
from .errors import (
    AuthenticationError,
    DecodeError,
    HeaderParseError,
    RequestConstructionError,
    RequestFailedError,
    TrackerClientError,
    TransportError,
)
from .models import (
    Activity,
    Blocker,
    Comment,
    Label,
    Me,
    NewStory,
    Pagination,
    Person,
    Project,
    ProjectMembership,
    Story,
    StoryState,
    StoryType,
    Task,
    TimeZone,
)
from .project_client import ProjectClient
from .query import ActivityQuery, CommentsQuery, Query, StoriesQuery, TaskQuery

__all__ = [
    # Clients
    "TrackerClient",
    "ProjectClient",
    "Connection",
    "DEFAULT_BASE_URL",
    # Exceptions
    "TrackerClientError",
    "RequestConstructionError",
    "TransportError",
    "AuthenticationError",
    "RequestFailedError",
    "DecodeError",
    "HeaderParseError",
    # Queries
    "Query",
    "StoriesQuery",
    "ActivityQuery",
    "TaskQuery",
    "CommentsQuery",
    # Resources
    "Activity",
    "Blocker",
    "Comment",
    "Label",
    "Me",
    "NewStory",
    "Pagination",
    "Person",
    "Project",
    "ProjectMembership",
    "Story",
    "StoryState",
    "StoryType",
    "Task",
    "TimeZone",
]
