"""
Tool namespace for tracker-mcp.

Every public coroutine here takes the TrackerClient as its first argument and
is registered with the MCP server by tracker_mcp.registry.
"""

from .me import whoami
from .memberships import list_project_memberships
from .stories import (
    create_story,
    delete_story,
    deliver_story,
    get_story,
    list_stories,
    update_story,
)
from .story_items import (
    add_blocker,
    add_comment,
    add_task,
    list_story_activity,
    list_story_comments,
    list_story_tasks,
)

__all__ = [
    "whoami",
    "list_project_memberships",
    "get_story",
    "list_stories",
    "create_story",
    "update_story",
    "delete_story",
    "deliver_story",
    "list_story_tasks",
    "add_task",
    "list_story_comments",
    "add_comment",
    "add_blocker",
    "list_story_activity",
]
