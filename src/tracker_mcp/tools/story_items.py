from __future__ import annotations

from typing import Any, Dict, Optional

from tracker_mcp.client import TrackerClient
from tracker_mcp.models import Blocker, Comment, Task
from tracker_mcp.query import ActivityQuery
from tracker_mcp.tools._common import dump, dump_all, require_text


async def list_story_tasks(
    client: TrackerClient, project_id: int, story_id: int
) -> Dict[str, Any]:
    """List the tasks of a story, in position order."""
    tasks = await client.in_project(project_id).list_story_tasks(story_id)
    tasks = sorted(tasks, key=lambda t: t.position or 0)
    return {
        "items": dump_all(tasks),
        "complete": sum(1 for t in tasks if t.complete),
        "total": len(tasks),
    }


async def add_task(
    client: TrackerClient,
    project_id: int,
    story_id: int,
    description: str,
    *,
    position: Optional[int] = None,
    complete: bool = False,
) -> Dict[str, Any]:
    """Add a task to a story."""
    task = Task(
        description=require_text(description, "description"),
        position=position,
        complete=complete,
    )
    created = await client.in_project(project_id).create_task(story_id, task)
    return dump(created)


async def list_story_comments(
    client: TrackerClient, project_id: int, story_id: int
) -> Dict[str, Any]:
    """List the comments on a story."""
    comments = await client.in_project(project_id).list_story_comments(story_id)
    return {"items": dump_all(comments), "total": len(comments)}


async def add_comment(
    client: TrackerClient, project_id: int, story_id: int, text: str
) -> Dict[str, Any]:
    """Post a comment on a story."""
    comment = Comment(text=require_text(text, "text"))
    created = await client.in_project(project_id).create_comment(story_id, comment)
    return dump(created)


async def add_blocker(
    client: TrackerClient, project_id: int, story_id: int, description: str
) -> Dict[str, Any]:
    """Record a blocker on a story."""
    blocker = Blocker(description=require_text(description, "description"))
    created = await client.in_project(project_id).create_blocker(story_id, blocker)
    return dump(created)


async def list_story_activity(
    client: TrackerClient,
    project_id: int,
    story_id: int,
    *,
    limit: int = 0,
    offset: int = 0,
    since_version: int = 0,
    occurred_before: int = 0,
    occurred_after: int = 0,
) -> Dict[str, Any]:
    """
    List activity on a story, newest first.
    occurred_before/occurred_after are epoch milliseconds.
    """
    if offset < 0:
        raise ValueError("offset must be >= 0")

    query = ActivityQuery(
        limit=limit,
        offset=offset,
        since_version=since_version,
        occurred_before=occurred_before,
        occurred_after=occurred_after,
    )
    activity = await client.in_project(project_id).list_story_activity(story_id, query)
    return {
        "items": [
            {
                "kind": a.kind,
                "guid": a.guid,
                "project_version": a.project_version,
                "message": a.message,
                "highlight": a.highlight,
                "occurred_at": a.occurred_at.isoformat() if a.occurred_at else None,
            }
            for a in activity
        ],
        "total": len(activity),
    }
