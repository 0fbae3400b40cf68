from __future__ import annotations

from typing import Any, Dict, List, Optional

from tracker_mcp.client import TrackerClient
from tracker_mcp.models import Label, Story, StoryState, StoryType
from tracker_mcp.query import StoriesQuery
from tracker_mcp.tools._common import dump, require_text

MAX_LIMIT = 500


def _story_summary(story: Story) -> Dict[str, Any]:
    return {
        "id": story.id,
        "name": story.name,
        "story_type": story.story_type.value if story.story_type else None,
        "current_state": story.current_state.value if story.current_state else None,
        "estimate": story.estimate,
        "labels": [label.name for label in story.labels or [] if label.name],
        "url": story.url,
    }


async def get_story(client: TrackerClient, story_id: int) -> Dict[str, Any]:
    """Fetch a single story by its global id."""
    story = await client.story(story_id)
    return dump(story)


async def list_stories(
    client: TrackerClient,
    project_id: int,
    *,
    state: Optional[str] = None,
    label: Optional[str] = None,
    filters: Optional[List[str]] = None,
    limit: int = 0,
    offset: int = 0,
) -> Dict[str, Any]:
    """
    List stories in a project.
    - state: one of unscheduled/planned/started/finished/delivered/accepted/rejected
    - filters: Tracker search clauses, e.g. ["owner:dv", "state:started"]
    - limit/offset: page window (limit 0 uses the server default)

    Returns:
        {
            "items": [{"id", "name", "story_type", "current_state", ...}, ...],
            "pagination": {"total", "offset", "limit", "returned"},
            "next_offset": int | None,
        }
    """
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if limit < 0:
        raise ValueError("limit must be >= 0")

    query = StoriesQuery(
        state=StoryState(state) if state else None,
        label=label or "",
        filter=[f for f in (filters or []) if f and f.strip()],
        limit=min(limit, MAX_LIMIT),
        offset=offset,
    )
    stories, pagination = await client.in_project(project_id).list_stories(query)

    return {
        "items": [_story_summary(s) for s in stories],
        "pagination": pagination.model_dump(),
        "next_offset": pagination.next_offset,
    }


async def create_story(
    client: TrackerClient,
    project_id: int,
    name: str,
    *,
    description: Optional[str] = None,
    story_type: Optional[str] = None,
    current_state: Optional[str] = None,
    estimate: Optional[int] = None,
    labels: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Create a story in a project and return it as stored by Tracker."""
    story = Story(
        name=require_text(name, "name"),
        description=description or None,
        story_type=StoryType(story_type) if story_type else None,
        current_state=StoryState(current_state) if current_state else None,
        estimate=estimate,
        labels=[Label(name=n) for n in labels] if labels else None,
    )
    created = await client.in_project(project_id).create_story(story)
    return dump(created)


async def update_story(
    client: TrackerClient,
    project_id: int,
    story_id: int,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    story_type: Optional[str] = None,
    current_state: Optional[str] = None,
    estimate: Optional[int] = None,
) -> Dict[str, Any]:
    """Update the given fields of a story; omitted fields are left unchanged."""
    changes = Story(
        id=story_id,
        name=name,
        description=description,
        story_type=StoryType(story_type) if story_type else None,
        current_state=StoryState(current_state) if current_state else None,
        estimate=estimate,
    )
    if changes.to_payload() == {"id": story_id}:
        raise ValueError("No changes provided; pass at least one field to update.")

    updated = await client.in_project(project_id).update_story(changes)
    return dump(updated)


async def delete_story(
    client: TrackerClient, project_id: int, story_id: int
) -> Dict[str, Any]:
    """Delete a story."""
    await client.in_project(project_id).delete_story(story_id)
    return {"story_id": story_id, "deleted": True}


async def deliver_story(
    client: TrackerClient,
    project_id: int,
    story_id: int,
    *,
    comment: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Mark a story delivered, optionally leaving a comment afterwards.
    The comment is only posted when delivery succeeded.
    """
    project = client.in_project(project_id)
    text = (comment or "").strip()
    if text:
        await project.deliver_story_with_comment(story_id, text)
    else:
        await project.deliver_story(story_id)

    return {
        "story_id": story_id,
        "current_state": StoryState.DELIVERED.value,
        "commented": bool(text),
    }
