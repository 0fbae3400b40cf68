from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

from .connection import Connection, Params
from .models import (
    Activity,
    Blocker,
    Comment,
    NewStory,
    Pagination,
    ProjectMembership,
    Story,
    StoryState,
    Task,
)
from .query import ActivityQuery, CommentsQuery, StoriesQuery, TaskQuery


class ProjectClient:
    """Operations under /projects/{id}. Holds no per-call state."""

    def __init__(self, project_id: int, conn: Connection):
        self.id = project_id
        self.conn = conn

    def _path(self, path: str) -> str:
        return f"/projects/{self.id}{path}"

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        json: Any = None,
        out: Any = None,
        tool: Optional[str] = None,
    ) -> Tuple[Any, Pagination]:
        return await self.conn.request(
            method, self._path(path), params=params, json=json, out=out, tool=tool
        )

    # --- Listing ---

    async def list_stories(
        self, query: Optional[StoriesQuery] = None
    ) -> Tuple[List[Story], Pagination]:
        stories, pagination = await self._call(
            "GET", "/stories", params=query, out=List[Story], tool="list_stories"
        )
        return stories, pagination

    async def list_memberships(self) -> List[ProjectMembership]:
        memberships, _ = await self._call(
            "GET", "/memberships", out=List[ProjectMembership], tool="list_memberships"
        )
        return memberships

    async def list_story_activity(
        self, story_id: int, query: Optional[ActivityQuery] = None
    ) -> List[Activity]:
        activity, _ = await self._call(
            "GET",
            f"/stories/{story_id}/activity",
            params=query,
            out=List[Activity],
            tool="list_story_activity",
        )
        return activity

    async def list_story_tasks(
        self, story_id: int, query: Optional[TaskQuery] = None
    ) -> List[Task]:
        tasks, _ = await self._call(
            "GET",
            f"/stories/{story_id}/tasks",
            params=query,
            out=List[Task],
            tool="list_story_tasks",
        )
        return tasks

    async def list_story_comments(
        self, story_id: int, query: Optional[CommentsQuery] = None
    ) -> List[Comment]:
        comments, _ = await self._call(
            "GET",
            f"/stories/{story_id}/comments",
            params=query,
            out=List[Comment],
            tool="list_story_comments",
        )
        return comments

    # --- Delivery ---

    async def deliver_story(self, story_id: int) -> None:
        await self._call(
            "PUT",
            f"/stories/{story_id}",
            json={"current_state": StoryState.DELIVERED.value},
            tool="deliver_story",
        )

    async def deliver_story_with_comment(self, story_id: int, text: str) -> None:
        """
        Deliver the story, then comment on it.
        The comment is only posted once delivery succeeded; a failed comment
        leaves the story delivered.
        """
        await self.deliver_story(story_id)
        await self._call(
            "POST",
            f"/stories/{story_id}/comments",
            json={"text": text},
            tool="deliver_story_with_comment",
        )

    # --- Stories ---

    async def create_story(self, story: Union[Story, NewStory]) -> Story:
        created, _ = await self._call(
            "POST", "/stories", json=story.to_payload(), out=Story, tool="create_story"
        )
        return created

    async def update_story(self, story: Story) -> Story:
        if story.id is None:
            raise ValueError("story.id is required to update a story.")
        updated, _ = await self._call(
            "PUT",
            f"/stories/{story.id}",
            json=story.to_payload(),
            out=Story,
            tool="update_story",
        )
        return updated

    async def delete_story(self, story_id: int) -> None:
        await self._call("DELETE", f"/stories/{story_id}", tool="delete_story")

    # --- Story children ---

    async def create_task(self, story_id: int, task: Task) -> Task:
        created, _ = await self._call(
            "POST",
            f"/stories/{story_id}/tasks",
            json=task.to_payload(),
            out=Task,
            tool="create_task",
        )
        return created

    async def create_comment(self, story_id: int, comment: Comment) -> Comment:
        created, _ = await self._call(
            "POST",
            f"/stories/{story_id}/comments",
            json=comment.to_payload(),
            out=Comment,
            tool="create_comment",
        )
        return created

    async def create_blocker(self, story_id: int, blocker: Blocker) -> Blocker:
        created, _ = await self._call(
            "POST",
            f"/stories/{story_id}/blockers",
            json=blocker.to_payload(),
            out=Blocker,
            tool="create_blocker",
        )
        return created
