import logging
from typing import Optional

import httpx

from .config import load_env_config
from .connection import DEFAULT_BASE_URL, Connection
from .models import Me, Story
from .project_client import ProjectClient


class TrackerClient:
    """
    Entry point for the Pivotal Tracker v5 API.
    - Owns one httpx.AsyncClient shared by every call (unless one is passed in)
    - Operations on the current user and on stories by global id
    - in_project() hands out project-scoped clients over the same connection
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        token = token or ""
        base_url = (base_url or "").rstrip("/")

        if not token:
            raise ValueError("token must be provided.")
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
        )
        self.conn = Connection(
            token=token,
            http=self.http,
            base_url=base_url,
            logger=logger,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "TrackerClient":
        """Build a client from TRACKER_API_TOKEN / TRACKER_BASE_URL (and .env)."""
        token, base_url = load_env_config()
        if not token:
            raise ValueError("Missing TRACKER_API_TOKEN in environment.")
        kwargs.setdefault("base_url", base_url)
        return cls(token, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TrackerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def current_user(self) -> Me:
        me, _ = await self.conn.request("GET", "/me", out=Me, tool="current_user")
        return me

    async def story(self, story_id: int) -> Story:
        story, _ = await self.conn.request(
            "GET", f"/stories/{story_id}", out=Story, tool="story"
        )
        return story

    def in_project(self, project_id: int) -> ProjectClient:
        return ProjectClient(project_id, self.conn)
