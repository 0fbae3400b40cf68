import json

import pytest
import respx
from httpx import Response
from tracker_mcp.errors import RequestFailedError
from tracker_mcp.tools.stories import (
    create_story,
    delete_story,
    deliver_story,
    get_story,
    list_stories,
    update_story,
)

from conftest import API

PROJECT = f"{API}/projects/99"


@pytest.mark.asyncio
@respx.mock
async def test_get_story(client, load_fixture):
    respx.get(f"{API}/stories/560").mock(
        return_value=Response(200, json=load_fixture("story.json"))
    )

    async with client:
        data = await get_story(client, 560)

    assert data["id"] == 560
    assert data["story_type"] == "bug"
    assert data["created_at"] == "2015-07-20T22:50:50Z"
    assert "estimate" not in data


@pytest.mark.asyncio
@respx.mock
async def test_list_stories_summarises_and_paginates(client, load_fixture):
    route = respx.get(f"{PROJECT}/stories").mock(
        return_value=Response(
            200,
            json=load_fixture("stories.json"),
            headers={
                "X-Tracker-Pagination-Total": "10",
                "X-Tracker-Pagination-Offset": "0",
                "X-Tracker-Pagination-Limit": "4",
                "X-Tracker-Pagination-Returned": "4",
            },
        )
    )

    async with client:
        data = await list_stories(
            client, 99, state="accepted", filters=["owner:dv", " "], limit=4
        )

    assert route.calls[0].request.url.query == (
        b"filter=owner%3Adv&limit=4&with_state=accepted"
    )
    assert data["items"][0] == {
        "id": 560,
        "name": "Tractor beam loses power intermittently",
        "story_type": "bug",
        "current_state": "accepted",
        "estimate": 3,
        "labels": ["some-label", "some-other-label"],
        "url": "https://www.pivotaltracker.com/story/show/560",
    }
    assert len(data["items"]) == 4
    assert data["pagination"] == {"total": 10, "offset": 0, "limit": 4, "returned": 4}
    assert data["next_offset"] == 4


@pytest.mark.asyncio
async def test_list_stories_rejects_bad_input(client):
    async with client:
        with pytest.raises(ValueError):
            await list_stories(client, 99, offset=-1)
        with pytest.raises(ValueError):
            await list_stories(client, 99, state="sideways")


@pytest.mark.asyncio
@respx.mock
async def test_create_story(client):
    route = respx.post(f"{PROJECT}/stories").mock(
        return_value=Response(
            200,
            json={"id": 7, "project_id": 99, "name": "New", "story_type": "feature"},
        )
    )

    async with client:
        data = await create_story(
            client, 99, "New", story_type="feature", labels=["ui"]
        )

    assert json.loads(route.calls[0].request.content) == {
        "name": "New",
        "story_type": "feature",
        "labels": [{"name": "ui"}],
    }
    assert data == {"id": 7, "project_id": 99, "name": "New", "story_type": "feature"}


@pytest.mark.asyncio
async def test_create_story_requires_name(client):
    async with client:
        with pytest.raises(ValueError):
            await create_story(client, 99, "  ")


@pytest.mark.asyncio
@respx.mock
async def test_update_story(client):
    route = respx.put(f"{PROJECT}/stories/7").mock(
        return_value=Response(200, json={"id": 7, "current_state": "started"})
    )

    async with client:
        data = await update_story(client, 99, 7, current_state="started")

    assert json.loads(route.calls[0].request.content) == {
        "id": 7,
        "current_state": "started",
    }
    assert data["current_state"] == "started"


@pytest.mark.asyncio
async def test_update_story_without_changes(client):
    async with client:
        with pytest.raises(ValueError, match="No changes"):
            await update_story(client, 99, 7)


@pytest.mark.asyncio
@respx.mock
async def test_delete_story(client):
    respx.delete(f"{PROJECT}/stories/7").mock(return_value=Response(204))

    async with client:
        data = await delete_story(client, 99, 7)

    assert data == {"story_id": 7, "deleted": True}


@pytest.mark.asyncio
@respx.mock
async def test_deliver_story_without_comment(client):
    put = respx.put(f"{PROJECT}/stories/7").mock(return_value=Response(200, text=""))
    post = respx.post(f"{PROJECT}/stories/7/comments").mock(
        return_value=Response(201, text="")
    )

    async with client:
        data = await deliver_story(client, 99, 7)

    assert put.called
    assert not post.called
    assert data == {"story_id": 7, "current_state": "delivered", "commented": False}


@pytest.mark.asyncio
@respx.mock
async def test_deliver_story_with_comment(client):
    respx.put(f"{PROJECT}/stories/7").mock(return_value=Response(200, text=""))
    post = respx.post(f"{PROJECT}/stories/7/comments").mock(
        return_value=Response(201, text="")
    )

    async with client:
        data = await deliver_story(client, 99, 7, comment="Ready for review")

    assert json.loads(post.calls[0].request.content) == {"text": "Ready for review"}
    assert data["commented"] is True


@pytest.mark.asyncio
@respx.mock
async def test_deliver_story_failure_propagates(client):
    respx.put(f"{PROJECT}/stories/7").mock(return_value=Response(403, text="no"))

    async with client:
        with pytest.raises(RequestFailedError):
            await deliver_story(client, 99, 7, comment="x")
