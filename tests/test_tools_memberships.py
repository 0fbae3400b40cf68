import pytest
import respx
from httpx import Response
from tracker_mcp.tools.memberships import list_project_memberships

from conftest import API


@pytest.mark.asyncio
@respx.mock
async def test_list_project_memberships(client, load_fixture):
    respx.get(f"{API}/projects/99/memberships").mock(
        return_value=Response(200, json=load_fixture("project_memberships.json"))
    )

    async with client:
        data = await list_project_memberships(client, 99)

    assert data["total"] == 3
    assert data["items"][0] == {
        "membership_id": 100,
        "person_id": 101,
        "name": "Darth Vader",
        "username": "vader",
        "initials": "DV",
        "email": "vader@deathstar.mil",
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_project_memberships_sorted(client, load_fixture):
    respx.get(f"{API}/projects/99/memberships").mock(
        return_value=Response(200, json=load_fixture("project_memberships.json"))
    )

    async with client:
        data = await list_project_memberships(client, 99, sort=True)

    assert [i["name"] for i in data["items"]] == [
        "Conan Antonio Motti",
        "Darth Vader",
        "Wilhuff Tarkin",
    ]


@pytest.mark.asyncio
@respx.mock
async def test_membership_without_person(client):
    respx.get(f"{API}/projects/99/memberships").mock(
        return_value=Response(200, json=[{"id": 1}])
    )

    async with client:
        data = await list_project_memberships(client, 99)

    assert data["items"][0]["membership_id"] == 1
    assert data["items"][0]["person_id"] is None
