import pytest
import respx
from httpx import Response
from tracker_mcp.tools.me import whoami

from conftest import API, BASE_URL


@pytest.mark.asyncio
@respx.mock
async def test_whoami(client, load_fixture):
    respx.get(f"{API}/me").mock(return_value=Response(200, json=load_fixture("me.json")))

    async with client:
        data = await whoami(client)

    assert data["status"] == "ok"
    assert data["latency_ms"] >= 0
    assert data["user"]["username"] == "vader"
    assert data["instance_url"] == BASE_URL
