import time

from tracker_mcp.client import TrackerClient
from tracker_mcp.tools._common import dump


async def whoami(client: TrackerClient) -> dict:
    """
    Connectivity and latency check against Pivotal Tracker.
    Returns status plus the authenticated user's profile.
    """
    start = time.perf_counter()

    me = await client.current_user()

    latency_ms = (time.perf_counter() - start) * 1000

    return {
        "status": "ok",
        "latency_ms": round(latency_ms, 2),
        "user": dump(me),
        "instance_url": client.base_url,
    }
