from __future__ import annotations

from typing import Any, Dict, List

from tracker_mcp.client import TrackerClient


def _norm(value: Any) -> str:
    return str(value or "").strip().casefold()


async def list_project_memberships(
    client: TrackerClient,
    project_id: int,
    *,
    sort: bool = False,
) -> Dict[str, Any]:
    """
    List the people who are members of a project.
    Returns: {items, total}
    Each item: {membership_id, person_id, name, username, initials, email}
    """
    memberships = await client.in_project(project_id).list_memberships()

    items: List[Dict[str, Any]] = []
    for m in memberships:
        person = m.person
        items.append(
            {
                "membership_id": m.id,
                "person_id": person.id if person else None,
                "name": person.name if person else None,
                "username": person.username if person else None,
                "initials": person.initials if person else None,
                "email": person.email if person else None,
            }
        )

    if sort:
        items.sort(key=lambda i: (_norm(i.get("name")), i.get("person_id") or 0))

    return {"items": items, "total": len(items)}
