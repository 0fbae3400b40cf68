"""
Shared helpers for shaping tool output.
"""

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel


def dump(model: BaseModel) -> Dict[str, Any]:
    """JSON-ready dict without unset (None) fields."""
    return model.model_dump(mode="json", exclude_none=True)


def dump_all(models: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [dump(m) for m in models]


def require_text(value: str, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{field} must not be empty.")
    return text
