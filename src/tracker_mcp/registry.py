"""
Binding of tracker_mcp.tools onto an MCP app.

Tools are the names exported by tracker_mcp.tools.__all__. Each must be a
coroutine function taking the TrackerClient first; anything else is a
programming error and fails registration instead of being skipped.
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Iterable, List, Sequence, get_type_hints

from .client import TrackerClient
from .errors import TrackerClientError

log = logging.getLogger("tracker_mcp.registry")

ClientSource = Callable[[], TrackerClient]


def exported_tools(namespace: Any = None) -> List[Callable]:
    """Resolve the tool callables listed in the namespace's __all__."""
    if namespace is None:
        from . import tools as namespace

    return [getattr(namespace, name) for name in namespace.__all__]


def _check_tool(func: Callable) -> List[inspect.Parameter]:
    if not inspect.iscoroutinefunction(func):
        raise TypeError(f"Tool {func.__name__} must be an async function")
    params = list(inspect.signature(func).parameters.values())
    if not params or params[0].name != "client":
        raise TypeError(f"Tool {func.__name__} must take 'client' as its first argument")
    return params


def bind_tool(func: Callable, get_client: ClientSource) -> Callable:
    """
    Wrap a tool so the caller never sees the client argument.
    The exposed signature is the tool's own minus 'client', with string
    annotations resolved so schema generation sees real types.
    TrackerClientError failures are logged with the tool name and re-raised.
    """
    params = _check_tool(func)
    hints = get_type_hints(func)
    exposed = inspect.Signature(
        [p.replace(annotation=hints.get(p.name, p.annotation)) for p in params[1:]],
        return_annotation=hints.get("return", inspect.Signature.empty),
    )

    @functools.wraps(func)
    async def call_with_client(*args, **kwargs):
        try:
            return await func(get_client(), *args, **kwargs)
        except TrackerClientError:
            log.warning("tool.failed", exc_info=True, extra={"tool": func.__name__})
            raise

    del call_with_client.__wrapped__
    call_with_client.__signature__ = exposed  # type: ignore[attr-defined]
    call_with_client.__annotations__ = {
        name: hints[name] for name in exposed.parameters if name in hints
    }
    if "return" in hints:
        call_with_client.__annotations__["return"] = hints["return"]
    return call_with_client


def register_tools(
    app,
    client: TrackerClient | ClientSource,
    functions: Sequence[Callable] | None = None,
) -> List[str]:
    """Register tools on an app exposing a .tool(name=...) decorator; return names."""
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    get_client: ClientSource = (
        (lambda: client) if isinstance(client, TrackerClient) else client
    )
    funcs: Iterable[Callable] = functions if functions is not None else exported_tools()

    names: List[str] = []
    for func in funcs:
        if func.__name__ in names:
            raise ValueError(f"Duplicate tool name detected: {func.__name__}")
        app.tool(name=func.__name__)(bind_tool(func, get_client))
        names.append(func.__name__)

    log.info("Registered %d tools", len(names))
    return names


__all__ = ["exported_tools", "bind_tool", "register_tools"]
