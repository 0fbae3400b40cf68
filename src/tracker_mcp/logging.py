"""
logfmt output for tracker-mcp.

Request records from the connection carry method/path/status/duration_ms
extras; failures logged with exc_info additionally render the typed client
error (HTTP status for RequestFailedError, header name for HeaderParseError).
"""

import logging

from .errors import HeaderParseError, RequestFailedError, TrackerClientError

REQUEST_FIELDS = ("tool", "method", "path", "status", "duration_ms", "project_id")


def _quote(value: object) -> str:
    text = str(value)
    if not text or any(c in text for c in ' ="'):
        return '"' + text.replace('"', '\\"') + '"'
    return text


def _error_fields(exc: BaseException) -> list[tuple[str, object]]:
    if not isinstance(exc, TrackerClientError):
        return [("error", type(exc).__name__)]

    fields: list[tuple[str, object]] = [("error", type(exc).__name__)]
    if isinstance(exc, RequestFailedError):
        fields.append(("status", exc.status_code))
    elif isinstance(exc, HeaderParseError):
        fields.append(("header", exc.header))
    fields.append(("detail", str(exc)))
    return fields


class LogfmtFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        pairs: list[tuple[str, object]] = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage()),
        ]
        pairs.extend(
            (key, getattr(record, key))
            for key in REQUEST_FIELDS
            if getattr(record, key, None) is not None
        )

        exc = record.exc_info[1] if record.exc_info else None
        if exc is not None:
            seen = {key for key, _ in pairs}
            pairs.extend(f for f in _error_fields(exc) if f[0] not in seen)

        return " ".join(f"{key}={_quote(value)}" for key, value in pairs)


def setup_logging(level: str = "INFO") -> None:
    """Route all records through one logfmt stream handler; safe to call twice."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    level_no = logging.getLevelName((level or "INFO").upper())
    root.setLevel(level_no if isinstance(level_no, int) else logging.INFO)


__all__ = ["setup_logging", "LogfmtFormatter", "REQUEST_FIELDS"]
