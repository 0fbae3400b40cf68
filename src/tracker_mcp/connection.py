import logging
import re
import time
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import (
    AuthenticationError,
    DecodeError,
    HeaderParseError,
    RequestConstructionError,
    RequestFailedError,
    TransportError,
)
from .models import Pagination
from .query import Query

DEFAULT_BASE_URL = "https://www.pivotaltracker.com"
API_PREFIX = "/services/v5"
TOKEN_HEADER = "X-TrackerToken"

PAGINATION_HEADERS = (
    ("total", "X-Tracker-Pagination-Total"),
    ("offset", "X-Tracker-Pagination-Offset"),
    ("limit", "X-Tracker-Pagination-Limit"),
    ("returned", "X-Tracker-Pagination-Returned"),
)

SUCCESS_STATUSES = frozenset({200, 201, 204})

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)

Params = Optional[Query]


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def encode_params(params: Params) -> str:
    return params.encode() if params is not None else ""


def parse_pagination(headers: httpx.Headers) -> Pagination:
    """Read the pagination headers; absent or empty headers count as zero."""
    values: Dict[str, int] = {}
    for field, header in PAGINATION_HEADERS:
        raw = headers.get(header) or ""
        if not raw:
            continue
        if not _INT_RE.fullmatch(raw):
            raise HeaderParseError(header=header, value=raw)
        values[field] = int(raw)
    return Pagination(**values)


class Connection:
    """
    Request construction and response decoding for the Tracker v5 API.
    - Adds the token header and resolves base URL + /services/v5 + path
    - Maps 401 and other non-success statuses onto typed errors
    - Decodes JSON bodies into pydantic types and reads pagination headers
    No retries; one HTTP round trip per execute().
    """

    def __init__(
        self,
        *,
        token: str,
        http: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        logger: Optional[logging.Logger] = None,
    ):
        self.token = token
        self.http = http
        self.base_url = (base_url or "").rstrip("/")
        self.log = logger or logging.getLogger("tracker_mcp.connection")

    def build_request(
        self,
        method: str,
        path: str,
        params: Params = None,
        *,
        json: Any = None,
    ) -> httpx.Request:
        raw_url = self.base_url + API_PREFIX + path
        query = encode_params(params)
        if query:
            raw_url += "?" + query

        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"failed to create request: {exc}") from exc

        if url.scheme not in ("http", "https") or not url.host:
            raise RequestConstructionError(
                f"failed to create request: invalid URL {raw_url!r}"
            )

        return self.http.build_request(
            method.upper(),
            url,
            headers={TOKEN_HEADER: self.token},
            json=json,
        )

    async def execute(
        self,
        request: httpx.Request,
        out: Any = None,
        *,
        tool: Optional[str] = None,
    ) -> Tuple[Any, Pagination]:
        """
        Send the request and decode the response.
        - Raises TransportError if the call cannot be completed
        - Raises AuthenticationError on 401, RequestFailedError on other
          statuses outside 200/201/204
        - Raises HeaderParseError on a non-numeric pagination header
        - Raises DecodeError if `out` is given and the body does not decode
        Returns (decoded value or None, Pagination).
        """
        start = time.perf_counter()
        try:
            resp = await self.http.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"failed to make request: {exc}") from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "tracker.request",
            extra={
                "tool": tool,
                "method": request.method,
                "path": request.url.path,
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )

        if resp.status_code == 401:
            raise AuthenticationError()

        if resp.status_code not in SUCCESS_STATUSES:
            raise RequestFailedError(
                status_code=resp.status_code,
                body=resp.text or "",
            )

        pagination = parse_pagination(resp.headers)

        if out is None:
            return None, pagination

        return self._decode(resp, out), pagination

    @staticmethod
    def _decode(resp: httpx.Response, out: Any) -> Any:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DecodeError(f"invalid json response: {exc}") from exc

        try:
            return _adapter(out).validate_python(payload)
        except ValidationError as exc:
            raise DecodeError(f"invalid json response: {exc}") from exc

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        json: Any = None,
        out: Any = None,
        tool: Optional[str] = None,
    ) -> Tuple[Any, Pagination]:
        request = self.build_request(method, path, params, json=json)
        return await self.execute(request, out, tool=tool)


__all__ = [
    "Connection",
    "DEFAULT_BASE_URL",
    "API_PREFIX",
    "TOKEN_HEADER",
    "PAGINATION_HEADERS",
    "encode_params",
    "parse_pagination",
]
