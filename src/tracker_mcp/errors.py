class TrackerClientError(Exception):
    """Base error for client failures."""


class RequestConstructionError(TrackerClientError):
    pass


class TransportError(TrackerClientError):
    pass


class AuthenticationError(TrackerClientError):
    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class RequestFailedError(TrackerClientError):
    def __init__(self, *, status_code: int, body: str = ""):
        super().__init__(f"request failed ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(TrackerClientError):
    pass


class HeaderParseError(TrackerClientError):
    def __init__(self, *, header: str, value: str):
        super().__init__(f"invalid pagination header {header}: {value!r}")
        self.header = header
        self.value = value


__all__ = [
    "TrackerClientError",
    "RequestConstructionError",
    "TransportError",
    "AuthenticationError",
    "RequestFailedError",
    "DecodeError",
    "HeaderParseError",
]
