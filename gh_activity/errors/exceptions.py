"""Exception taxonomy for activity retrieval."""


class ActivityError(Exception):
    """Base class for every failure raised by gh_activity."""


class NetworkError(ActivityError):
    """Transport-level failure (DNS, refused or reset connection, timeout)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Network error while requesting {url}: {cause}")


class RequestFailed(ActivityError):
    """The API answered with a non-200 status after retries were exhausted."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with status code {status_code}")


class UnknownIdentity(RequestFailed):
    """The API does not know the requested user (HTTP 404)."""

    def __init__(self, url: str | None = None, identity: str | None = None) -> None:
        super().__init__(404, url)
        self.identity = identity


class ParseError(ActivityError):
    """A response body was not the JSON shape we expected."""


class CacheCorrupt(ActivityError):
    """The persisted cache index could not be parsed."""


class UnsupportedFormat(ActivityError):
    """Export was asked for a format we cannot write."""

    def __init__(self, fmt: str) -> None:
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt!r} (expected json, csv or md)")
