"""Domain errors raised around the topic cache lifecycle."""
from typing import Any, Mapping, Optional


class TopicStarsError(Exception):
    """Base class for all topic-stars errors."""
    pass


class ConfigError(TopicStarsError):
    """Raised when required configuration is missing or invalid."""
    pass


class CacheReadError(TopicStarsError):
    """Raised when a cache slot cannot be read or decoded.

    Always recovered inside the orchestrator: an unreadable cache is an
    expired cache.
    """
    pass


class CacheWriteError(TopicStarsError):
    """Raised when a cache slot cannot be written."""
    pass


class PayloadFormatError(TopicStarsError):
    """Raised when a cached payload does not have the topic query shape."""
    pass


class FetchFailure(TopicStarsError):
    """Raised when the remote topic query fails.

    Carries the request variables and whatever response context GitHub
    returned so the failure can be written to the request log.
    """

    def __init__(
        self,
        message: str,
        request: Optional[Mapping[str, Any]] = None,
        errors: Optional[Any] = None,
        data: Optional[Any] = None
    ):
        super().__init__(message)
        self.message = message
        self.request = dict(request or {})
        self.errors = errors
        self.data = data

    @property
    def response(self) -> Optional[dict]:
        """Response context for logging, or None when nothing came back."""
        if self.errors is None and self.data is None:
            return None
        return {"errors": self.errors, "data": self.data}
