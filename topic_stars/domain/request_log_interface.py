"""Request log interface (port) for fetch diagnostics."""
from abc import ABC, abstractmethod
from topic_stars.domain.models import RequestLogEntry


class IRequestLog(ABC):
    """Append-only sink for request log entries. Never read back."""
    
    @abstractmethod
    def append(self, entry: RequestLogEntry) -> None:
        """Append one entry. Implementations must not raise."""
        pass
