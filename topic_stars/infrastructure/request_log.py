"""Append-only request log file."""
import logging
from pathlib import Path
from typing import Union
from topic_stars.domain.models import RequestLogEntry
from topic_stars.domain.request_log_interface import IRequestLog


logger = logging.getLogger(__name__)


class FileRequestLog(IRequestLog):
    """Appends one JSON line per fetch attempt to a text file."""
    
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
    
    def append(self, entry: RequestLogEntry) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(entry.to_line() + "\n")
        except OSError as e:
            logger.warning(f"Could not write request log {self._path}: {e}")
