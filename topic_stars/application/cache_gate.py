"""Staleness decision for the topic cache."""
import re
from typing import Optional, Union


_TIMESTAMP_PATTERN = re.compile(r"[+-]?[0-9]+")


class CacheGate:
    """Pure decision of whether a cache timestamp is stale.
    
    Has no side effects, so it can be tested without file or network access.
    """
    
    @staticmethod
    def parse_timestamp(timestamp_text: Optional[Union[str, bytes]]) -> Optional[int]:
        """Parse timestamp slot contents as base-10 milliseconds.
        
        Returns:
            The timestamp, or None if it is absent or corrupt
        """
        if timestamp_text is None:
            return None
        if isinstance(timestamp_text, bytes):
            try:
                timestamp_text = timestamp_text.decode("utf-8")
            except UnicodeDecodeError:
                return None
        
        text = timestamp_text.strip()
        if not _TIMESTAMP_PATTERN.fullmatch(text):
            return None
        return int(text)
    
    @classmethod
    def is_expired(
        cls,
        timestamp_text: Optional[Union[str, bytes]],
        now: int,
        ttl_millis: int
    ) -> bool:
        """Decide whether the cache must be refreshed.
        
        A missing or corrupt timestamp is expired. A timestamp exactly
        ``ttl_millis`` old is still fresh.
        
        Args:
            timestamp_text: Contents of the timestamp slot, or None
            now: Current time in milliseconds since the epoch
            ttl_millis: Maximum age of fresh data in milliseconds
        """
        written_at = cls.parse_timestamp(timestamp_text)
        if written_at is None:
            return True
        return written_at + ttl_millis < now
