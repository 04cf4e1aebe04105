"""Fetch orchestrator deciding between the cached payload and a refresh."""
import json
import logging
from typing import Any, Dict, Optional
from topic_stars.application.cache_gate import CacheGate
from topic_stars.domain.cache_store_interface import CacheSlot, ICacheStore
from topic_stars.domain.errors import (
    CacheReadError,
    CacheWriteError,
    ConfigError,
    FetchFailure
)
from topic_stars.domain.github_interface import ITopicClient
from topic_stars.domain.models import (
    CacheRecord,
    RefreshOutcome,
    RequestLogEntry,
    TopicQuery
)
from topic_stars.domain.request_log_interface import IRequestLog


logger = logging.getLogger(__name__)


class FetchOrchestrator:
    """Application service for the read-or-refresh cache lifecycle.
    
    Reuses the cached payload while it is fresh and otherwise runs the topic
    query once. The timestamp slot is always written last and is the only
    signal that the payload is fresh.
    """
    
    def __init__(
        self,
        store: ICacheStore,
        request_log: IRequestLog,
        query: TopicQuery,
        ttl_millis: int,
        client: Optional[ITopicClient] = None
    ):
        """Initialize fetch orchestrator.
        
        Args:
            store: Cache slot storage implementation
            request_log: Sink for fetch attempt diagnostics
            query: Fixed topic query parameters
            ttl_millis: Maximum age of fresh data in milliseconds
            client: Topic client, or None when no access token is configured
        """
        self._store = store
        self._request_log = request_log
        self._query = query
        self._ttl_millis = ttl_millis
        self._client = client
    
    async def refresh_if_needed(self, now: int, force: bool = False) -> RefreshOutcome:
        """Return the cached record, refreshing it first when it is stale.
        
        Args:
            now: Current time in milliseconds since the epoch
            force: Refresh even if the cache is fresh
            
        Returns:
            RefreshOutcome with the record to present
            
        Raises:
            ConfigError: When a refresh is required but no client is configured
        """
        timestamp_raw = self._store.read(CacheSlot.TIMESTAMP)
        
        if not force and not CacheGate.is_expired(timestamp_raw, now, self._ttl_millis):
            try:
                record = self._load_record(timestamp_raw)
                logger.info(f"Using cached data written at {record.written_at}")
                return RefreshOutcome(record=record)
            except CacheReadError as e:
                logger.warning(f"Cache timestamp is fresh but payload is unusable: {e}")
        
        return await self._refresh(now)
    
    async def _refresh(self, now: int) -> RefreshOutcome:
        """Fetch once and persist the result."""
        if self._client is None:
            raise ConfigError("An access token is required to refresh the cache")
        
        request = self._query.variables()
        logger.info(f"Fetching repositories for topic '{self._query.name}'")
        
        try:
            payload = await self._client.fetch_topic(self._query)
        except FetchFailure as e:
            logger.error(f"Error fetching topic repositories: {e}")
            self._request_log.append(RequestLogEntry(
                message=e.message,
                request=e.request or request,
                error_kind=type(e).__name__,
                response=e.response
            ))
            return RefreshOutcome(record=self._last_known_good(), failure=e)
        
        self._request_log.append(RequestLogEntry(
            message="Request made successfully.",
            request=request,
            response=payload
        ))
        
        write_error = self._persist(payload, now)
        return RefreshOutcome(
            record=CacheRecord(payload=payload, written_at=now),
            fetched=True,
            write_error=write_error
        )
    
    def _persist(self, payload: Dict[str, Any], now: int) -> Optional[CacheWriteError]:
        """Write the payload, then the timestamp.
        
        Returns:
            The write error, or None if both slots were written
        """
        try:
            self._store.write(
                CacheSlot.DATA,
                json.dumps(payload, indent=2).encode("utf-8")
            )
        except CacheWriteError as e:
            logger.warning(f"Could not cache response data: {e}")
            return e
        
        try:
            self._store.write(CacheSlot.TIMESTAMP, str(now).encode("utf-8"))
        except CacheWriteError as e:
            # The old timestamp stays behind; it is never newer than the payload
            logger.warning(f"Response data cached but timestamp was not updated: {e}")
            return e
        
        logger.info(f"Cached response data at {now}")
        return None
    
    def _load_record(self, timestamp_raw: Optional[bytes]) -> CacheRecord:
        """Read the cached payload.
        
        Raises:
            CacheReadError: If the payload slot is missing or not a JSON object
        """
        raw = self._store.read(CacheSlot.DATA)
        if raw is None:
            raise CacheReadError("Cached payload is missing")
        
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise CacheReadError(f"Cached payload is not valid JSON: {e}") from e
        
        if not isinstance(payload, dict):
            raise CacheReadError("Cached payload is not a JSON object")
        
        return CacheRecord(
            payload=payload,
            written_at=CacheGate.parse_timestamp(timestamp_raw)
        )
    
    def _last_known_good(self) -> Optional[CacheRecord]:
        """Return the on-disk record, or None if there is none."""
        try:
            return self._load_record(self._store.read(CacheSlot.TIMESTAMP))
        except CacheReadError as e:
            logger.debug(f"No previous cache record available: {e}")
            return None
