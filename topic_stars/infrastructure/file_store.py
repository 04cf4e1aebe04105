"""Flat-file implementation of the two cache slots."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union
from topic_stars.domain.cache_store_interface import CacheSlot, ICacheStore
from topic_stars.domain.errors import CacheWriteError


logger = logging.getLogger(__name__)


class FileCacheStore(ICacheStore):
    """Stores the payload and the timestamp as two plain files.
    
    Each write goes to a temporary file in the target directory and is then
    renamed over the slot, so a slot is never observed half-written.
    No locking: concurrent invocations may interleave.
    """
    
    def __init__(self, data_path: Union[str, Path], timestamp_path: Union[str, Path]):
        """Initialize file store.
        
        Args:
            data_path: File holding the JSON payload
            timestamp_path: File holding the write time in milliseconds
        """
        self._paths: Dict[CacheSlot, Path] = {
            CacheSlot.DATA: Path(data_path),
            CacheSlot.TIMESTAMP: Path(timestamp_path),
        }
    
    def path(self, slot: CacheSlot) -> Path:
        return self._paths[slot]
    
    def read(self, slot: CacheSlot) -> Optional[bytes]:
        path = self._paths[slot]
        try:
            return path.read_bytes()
        except OSError as e:
            logger.debug(f"Cache slot {slot.value} unreadable at {path}: {e}")
            return None
    
    def write(self, slot: CacheSlot, data: bytes) -> None:
        path = self._paths[slot]
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise CacheWriteError(f"Could not write {path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug(f"Could not remove temporary file {tmp_name}")
        logger.debug(f"Wrote {len(data)} bytes to cache slot {slot.value}")
    
    def status(self) -> Dict[str, Optional[int]]:
        """Size in bytes of each slot file, None when it does not exist."""
        sizes: Dict[str, Optional[int]] = {}
        for slot, path in self._paths.items():
            try:
                sizes[slot.value] = path.stat().st_size
            except OSError:
                sizes[slot.value] = None
        return sizes
