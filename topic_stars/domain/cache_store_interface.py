"""Cache store interface (port) for the two persisted cache slots.

This is the port in hexagonal architecture that the infrastructure layer implements.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class CacheSlot(Enum):
    """Named slots of the persistent store."""
    DATA = "data"
    TIMESTAMP = "timestamp"


class ICacheStore(ABC):
    """Abstract interface for cache slot storage."""
    
    @abstractmethod
    def read(self, slot: CacheSlot) -> Optional[bytes]:
        """Read the raw contents of a slot.
        
        Returns:
            The slot contents, or None if the slot is absent or unreadable
        """
        pass
    
    @abstractmethod
    def write(self, slot: CacheSlot, data: bytes) -> None:
        """Replace the contents of a slot.
        
        Raises:
            CacheWriteError: If the slot could not be written
        """
        pass
