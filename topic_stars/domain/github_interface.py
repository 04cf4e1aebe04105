"""GitHub API interface (port) for running the topic query.

This is the anti-corruption layer that shields the cache logic from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict
from topic_stars.domain.models import TopicQuery


class ITopicClient(ABC):
    """Abstract interface for the remote topic data source."""
    
    @abstractmethod
    async def fetch_topic(self, query: TopicQuery) -> Dict[str, Any]:
        """Run the topic query once.
        
        Args:
            query: Fixed topic query parameters
            
        Returns:
            The decoded response data
            
        Raises:
            FetchFailure: If the request fails or GitHub returns errors
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
