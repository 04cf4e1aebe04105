"""Domain models representing the topic query, its results and the cache."""
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from topic_stars.domain.errors import CacheWriteError, FetchFailure, PayloadFormatError


@dataclass(frozen=True)
class TopicQuery:
    """Fixed parameters of the topic query.

    These are configuration, not runtime input: one query shape per
    deployment.
    """
    name: str = "deno"
    repo_count: int = 10
    order_field: str = "STARGAZERS"
    direction: str = "DESC"
    language_count: int = 20

    def variables(self) -> Dict[str, Any]:
        """Returns the GraphQL variable values for this query."""
        return {
            "direction": self.direction,
            "field": self.order_field,
            "languageCount": self.language_count,
            "name": self.name,
            "repoCount": self.repo_count,
        }


@dataclass(frozen=True)
class TopicRepository:
    """Immutable view of one repository edge of a topic query response."""
    name_with_owner: str
    stargazer_count: int
    description: Optional[str] = None
    languages: Tuple[str, ...] = ()

    @property
    def owner(self) -> str:
        return self.name_with_owner.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.name_with_owner.split("/", 1)[-1]

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> 'TopicRepository':
        """Builds a repository from a GraphQL ``Repository`` node.

        Raises:
            PayloadFormatError: If required fields are missing
        """
        try:
            name_with_owner = node["nameWithOwner"]
            stargazer_count = int(node["stargazerCount"])
        except (KeyError, TypeError, ValueError) as e:
            raise PayloadFormatError(f"Invalid repository node: {e}") from e

        language_edges = (node.get("languages") or {}).get("edges") or []
        languages = tuple(
            edge["node"]["name"]
            for edge in language_edges
            if edge and edge.get("node") and edge["node"].get("name")
        )

        return cls(
            name_with_owner=name_with_owner,
            stargazer_count=stargazer_count,
            description=node.get("description"),
            languages=languages
        )


@dataclass(frozen=True)
class CacheRecord:
    """The last successfully fetched payload and when it was written.

    ``written_at`` is milliseconds since the epoch, or None when the
    timestamp slot is missing or corrupt.
    """
    payload: Dict[str, Any]
    written_at: Optional[int] = None

    def repositories(self) -> List[TopicRepository]:
        """Extracts the repository entries from the payload.

        Raises:
            PayloadFormatError: If the payload is not a topic query response
        """
        try:
            edges = self.payload["topic"]["repositories"]["edges"]
        except (KeyError, TypeError) as e:
            raise PayloadFormatError(f"Payload is not a topic response: {e}") from e

        if not isinstance(edges, list):
            raise PayloadFormatError("Repository edges must be a list")

        repositories = []
        for edge in edges:
            if not isinstance(edge, dict) or not isinstance(edge.get("node"), dict):
                raise PayloadFormatError("Repository edge without a node")
            repositories.append(TopicRepository.from_node(edge["node"]))
        return repositories


@dataclass(frozen=True)
class RefreshOutcome:
    """Result of a refresh attempt.

    On failure ``record`` holds the last-known-good record, if there is one.
    """
    record: Optional[CacheRecord]
    fetched: bool = False
    failure: Optional[FetchFailure] = None
    write_error: Optional[CacheWriteError] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class RequestLogEntry:
    """Fixed-shape diagnostic record for one fetch attempt."""
    message: str
    request: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[str] = None
    response: Optional[Any] = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_line(self) -> str:
        """Serializes the entry as a single JSON line with sorted keys."""
        return json.dumps(
            {
                "error_kind": self.error_kind,
                "message": self.message,
                "request": self.request,
                "response": self.response,
                "timestamp": self.timestamp,
            },
            sort_keys=True,
            default=str
        )
