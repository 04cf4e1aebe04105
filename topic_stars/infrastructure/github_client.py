"""GitHub GraphQL API client for the topic repositories query."""
import asyncio
import logging
from typing import Any, Dict, Optional
import aiohttp
from gql import gql, Client
from gql.transport.aiohttp import AIOHTTPTransport
from gql.transport.exceptions import TransportError, TransportQueryError
from topic_stars.domain.errors import FetchFailure
from topic_stars.domain.github_interface import ITopicClient
from topic_stars.domain.models import TopicQuery


logger = logging.getLogger(__name__)


GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"


class GitHubTopicClient(ITopicClient):
    """GitHub GraphQL API client for one topic query per call.
    
    Implements the ITopicClient port. Makes a single attempt per call; every
    failure is reported as a FetchFailure.
    """
    
    # Repositories tagged with a topic, with their languages
    TOPIC_QUERY = gql("""
        query TopicRepositories(
            $direction: OrderDirection!
            $field: RepositoryOrderField!
            $languageCount: Int!
            $name: String!
            $repoCount: Int!
        ) {
            topic(name: $name) {
                repositories(first: $repoCount, orderBy: { field: $field, direction: $direction }) {
                    edges {
                        node {
                            description
                            languages(first: $languageCount) {
                                edges {
                                    node {
                                        name
                                    }
                                }
                            }
                            nameWithOwner
                            stargazerCount
                        }
                    }
                }
            }
        }
    """)
    
    def __init__(self, access_token: str, timeout_seconds: int = 30):
        """Initialize GitHub client.
        
        Args:
            access_token: GitHub personal access token
            timeout_seconds: Time limit for one query
        """
        self._access_token = access_token
        self._timeout_seconds = timeout_seconds
        self._transport: Optional[AIOHTTPTransport] = None
        self._client: Optional[Client] = None
    
    def _init_client(self) -> None:
        """Initialize the GraphQL client (lazy initialization)."""
        if self._client is None:
            headers = {"Authorization": f"Bearer {self._access_token}"}
            self._transport = AIOHTTPTransport(
                url=GITHUB_GRAPHQL_URL,
                headers=headers,
                ssl=True
            )
            self._client = Client(
                transport=self._transport,
                fetch_schema_from_transport=False,
                execute_timeout=self._timeout_seconds
            )
    
    async def fetch_topic(self, query: TopicQuery) -> Dict[str, Any]:
        """Run the topic query.
        
        Args:
            query: Fixed topic query parameters
            
        Returns:
            Response data with a non-null ``topic``
            
        Raises:
            FetchFailure: On transport, GraphQL, timeout or network errors
        """
        self._init_client()
        variables = query.variables()
        
        try:
            async with self._client as session:
                result = await session.execute(
                    self.TOPIC_QUERY,
                    variable_values=variables
                )
        except TransportQueryError as e:
            raise FetchFailure(
                f"GitHub returned errors: {e}",
                request=variables,
                errors=e.errors,
                data=e.data
            ) from e
        except asyncio.TimeoutError as e:
            raise FetchFailure(
                f"Request timed out after {self._timeout_seconds} seconds",
                request=variables
            ) from e
        except (TransportError, aiohttp.ClientError, OSError) as e:
            raise FetchFailure(f"Request failed: {e}", request=variables) from e
        
        return check_topic_response(result, variables)
    
    async def close(self) -> None:
        """Close the GraphQL client and transport."""
        if self._transport:
            await self._transport.close()
            self._transport = None
            self._client = None


def check_topic_response(result: Any, variables: Dict[str, Any]) -> Dict[str, Any]:
    """Reject responses that carry no topic.
    
    GitHub answers an unknown topic with ``{"topic": null}`` instead of an
    error.
    """
    if not isinstance(result, dict) or result.get("topic") is None:
        raise FetchFailure(
            f"Topic '{variables.get('name')}' was not found",
            request=variables,
            data=result
        )
    logger.info(f"Fetched topic '{variables.get('name')}'")
    return result
