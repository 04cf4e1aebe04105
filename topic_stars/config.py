"""Settings loaded once at startup from the environment and dotenv file."""
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv
from topic_stars.domain.errors import ConfigError
from topic_stars.domain.models import TopicQuery


@dataclass(frozen=True)
class Settings:
    """Validated runtime configuration.
    
    The access token is optional here: it is only required when the cache
    has to be refreshed.
    """
    access_token: Optional[str] = None
    data_file: str = "cache/data.json"
    timestamp_file: str = "cache/data.cache"
    log_file: str = "logs/request.log"
    ttl_minutes: int = 60
    request_timeout: int = 30
    query: TopicQuery = field(default_factory=TopicQuery)
    
    @property
    def ttl_millis(self) -> int:
        return self.ttl_minutes * 60 * 1000


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer environment variable."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(load_env_file: bool = True) -> Settings:
    """Build settings from environment variables.
    
    Args:
        load_env_file: Load ``.env`` (or ``env``) into the environment first
        
    Raises:
        ConfigError: If a numeric setting is invalid
    """
    if load_env_file:
        # Load environment variables from .env or env file
        load_dotenv('.env') or load_dotenv('env')
    
    token = os.getenv("PERSONAL_ACCESS_TOKEN") or os.getenv("GITHUB_TOKEN")
    defaults = Settings()
    
    query = TopicQuery(
        name=os.getenv("TOPIC_NAME") or defaults.query.name,
        repo_count=_positive_int("TOPIC_REPO_COUNT", defaults.query.repo_count),
        language_count=_positive_int("TOPIC_LANGUAGE_COUNT", defaults.query.language_count)
    )
    
    return Settings(
        access_token=token.strip() if token and token.strip() else None,
        data_file=os.getenv("TOPIC_STARS_DATA_FILE") or defaults.data_file,
        timestamp_file=os.getenv("TOPIC_STARS_TIMESTAMP_FILE") or defaults.timestamp_file,
        log_file=os.getenv("TOPIC_STARS_LOG_FILE") or defaults.log_file,
        ttl_minutes=_positive_int("CACHE_TTL_MINUTES", defaults.ttl_minutes),
        request_timeout=_positive_int("REQUEST_TIMEOUT_SECONDS", defaults.request_timeout),
        query=query
    )
