"""Console rendering of topic repositories."""
from typing import Iterable, Optional
from topic_stars.domain.models import TopicRepository


LINE_WIDTH = 80
DESCRIPTION_LIMIT = 76
STARS_WIDTH = 20
INDENT = "  "
ELLIPSIS = "..."


def truncate_description(description: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """Collapse whitespace and cut the description after ``limit`` characters."""
    if not description:
        return "(no description)"
    text = " ".join(description.split())
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def format_stars(count: int) -> str:
    return f"{count:,} stars"


def format_repository(repo: TopicRepository) -> str:
    """Render one repository as a block of fixed-width lines."""
    name_width = LINE_WIDTH - STARS_WIDTH - 1
    lines = [
        f"{repo.name_with_owner:<{name_width}} {format_stars(repo.stargazer_count):>{STARS_WIDTH}}",
        INDENT + truncate_description(repo.description),
    ]
    if repo.languages:
        lines.append(INDENT + ", ".join(repo.languages))
    return "\n".join(lines)


def format_repositories(repositories: Iterable[TopicRepository], topic: Optional[str] = None) -> str:
    """Render the full summary, one block per repository."""
    blocks = []
    if topic:
        blocks.append(f"Top repositories for topic '{topic}'\n" + "=" * LINE_WIDTH)
    repositories = list(repositories)
    if not repositories:
        blocks.append("No repositories found.")
    blocks.extend(format_repository(repo) for repo in repositories)
    return "\n\n".join(blocks)
