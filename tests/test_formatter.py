"""Tests for console rendering."""
from topic_stars.domain.models import TopicRepository
from topic_stars.presentation.formatter import (
    format_repositories,
    format_repository,
    truncate_description
)


def test_truncate_long_description():
    """Test that long descriptions are cut with an ellipsis."""
    text = "a" * 120
    
    result = truncate_description(text)
    
    assert result == "a" * 76 + "..."


def test_short_description_unchanged():
    """Test that descriptions within the limit are kept as is."""
    assert truncate_description("a" * 76) == "a" * 76
    assert truncate_description("A  secure\nruntime") == "A secure runtime"


def test_missing_description():
    """Test the placeholder for repositories without a description."""
    assert truncate_description(None) == "(no description)"


def test_format_repository():
    """Test the fixed-width repository block."""
    repo = TopicRepository(
        name_with_owner="denoland/deno",
        stargazer_count=90000,
        description="d" * 120,
        languages=("Rust", "JavaScript")
    )
    
    lines = format_repository(repo).splitlines()
    
    assert lines[0].startswith("denoland/deno")
    assert lines[0].endswith("90,000 stars")
    assert len(lines[0]) == 80
    assert lines[1].strip().endswith("...")
    assert lines[2].strip() == "Rust, JavaScript"


def test_format_repositories_empty():
    """Test rendering a topic with no repositories."""
    output = format_repositories([], topic="deno")
    
    assert "Top repositories for topic 'deno'" in output
    assert "No repositories found." in output
