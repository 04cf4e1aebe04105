"""End-to-end tests for the command-line entry point."""
import asyncio
import json
import pytest
import show_topic
from fakes import FakeTopicClient, make_node, make_payload
from topic_stars.config import Settings
from topic_stars.domain.errors import FetchFailure


@pytest.fixture
def settings(tmp_path):
    return Settings(
        access_token="ghp_test",
        data_file=str(tmp_path / "cache" / "data.json"),
        timestamp_file=str(tmp_path / "cache" / "data.cache"),
        log_file=str(tmp_path / "logs" / "request.log")
    )


def install_client(monkeypatch, client):
    monkeypatch.setattr(show_topic, "GitHubTopicClient", lambda token, timeout_seconds: client)


def run_main(settings, *argv):
    return asyncio.run(show_topic.main(show_topic.parse_args(list(argv)), settings=settings))


def test_cold_cache_renders_fetched_repositories(monkeypatch, capsys, settings, deno_payload):
    """Test fetching into an empty cache and printing the summary."""
    client = FakeTopicClient(payload=deno_payload)
    install_client(monkeypatch, client)
    
    assert run_main(settings) == 0
    
    output = capsys.readouterr().out
    assert "denoland/deno" in output
    assert "x" * 76 + "..." in output
    assert "90,000" in output
    assert client.closed
    with open(settings.data_file) as f:
        assert json.load(f) == deno_payload


def test_fresh_cache_is_rendered_without_token(capsys, settings, tmp_path):
    """Test that a fresh cache needs no access token."""
    settings = Settings(
        access_token=None,
        data_file=settings.data_file,
        timestamp_file=settings.timestamp_file,
        log_file=settings.log_file
    )
    (tmp_path / "cache").mkdir()
    with open(settings.data_file, "w") as f:
        json.dump(make_payload(make_node("denoland/fresh", 12345, "web framework")), f)
    with open(settings.timestamp_file, "w") as f:
        f.write(str(show_topic.now_millis()))
    
    assert run_main(settings) == 0
    assert "12,345" in capsys.readouterr().out


def test_missing_token_with_empty_cache_exits_nonzero(settings):
    """Test the configuration error path."""
    settings = Settings(
        access_token=None,
        data_file=settings.data_file,
        timestamp_file=settings.timestamp_file,
        log_file=settings.log_file
    )
    
    assert run_main(settings) == 1


def test_fetch_failure_without_data_exits_nonzero(monkeypatch, settings):
    """Test that a failed fetch with nothing cached is fatal."""
    install_client(monkeypatch, FakeTopicClient(failure=FetchFailure("offline")))
    
    assert run_main(settings) == 1
    with open(settings.log_file) as f:
        assert len(f.readlines()) == 1


def test_fetch_failure_falls_back_to_stale_data(monkeypatch, capsys, settings, tmp_path):
    """Test that stale data is still shown when the refresh fails."""
    (tmp_path / "cache").mkdir()
    with open(settings.data_file, "w") as f:
        json.dump(make_payload(make_node("old/repo", 1500)), f)
    with open(settings.timestamp_file, "w") as f:
        f.write("0")
    install_client(monkeypatch, FakeTopicClient(failure=FetchFailure("offline")))
    
    assert run_main(settings) == 0
    assert "1,500" in capsys.readouterr().out


def test_refresh_flag_forces_fetch(monkeypatch, settings, tmp_path, deno_payload):
    """Test that --refresh queries GitHub even when the cache is fresh."""
    (tmp_path / "cache").mkdir()
    with open(settings.data_file, "w") as f:
        json.dump(make_payload(), f)
    with open(settings.timestamp_file, "w") as f:
        f.write(str(show_topic.now_millis()))
    client = FakeTopicClient(payload=deno_payload)
    install_client(monkeypatch, client)
    
    assert run_main(settings, "--refresh") == 0
    assert len(client.calls) == 1


def test_timestamp_write_failure_still_renders(monkeypatch, capsys, settings, tmp_path, deno_payload):
    """Test that an unwritable timestamp file is only a warning."""
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    settings = Settings(
        access_token="ghp_test",
        data_file=settings.data_file,
        timestamp_file=str(blocker / "data.cache"),
        log_file=settings.log_file
    )
    install_client(monkeypatch, FakeTopicClient(payload=deno_payload))
    
    assert run_main(settings) == 0
    
    assert "denoland/deno" in capsys.readouterr().out
    with open(settings.data_file) as f:
        assert json.load(f) == deno_payload
