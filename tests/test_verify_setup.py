"""Tests for the setup verification script."""
import pytest
import verify_setup
from topic_stars.config import Settings
from topic_stars.domain.errors import ConfigError


@pytest.fixture
def settings(tmp_path):
    return Settings(
        access_token=None,
        data_file=str(tmp_path / "cache" / "data.json"),
        timestamp_file=str(tmp_path / "cache" / "data.cache"),
        log_file=str(tmp_path / "logs" / "request.log")
    )


def test_missing_token_is_a_warning(settings):
    """Test that a missing token does not fail the token check."""
    assert verify_setup.check_github_token(settings) is True


def test_all_checks_pass_without_token(monkeypatch, capsys, settings):
    """Test the full run with no token and an empty cache."""
    calls = []
    
    def fake_load_settings():
        calls.append(1)
        return settings
    
    monkeypatch.setattr(verify_setup, "load_settings", fake_load_settings)
    
    with pytest.raises(SystemExit) as excinfo:
        verify_setup.main()
    
    output = capsys.readouterr().out
    assert excinfo.value.code == 0
    assert "✅ PASS: GitHub Token" in output
    assert "pip install -e ." in output
    assert len(calls) == 1


def test_invalid_configuration_exits_nonzero(monkeypatch):
    """Test that invalid settings stop the run."""
    def broken_settings():
        raise ConfigError("CACHE_TTL_MINUTES must be positive, got 0")
    
    monkeypatch.setattr(verify_setup, "load_settings", broken_settings)
    
    with pytest.raises(SystemExit) as excinfo:
        verify_setup.main()
    
    assert excinfo.value.code == 1
