"""Tests for settings and domain guardrails."""

from pathlib import Path

from seltzer.config import Settings
from seltzer.utils.guardrails import extract_domain, validate_domain


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.socket_port == 39948
        assert settings.session_never_used_timeout_seconds == 600
        assert settings.session_inactive_timeout_seconds == 3600
        assert settings.headless_enabled is False
        assert settings.headless_locked is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SELTZER_HEADLESS_ENABLED", "true")
        monkeypatch.setenv("SELTZER_SOCKET_PORT", "40000")

        settings = Settings()

        assert settings.headless_enabled is True
        assert settings.socket_port == 40000

    def test_allowed_domain_list(self):
        settings = Settings(allowed_domains=" Example.com, ,docs.python.org ")

        assert settings.allowed_domain_list == ["example.com", "docs.python.org"]

    def test_no_allowed_domains(self):
        assert Settings().allowed_domain_list == []

    def test_profile_root(self, tmp_path):
        settings = Settings(data_path=tmp_path)

        assert settings.profile_root == Path(tmp_path) / "profiles"


class TestGuardrails:
    """Tests for the domain allow-list."""

    def test_extract_domain(self):
        assert extract_domain("https://Sub.Example.com:8443/path") == "sub.example.com"
        assert extract_domain("not a url") is None

    def test_empty_list_allows_all(self):
        assert validate_domain("https://anything.org", []) is True

    def test_exact_and_subdomain(self):
        allowed = ["example.com"]

        assert validate_domain("https://example.com/a", allowed) is True
        assert validate_domain("https://www.example.com/a", allowed) is True
        assert validate_domain("https://notexample.com/a", allowed) is False

    def test_url_without_host_rejected(self):
        assert validate_domain("about:blank", ["example.com"]) is False
