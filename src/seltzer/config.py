"""Configuration settings for the Seltzer server."""

from pathlib import Path
from typing import Literal, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    # MCP/HTTP boundary
    host: str = "0.0.0.0"
    port: int = 8000
    http_enabled: bool = True

    # Command socket boundary (newline-delimited JSON)
    socket_host: str = "0.0.0.0"
    socket_port: int = 39948
    socket_max_message_bytes: int = 1_048_576

    # Browser driver
    driver_mode: Literal["local", "remote"] = "local"
    browser: Literal["chrome", "firefox", "edge"] = "chrome"
    selenium_grid_url: str = "http://localhost:4444"
    chromedriver_path: Optional[str] = None  # Driver binary; Selenium Manager resolves it if unset
    page_load_timeout_seconds: int = 30
    implicit_wait_seconds: int = 0

    # Headless mode for new sessions; locked at startup unless told otherwise
    headless_enabled: bool = False
    headless_locked: bool = True

    # Session management
    data_path: Path = Path.home() / ".seltzer"
    max_concurrent_sessions: int = 10
    session_never_used_timeout_seconds: int = 600  # 10 minutes
    session_inactive_timeout_seconds: int = 3600  # 1 hour
    reap_interval_seconds: int = 60  # 1 minute

    # Domain guardrails (comma-separated list, empty = allow all)
    allowed_domains: Optional[str] = None

    # Retries for element actions that hit a stale element
    selector_retries: int = 4
    selector_retry_wait_seconds: float = 8.0

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "SELTZER_"}

    @property
    def allowed_domain_list(self) -> list[str]:
        """Parse comma-separated domains into list."""
        if not self.allowed_domains:
            return []
        return [d.strip().lower() for d in self.allowed_domains.split(",") if d.strip()]

    @property
    def profile_root(self) -> Path:
        """Directory holding one browser profile per session."""
        return self.data_path.expanduser() / "profiles"


# Global settings instance
settings = Settings()
