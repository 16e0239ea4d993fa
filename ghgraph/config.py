"""Client configuration, token discovery and HTTP transport wiring."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ghgraph.paths import GITHUB_API_BASE_URL, GITHUB_RAW_BASE_URL

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT_SECONDS = 20.0
GITHUB_API_BASE_URL_ENV_VAR = "GITHUB_API_BASE_URL"
GITHUB_RAW_BASE_URL_ENV_VAR = "GITHUB_RAW_BASE_URL"
GITHUB_TIMEOUT_SECONDS_ENV_VAR = "GITHUB_TIMEOUT_SECONDS"
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _load_dotenv() -> None:
    """Load ``.env`` from the working directory without overriding the environment."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


class ClientConfig(BaseModel):
    """Endpoints and transport settings for a graph client."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_base_url: str = GITHUB_API_BASE_URL
    raw_base_url: str = GITHUB_RAW_BASE_URL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    trust_env: bool = True

    @field_validator("api_base_url", "raw_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an http(s) URL and normalise a single trailing separator."""
        stripped = value.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be http(s), got '{value}'.")
        return stripped.rstrip("/") + "/"

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``.env`` and environment overrides."""
        _load_dotenv()
        overrides: dict[str, object] = {}
        api_base_url = os.getenv(GITHUB_API_BASE_URL_ENV_VAR)
        if api_base_url:
            overrides["api_base_url"] = api_base_url
        raw_base_url = os.getenv(GITHUB_RAW_BASE_URL_ENV_VAR)
        if raw_base_url:
            overrides["raw_base_url"] = raw_base_url
        timeout_value = os.getenv(GITHUB_TIMEOUT_SECONDS_ENV_VAR)
        if timeout_value:
            overrides["timeout_seconds"] = timeout_value
        return cls.model_validate(overrides)


def get_github_token_with_source() -> tuple[str | None, str | None]:
    """Read an optional GitHub token and the environment key it came from.

    ``GITHUB_TOKEN`` wins over ``GH_TOKEN``. Returns ``(None, None)`` when no
    token is configured; requests are then sent unauthenticated.
    """
    _load_dotenv()
    for env_var in TOKEN_ENV_VARS:
        token = os.getenv(env_var)
        if token:
            logger.info("Using GitHub token from %s", env_var)
            return token, env_var
    logger.info("No GitHub token configured; requests are unauthenticated")
    return None, None


def build_http_client(config: ClientConfig | None = None) -> httpx.Client:
    """Build the HTTP transport used by the graph client."""
    resolved = config or ClientConfig()
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    return httpx.Client(
        headers=headers,
        timeout=resolved.timeout_seconds,
        trust_env=resolved.trust_env,
    )
