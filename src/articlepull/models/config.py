"""Pydantic configuration models for articlepull."""

import os
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ARTICLEPULL_"


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    if value is None:
        return None

    # Match $VAR or ${VAR}
    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class ExtractionConfig(BaseModel):
    """Tunables for a single pipeline run."""

    min_content_length: int = Field(
        100,
        ge=0,
        description="Minimum whitespace-stripped length of the final content",
    )
    reader_min_length: int = Field(
        100,
        ge=0,
        description="Minimum text length accepted from the reader-mode fallback",
    )
    metadata_max_length: int = Field(
        500,
        ge=1,
        description="Maximum length of each metadata value in serialized output",
    )
    selector: Optional[str] = Field(
        None,
        description="CSS selector overriding the template candidate chain",
    )

    model_config = {"extra": "forbid"}


class ServiceConfig(BaseModel):
    """Configuration for the HTTP service and the upstream fetch.

    The API key supports environment variable expansion using $VAR or
    ${VAR} syntax, e.g. ``scrape_api_key='${SCRAPER_KEY}'``.
    """

    base_url: str = Field(
        "https://helpx.adobe.com/",
        description="Base address relative targets are resolved against",
    )
    scrape_endpoint: Optional[str] = Field(
        None,
        description="External scrape provider endpoint (direct fetch if unset)",
    )
    scrape_api_key: Optional[str] = Field(None, description="API key for the scrape provider")
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; articlepull/1.0)",
        description="User-Agent header sent upstream",
    )
    timeout: float = Field(30.0, gt=0, description="Upstream request timeout in seconds")
    host: str = Field("0.0.0.0", description="Interface the service binds to")
    port: int = Field(8080, ge=1, le=65535, description="Port the service listens on")
    log_level: str = Field("INFO", description="Logging level")

    model_config = {"extra": "forbid"}

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper()

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables in the API key after init."""
        if self.scrape_api_key:
            object.__setattr__(self, "scrape_api_key", _expand_env_var(self.scrape_api_key))

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "ServiceConfig":
        """
        Build a config from ``ARTICLEPULL_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ServiceConfig with every variable that was set applied
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in env:
                values[name] = env[key]
        return cls(**values)
