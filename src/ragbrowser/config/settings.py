"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (and a ``.env`` file)
  2. YAML config file (if specified)
  3. Default values

Provider credentials use the plain variable names the providers document
(``TAVILY_API_KEY``, ``APIFY_TOKEN``, ``SEARCH_PROVIDER``). Nested groups use
double underscores: ``SERVER__PORT=8080``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from ragbrowser.models.provider import ProviderConfig, ProviderType
from ragbrowser.providers.tavily.adapter import DEFAULT_EXCLUDE_DOMAINS


def _parse_list(v: Any) -> list[str]:
    """Parse a list from a JSON string, a comma-separated string or a list."""
    if isinstance(v, str):
        import json

        try:
            parsed = json.loads(v)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
        except (json.JSONDecodeError, TypeError):
            pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return list(v)


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_origins(cls, v: Any) -> list[str]:
        return _parse_list(v)


class TavilySettings(BaseModel):
    """Tavily provider options (the API key lives at the top level)."""

    base_url: str = Field(default="https://api.tavily.com", description="Tavily API base URL")
    search_depth: str = Field(default="advanced", description="Search depth: basic or advanced")
    exclude_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DOMAINS),
        description="Domains excluded from every search",
    )

    @field_validator("exclude_domains", mode="before")
    @classmethod
    def _parse_domains(cls, v: Any) -> list[str]:
        return _parse_list(v)


class ApifySettings(BaseModel):
    """Apify RAG Web Browser options (the token lives at the top level)."""

    base_url: str = Field(
        default="https://rag-web-browser.apify.actor/search",
        description="RAG Web Browser search endpoint",
    )
    scraping_tool: str = Field(default="raw-http", description="raw-http or browser-playwright")
    output_formats: list[str] = Field(default=["markdown"], description="Formats the actor extracts pages to")
    strict_parsing: bool = Field(
        default=False,
        description="Fail on malformed response bodies instead of returning no results",
    )

    @field_validator("output_formats", mode="before")
    @classmethod
    def _parse_formats(cls, v: Any) -> list[str]:
        return _parse_list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Example:
        SEARCH_PROVIDER=tavily
        TAVILY_API_KEY=tvly-...
        SERVER__PORT=8080
        OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    debug: bool = Field(default=False, description="Debug mode (exposes error messages)")

    # Provider selection
    search_provider: str | None = Field(default=None, description="Preferred provider: tavily or apify")
    tavily_api_key: str = Field(default="", description="Tavily API key")
    apify_token: str = Field(default="", description="Apify API token")
    request_timeout: float = Field(default=40.0, gt=0, description="Default upstream timeout in seconds")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    tavily: TavilySettings = Field(default_factory=TavilySettings)
    apify: ApifySettings = Field(default_factory=ApifySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def provider_config(self) -> ProviderConfig:
        """Build the explicit selector configuration from these settings."""
        return ProviderConfig(
            configured=self.search_provider,
            credentials={
                ProviderType.TAVILY: self.tavily_api_key,
                ProviderType.APIFY: self.apify_token,
            },
            options={
                ProviderType.TAVILY: {
                    "base_url": self.tavily.base_url,
                    "search_depth": self.tavily.search_depth,
                    "exclude_domains": self.tavily.exclude_domains,
                    "timeout": self.request_timeout,
                },
                ProviderType.APIFY: {
                    "base_url": self.apify.base_url,
                    "scraping_tool": self.apify.scraping_tool,
                    "output_formats": self.apify.output_formats,
                    "request_timeout_secs": int(self.request_timeout),
                    "strict_parsing": self.apify.strict_parsing,
                    "timeout": self.request_timeout,
                },
            },
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments and therefore
        take precedence over environment variables for the keys they set.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
