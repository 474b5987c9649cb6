"""Search result model — The common shape every provider normalizes into."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class SearchResult(BaseModel):
    """One normalized web search hit.

    ``title``, ``url``, ``content`` and ``markdown`` are always present (possibly
    empty). ``published_date`` and ``score`` are only set when the provider
    supplied them; they are dropped from serialized output otherwise, so dump
    with ``by_alias=True, exclude_none=True``.

    Scores are passed through as the provider reports them and are not
    comparable across providers.
    """

    model_config = {"populate_by_name": True}

    title: str = Field(default="Untitled", description="Page title")
    url: str = Field(default="", description="Absolute URL of the source page")
    content: str = Field(default="", description="Plain-text excerpt or snippet")
    markdown: str = Field(default="", description="Best-effort Markdown rendering of the page content")
    published_date: str | None = Field(
        default=None,
        alias="publishedDate",
        description="Provider-supplied publication date (unvalidated)",
    )
    score: float | None = Field(default=None, description="Provider-supplied relevance score or rank")

    @field_validator("title", "url", "content", "markdown", mode="before")
    @classmethod
    def _stringify_text(cls, v: Any, info: ValidationInfo) -> Any:
        """Upstream hits sometimes carry numbers where text is expected."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v if isinstance(v, str) else str(v)

    @field_validator("published_date", mode="before")
    @classmethod
    def _stringify_date(cls, v: Any) -> str | None:
        """Providers send dates as strings, epoch numbers or nothing at all."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("score", mode="before")
    @classmethod
    def _numeric_score(cls, v: Any) -> float | None:
        """Drop scores that are not plain numbers instead of failing the whole result."""
        if isinstance(v, bool) or not isinstance(v, int | float):
            return None
        return float(v)
