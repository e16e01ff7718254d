"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, wikipage.toml only contains
overrides.  A fresh wiki needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from wikipage.domain.formats import FormatMark

# --- wikipage.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    content_dir: str = "content"
    suffix: str = ".md"

    @field_validator("suffix")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value


class PagesConfig(BaseModel):
    """[pages] section."""

    model_config = {"frozen": True}

    default_format: str = "toml"
    date_format: str = "%Y-%m-%d"

    @field_validator("default_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        return FormatMark.parse(value).format_name

    @property
    def default_mark(self) -> FormatMark:
        return FormatMark.parse(self.default_format)


class WikiConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    pages: PagesConfig = Field(default_factory=PagesConfig)
