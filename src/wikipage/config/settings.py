"""Layered settings for one wikipage CLI run.

Sources, highest priority first:

1. Keyword arguments, i.e. the global CLI flags
2. ``WIKIPAGE_*`` environment variables (``__`` between nested keys)
3. The ``wikipage.toml`` found by :func:`~wikipage.config.discovery.find_config`
4. Defaults from :mod:`wikipage.config.models`

Sections merge key by key: ``--content-dir`` replaces ``[store] content_dir``
and leaves ``[store] suffix`` from the file alone.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from wikipage.config.discovery import find_config, read_config
from wikipage.config.models import PagesConfig, StoreConfig

# Config file feeding the WikiSettings currently being built.
_config_file: ContextVar[Path | None] = ContextVar("wikipage_config_file", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source over the top-level tables of one ``wikipage.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables = read_config(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class WikiSettings(BaseSettings):
    """Frozen settings shared by every command of a run.

    Attributes:
        wiki_root: Directory holding ``wikipage.toml``, or the working
            directory when there is none.  A relative ``content_dir`` is
            resolved against it.
        config_path: The config file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WIKIPAGE_",
        "env_nested_delimiter": "__",
    }

    wiki_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    pages: PagesConfig = Field(default_factory=PagesConfig)

    @property
    def content_root(self) -> Path:
        return self.wiki_root / self.store.content_dir

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _config_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        wiki_root: Path | None = None,
        **cli_flags: Any,
    ) -> WikiSettings:
        """Build settings from the root command's options.

        *config_path* (``--config``) skips discovery; a path that is not a
        file leaves the defaults in place.  Otherwise ``wikipage.toml`` is
        looked up from *wiki_root* or the working directory, and its
        directory becomes the wiki root.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(wiki_root)

        if wiki_root is None:
            wiki_root = toml_path.parent if toml_path else Path.cwd()

        token = _config_file.set(toml_path)
        try:
            return cls(wiki_root=wiki_root, config_path=toml_path, **cli_flags)
        finally:
            _config_file.reset(token)
