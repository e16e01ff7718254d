"""Locate and read ``wikipage.toml``.

The wiki root is the directory holding ``wikipage.toml``, found by walking
up from the working directory the way git finds ``.git/``.
``WIKIPAGE_CONFIG`` names the file directly and disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from wikipage.config.models import WikiConfig

CONFIG_FILENAME = "wikipage.toml"
CONFIG_ENV_VAR = "WIKIPAGE_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    When ``WIKIPAGE_CONFIG`` is set it is the only candidate: a missing
    file there means no config, not a fallback to discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _walk_up(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse and validate the ``[store]`` and ``[pages]`` tables of *path*.

    Only the keys the file sets are returned, so they merge underneath
    environment variables and CLI flags instead of masking them.

    Raises:
        click.ClickException: The file is not valid TOML, or a section
            holds a value :class:`WikiConfig` rejects.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    try:
        config = WikiConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid config in {path}: {exc}"
        raise click.ClickException(msg) from exc
    return config.model_dump(exclude_unset=True)
