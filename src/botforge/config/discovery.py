"""Locate and read ``botforge.toml``.

Lookup order: the ``BOTFORGE_CONFIG`` env var, then the nearest
``botforge.toml`` in the start directory or any of its parents.
An explicit ``--config`` path bypasses discovery entirely.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from botforge.config.models import BotforgeConfig
from botforge.domain.errors import BotforgeError

CONFIG_FILENAME = "botforge.toml"
CONFIG_ENV_VAR = "BOTFORGE_CONFIG"


class ConfigFileError(BotforgeError):
    """Raised when a config file is missing, unparseable, or invalid."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any.

    A set ``BOTFORGE_CONFIG`` wins even when it points nowhere; in that
    case no file is used rather than falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigFileError: The file is not valid TOML.
    """
    with path.open("rb") as fh:
        try:
            return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ConfigFileError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> BotforgeConfig:
    """Read the sectioned config only, without env vars or CLI flags.

    Falls back to discovery from *cwd* when *path* is None, and to code
    defaults when nothing is found.
    """
    resolved = path if path is not None else find_config(cwd)
    if resolved is None:
        return BotforgeConfig()
    try:
        return BotforgeConfig.model_validate(read_toml(resolved))
    except ValidationError as exc:
        msg = f"Invalid configuration in {resolved}: {exc}"
        raise ConfigFileError(msg) from exc
