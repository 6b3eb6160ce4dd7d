"""Locating vaultbridge.toml and the vault it belongs to.

The config file is found by walking up from the working directory, the
way git finds ``.git/``. A vault without a config file is recognised by
its ``.obsidian/`` directory, so the CLI works from anywhere inside one.
``VAULTBRIDGE_CONFIG`` and ``--config`` override the walk.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from vaultbridge.config.models import BridgeConfig

CONFIG_FILENAME = "vaultbridge.toml"
HIDDEN_CONFIG_FILENAME = ".vaultbridge.toml"
CONFIG_ENV_VAR = "VAULTBRIDGE_CONFIG"
VAULT_MARKER = ".obsidian"


class ConfigError(ValueError):
    """Raised when a vaultbridge config file cannot be parsed."""


def _walk_up(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file above *start* (default: cwd).

    ``vaultbridge.toml`` wins over ``.vaultbridge.toml`` in the same
    directory. When ``VAULTBRIDGE_CONFIG`` is set it is the only
    candidate; None if it does not point at a file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _walk_up(start):
        for name in (CONFIG_FILENAME, HIDDEN_CONFIG_FILENAME):
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def find_vault_root(start: Path | None = None) -> Path | None:
    """Return the nearest directory above *start* holding ``.obsidian/``."""
    for directory in _walk_up(start):
        if (directory / VAULT_MARKER).is_dir():
            return directory
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> BridgeConfig:
    """Load the section models from *path*, or from the discovered file.

    Returns the code defaults when there is no config file.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return BridgeConfig()
    return BridgeConfig.model_validate(read_toml(path))
