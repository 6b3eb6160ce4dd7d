"""BridgeSettings: everything a run needs to know, merged from four places.

Later entries only fill what earlier ones leave unset::

    --json -v -c custom.toml          click flags (init kwargs)
    VAULTBRIDGE_ASSETS__PATH_PREFIX   environment, ``__`` nests into sections
    vaultbridge.toml                  discovered config file
    section model defaults            vaultbridge.config.models

The TOML layer is a custom pydantic-settings source fed by
:mod:`vaultbridge.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from vaultbridge.config.discovery import ConfigError, find_config, find_vault_root, read_toml
from vaultbridge.config.models import AssetsConfig, StoreConfig, VaultConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings layer backed by one parsed config file (empty without one)."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class BridgeSettings(BaseSettings):
    """Unified settings for vaultbridge.

    Merges CLI flags, environment variables, TOML config sections, and
    code-baked defaults into a single frozen object. Stored on the CLI's
    :class:`~vaultbridge.commands._context.AppContext`.

    Attributes:
        vault_root: Directory of the config file, else the enclosing
            ``.obsidian`` vault, else the CWD.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VAULTBRIDGE_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    vault: VaultConfig = Field(default_factory=VaultConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> BridgeSettings:
        """Construct settings from a CLI invocation.

        The config file is *config_path* when given, otherwise the nearest
        one found by walking up from *vault_root* (or the cwd). Without an
        explicit *vault_root*, the root is the config file's directory,
        else the enclosing ``.obsidian`` vault, else the cwd.

        Raises:
            ConfigError: If *config_path* is missing or the file is not TOML.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {toml_path}"
                raise ConfigError(msg)
        else:
            toml_path = find_config(vault_root)

        resolved_root = vault_root
        if resolved_root is None:
            if toml_path is not None:
                resolved_root = toml_path.parent
            else:
                resolved_root = find_vault_root() or Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                vault_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
