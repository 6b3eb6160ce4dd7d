"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vaultbridge.toml only contains
overrides. Most vaults need only ``[assets] path_prefix``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vaultbridge.domain.paths import DEFAULT_NOTE_EXTENSION
from vaultbridge.domain.syntax import DEFAULT_DOCUMENT_TYPE


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    note_extension: str = DEFAULT_NOTE_EXTENSION
    skip_dirs: list[str] = Field(default_factory=lambda: [".obsidian", ".git", ".trash"])


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    document_type: str = DEFAULT_DOCUMENT_TYPE


class AssetsConfig(BaseModel):
    """[assets] section."""

    model_config = {"frozen": True}

    # Store data directory that holds uploaded vault assets, stripped from
    # asset paths on export, e.g. "worlds/campaign/vault-assets".
    path_prefix: str = ""


class BridgeConfig(BaseModel):
    """Root config model — mirrors vaultbridge.toml structure."""

    model_config = {"frozen": True}

    vault: VaultConfig = Field(default_factory=VaultConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
