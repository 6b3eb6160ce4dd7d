"""Shared pytest fixtures for vaultbridge tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from vaultbridge.config.settings import BridgeSettings
from vaultbridge.domain import markdown_refs, storage_refs
from vaultbridge.domain.documents import VaultDocument
from vaultbridge.domain.placeholders import substitute_placeholders


@pytest.fixture(autouse=True)
def _restore_root_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """CLI invocations reconfigure the root logger; undo that after each test."""
    monkeypatch.delenv("VAULTBRIDGE_CONFIG", raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    bridge_level = logging.getLogger("vaultbridge").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("vaultbridge").setLevel(bridge_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> BridgeSettings:
    """Default settings rooted at a temp directory."""
    return BridgeSettings.from_cli(vault_root=tmp_path)


@pytest.fixture
def vault_doc() -> Callable[..., VaultDocument]:
    """Factory for a vault note already extracted and placeholder-protected."""

    def make(path: str, content: str = "", stable_id: str | None = None) -> VaultDocument:
        document = VaultDocument(file_path=path, content=content, stable_id=stable_id)
        links, assets = markdown_refs.extract_references(content)
        result = substitute_placeholders(content, links, assets)
        document.content = result.content
        document.links = result.links
        document.assets = result.assets
        return document

    return make


@pytest.fixture
def store_doc() -> Callable[..., VaultDocument]:
    """Factory for a store page already extracted and placeholder-protected."""

    def make(
        path: str, content: str = "", stable_id: str | None = None, prefix: str = ""
    ) -> VaultDocument:
        document = VaultDocument(file_path=path, content=content, stable_id=stable_id)
        links, assets = storage_refs.extract_references(content, asset_path_prefix=prefix)
        result = substitute_placeholders(content, links, assets)
        document.content = result.content
        document.links = result.links
        document.assets = result.assets
        return document

    return make


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so config discovery finds nothing stray.

    Use via ``@pytest.mark.usefixtures("_isolated_dir")`` on command test
    classes; ``tmp_path`` is the same directory.
    """
    monkeypatch.chdir(tmp_path)
