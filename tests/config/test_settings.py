"""Tests for BridgeSettings — unified settings with TOML source."""

from pathlib import Path

import pytest

from vaultbridge.config.settings import BridgeSettings, ConfigError


class TestBridgeSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = BridgeSettings.from_cli(vault_root=tmp_path)
        assert settings.vault_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.vault.note_extension == ".md"
        assert settings.vault.skip_dirs == [".obsidian", ".git", ".trash"]
        assert settings.store.document_type == "JournalEntry"
        assert settings.assets.path_prefix == ""

    def test_frozen(self, tmp_path: Path) -> None:
        settings = BridgeSettings.from_cli(vault_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "vaultbridge.toml"
        toml.write_text('[assets]\npath_prefix = "worlds/demo"\n[store]\ndocument_type = "Lore"\n')
        settings = BridgeSettings.from_cli(vault_root=tmp_path)
        assert settings.assets.path_prefix == "worlds/demo"
        assert settings.store.document_type == "Lore"
        assert settings.vault.note_extension == ".md"  # default preserved
        assert settings.config_path == toml.resolve()

    def test_root_from_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        toml = tmp_path / "vaultbridge.toml"
        toml.write_text("")
        child = tmp_path / "notes" / "deep"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        settings = BridgeSettings.from_cli()
        assert settings.config_path == toml.resolve()
        assert settings.vault_root == toml.resolve().parent

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "bridge.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[vault]\nnote_extension = ".markdown"\n')
        settings = BridgeSettings.from_cli(config_path=str(custom), vault_root=tmp_path)
        assert settings.vault.note_extension == ".markdown"
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            BridgeSettings.from_cli(config_path=str(tmp_path / "nope.toml"), vault_root=tmp_path)

    def test_root_from_obsidian_vault(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".obsidian").mkdir()
        inner = tmp_path / "Campaign"
        inner.mkdir()
        monkeypatch.chdir(inner)
        settings = BridgeSettings.from_cli()
        assert settings.config_path is None
        assert settings.vault_root == tmp_path.resolve()

    def test_invalid_toml_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "vaultbridge.toml").write_text("[assets\npath_prefix = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            BridgeSettings.from_cli(vault_root=tmp_path)


class TestEnvAndFlags:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "vaultbridge.toml").write_text('[assets]\npath_prefix = "from/toml"\n')
        monkeypatch.setenv("VAULTBRIDGE_ASSETS__PATH_PREFIX", "from/env")
        settings = BridgeSettings.from_cli(vault_root=tmp_path)
        assert settings.assets.path_prefix == "from/env"

    def test_cli_flags_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VAULTBRIDGE_VERBOSE", "false")
        settings = BridgeSettings.from_cli(
            vault_root=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
            log_json=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True
