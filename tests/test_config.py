"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from drivefs.config import Settings, SettingsError, env_overrides, load_settings


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        """Test default settings target the local disk."""
        settings = Settings()

        assert settings.backend == "local"
        assert settings.root_folder_id == "root"
        assert settings.use_all_drives_search is False
        assert settings.credentials_path is None
        assert settings.page_size == 100

    def test_from_file_camel_case(self, tmp_path: Path) -> None:
        """Test YAML keys may use camelCase aliases."""
        config = tmp_path / "config.yaml"
        config.write_text(
            "backend: drive\n"
            "rootFolderId: abc123\n"
            "useAllDrivesSearch: true\n"
            "credentialsPath: /keys/sa.json\n"
        )

        settings = Settings.from_file(config)

        assert settings.backend == "drive"
        assert settings.root_folder_id == "abc123"
        assert settings.use_all_drives_search is True
        assert settings.credentials_path == Path("/keys/sa.json")

    def test_from_file_snake_case(self, tmp_path: Path) -> None:
        """Test YAML keys may use field names."""
        config = tmp_path / "config.yaml"
        config.write_text("backend: memory\npage_size: 7\n")

        settings = Settings.from_file(config)

        assert settings.backend == "memory"
        assert settings.page_size == 7

    def test_from_file_empty(self, tmp_path: Path) -> None:
        """Test an empty file yields defaults."""
        config = tmp_path / "config.yaml"
        config.write_text("")

        assert Settings.from_file(config) == Settings()

    def test_from_file_missing(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Settings.from_file(tmp_path / "nope.yaml")

    def test_from_file_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises SettingsError."""
        config = tmp_path / "config.yaml"
        config.write_text("backend: [unclosed\n")

        with pytest.raises(SettingsError):
            Settings.from_file(config)

    def test_from_file_not_mapping(self, tmp_path: Path) -> None:
        """Test a top-level list raises SettingsError."""
        config = tmp_path / "config.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(SettingsError):
            Settings.from_file(config)

    @pytest.mark.parametrize("content", ["backend: ftp\n", "pageSize: 0\n"])
    def test_from_file_invalid_values(self, tmp_path: Path, content: str) -> None:
        """Test invalid values raise SettingsError."""
        config = tmp_path / "config.yaml"
        config.write_text(content)

        with pytest.raises(SettingsError):
            Settings.from_file(config)


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_missing_default_file(self, temp_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing default file yields defaults."""
        monkeypatch.setattr("drivefs.config.CONFIG_FILE", temp_home / ".drivefs" / "config.yaml")

        settings = load_settings(environ={})

        assert settings == Settings()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test a missing explicit file is an error."""
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml", environ={})

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        """Test environment variables win over the file."""
        config = tmp_path / "config.yaml"
        config.write_text("backend: local\nrootFolderId: from-file\n")

        settings = load_settings(
            config,
            environ={
                "DRIVEFS_BACKEND": "memory",
                "DRIVEFS_ROOT_FOLDER_ID": "from-env",
                "DRIVEFS_USE_ALL_DRIVES": "true",
            },
        )

        assert settings.backend == "memory"
        assert settings.root_folder_id == "from-env"
        assert settings.use_all_drives_search is True

    def test_invalid_env_override(self, tmp_path: Path) -> None:
        """Test an invalid override raises SettingsError."""
        config = tmp_path / "config.yaml"
        config.write_text("")

        with pytest.raises(SettingsError):
            load_settings(config, environ={"DRIVEFS_BACKEND": "tape"})


class TestEnvOverrides:
    """Tests for env_overrides()."""

    def test_collects_known_variables(self) -> None:
        """Test only known, non-empty DRIVEFS_ variables are collected."""
        overrides = env_overrides(
            {
                "DRIVEFS_CREDENTIALS_PATH": "/k.json",
                "DRIVEFS_LOCAL_ROOT": "",
                "DRIVEFS_UNKNOWN": "x",
                "HOME": "/home/me",
            }
        )

        assert overrides == {"credentials_path": "/k.json"}
