"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from shuttle.config import (
    ConfigLoadError,
    ShuttleConfig,
    default_config_path,
    load_config,
    parse_config,
)

VALID_CONFIG = """
folders:
  - source: /srv/incoming
    destination: /srv/processed
  - source: /mnt/share/drop
    destination: /srv/processed
    is_share: true
    command: /usr/local/bin/scan --quiet
settings:
  poll_interval: 2.5
"""


class TestParseConfig:
    """Tests for parse_config."""

    def test_valid_config(self):
        config = parse_config(VALID_CONFIG)

        assert len(config.folders) == 2
        local, share = config.folders
        assert local.source == "/srv/incoming"
        assert local.is_share is False
        assert local.command is None
        assert share.is_share is True
        assert share.command == "/usr/local/bin/scan --quiet"

    def test_settings_defaults(self):
        """Unspecified settings keep their defaults."""
        config = parse_config(VALID_CONFIG)

        assert config.settings.poll_interval == 2.5
        assert config.settings.stability_interval == 1.0
        assert config.settings.stability_timeout is None
        assert config.settings.create_destination is False

    def test_empty_document(self):
        """An empty file is a configuration with no folders."""
        config = parse_config("")

        assert config == ShuttleConfig()
        assert config.folders == []

    def test_paths_are_normalized(self):
        config = parse_config(
            "folders:\n  - source: /srv/incoming/\n    destination: /srv//out\n"
        )

        assert config.folders[0].source == "/srv/incoming"
        assert config.folders[0].destination == "/srv/out"

    def test_relative_source_rejected(self):
        with pytest.raises(ConfigLoadError, match="absolute"):
            parse_config("folders:\n  - source: incoming\n    destination: /srv/out\n")

    def test_duplicate_source_rejected(self):
        text = (
            "folders:\n"
            "  - source: /srv/in\n    destination: /srv/a\n"
            "  - source: /srv/in/\n    destination: /srv/b\n"
        )

        with pytest.raises(ConfigLoadError, match="Duplicate source"):
            parse_config(text)

    def test_blank_command_rejected(self):
        text = "folders:\n  - source: /srv/in\n    destination: /srv/out\n    command: '  '\n"

        with pytest.raises(ConfigLoadError, match="blank"):
            parse_config(text)

    def test_unknown_key_rejected(self):
        text = "folders:\n  - source: /srv/in\n    destination: /srv/out\n    dest: /x\n"

        with pytest.raises(ConfigLoadError):
            parse_config(text)

    def test_non_positive_interval_rejected(self):
        with pytest.raises(ConfigLoadError):
            parse_config("settings:\n  stability_interval: 0\n")

    def test_string_flag_rejected(self):
        """Quoted "yes" is a string, not a boolean, and is not coerced."""
        text = "folders:\n  - source: /srv/in\n    destination: /srv/out\n    is_share: \"yes\"\n"

        with pytest.raises(ConfigLoadError):
            parse_config(text)

    def test_numeric_flag_rejected(self):
        with pytest.raises(ConfigLoadError):
            parse_config("settings:\n  create_destination: 1\n")

    def test_integer_interval_accepted(self):
        config = parse_config("settings:\n  poll_interval: 2\n")

        assert config.settings.poll_interval == 2.0

    def test_malformed_yaml(self):
        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            parse_config("folders: [unclosed\n")

    def test_top_level_list_rejected(self):
        with pytest.raises(ConfigLoadError, match="mapping"):
            parse_config("- source: /srv/in\n")


class TestLoadConfig:
    """Tests for load_config and the default location."""

    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "conf.yml"
        path.write_text(VALID_CONFIG)

        config = load_config(path)

        assert len(config.folders) == 2

    def test_missing_file(self, tmp_path: Path):
        """A missing file is fatal and names the path."""
        path = tmp_path / "absent.yml"

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config(path)

        assert exc_info.value.path == str(path)
        assert "cannot read file" in exc_info.value.reason

    def test_validation_error_names_file(self, tmp_path: Path):
        path = tmp_path / "conf.yml"
        path.write_text("folders:\n  - source: relative\n    destination: /srv/out\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config(path)

        assert exc_info.value.path == str(path)

    def test_default_path_next_to_program(self, tmp_path: Path):
        program = tmp_path / "bin" / "shuttle"

        assert default_config_path(str(program)) == (
            tmp_path.resolve() / "bin" / "conf" / "conf.yml"
        )

    def test_default_path_used_when_none_given(self, tmp_path: Path, monkeypatch):
        program = tmp_path / "shuttle"
        (tmp_path / "conf").mkdir()
        (tmp_path / "conf" / "conf.yml").write_text(VALID_CONFIG)
        monkeypatch.setattr("sys.argv", [str(program)])

        config = load_config()

        assert len(config.folders) == 2
