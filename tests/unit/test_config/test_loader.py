"""
Unit tests for flat config file parsing and loading.

Tests comment and blank line handling, malformed lines, duplicate keys,
and the SimpleConfig wrapper around loaded files.
"""

import logging

import pytest

from b4.config.loader import load_simple_config_file, parse_simple_config
from b4.config.manager import SimpleConfig, load_config


@pytest.mark.unit
class TestParseSimpleConfig:
    """Test cases for parse_simple_config."""

    def test_parses_trimmed_key_values(self):
        text = "project = Projects/Game\n  k9-repo=Tools/K9  \n"
        assert parse_simple_config(text) == {"project": "Projects/Game", "k9-repo": "Tools/K9"}

    def test_skips_blank_lines_and_comments(self):
        text = "\n# a comment\n; another comment\n\nsteps=k9\n"
        assert parse_simple_config(text) == {"steps": "k9"}

    def test_only_first_separator_splits(self):
        assert parse_simple_config("STEAM_Password=a=b=c") == {"STEAM_Password": "a=b=c"}

    def test_later_duplicate_wins(self):
        assert parse_simple_config("steps=k9\nsteps=k9config\n") == {"steps": "k9config"}

    def test_malformed_lines_are_logged_and_skipped(self, caplog):
        with caplog.at_level(logging.ERROR, logger="b4.config.loader"):
            values = parse_simple_config("no separator here\n=orphan value\nkey=value", "B4.ini")

        assert values == {"key": "value"}
        errors = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert len(errors) == 2
        assert "B4.ini:1" in errors[0].getMessage()

    def test_empty_value_is_kept(self):
        assert parse_simple_config("no-launch=") == {"no-launch": ""}


@pytest.mark.unit
class TestLoadSimpleConfigFile:
    """Test cases for file loading."""

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_simple_config_file(temp_dir / "missing.ini")

    def test_reads_utf8_with_bom(self, temp_dir):
        path = temp_dir / "K9.ini"
        path.write_bytes("\ufeffSTEAM_Username=owl\n".encode("utf-8"))
        assert load_simple_config_file(path) == {"STEAM_Username": "owl"}

    def test_legacy_code_page_is_read_leniently(self, temp_dir):
        path = temp_dir / "K9.ini"
        path.write_bytes("STEAM_Username=owl\nSTEAM_Password=caf\u00e9\n".encode("cp1252"))

        values = load_simple_config_file(path)

        assert values["STEAM_Username"] == "owl"
        assert values["STEAM_Password"] == "caf\ufffd"


@pytest.mark.unit
class TestSimpleConfig:
    """Test cases for the SimpleConfig source."""

    def test_try_get(self):
        config = SimpleConfig({"project": "Game"})
        assert config.try_get("project") == "Game"
        assert config.try_get("missing") is None
        assert "project" in config
        assert len(config) == 1

    def test_items_keep_file_order(self, temp_dir):
        path = temp_dir / "K9.ini"
        path.write_text("b=2\na=1\n", encoding="utf-8")
        assert list(SimpleConfig.from_file(path).items()) == [("b", "2"), ("a", "1")]

    def test_load_config_missing_file_is_empty(self, temp_dir):
        config = load_config(temp_dir)
        assert len(config) == 0

    def test_load_config_reads_b4_ini(self, temp_dir):
        (temp_dir / "B4.ini").write_text("steps=k9,findunity\n", encoding="utf-8")
        assert load_config(temp_dir).try_get("steps") == "k9,findunity"
