"""
Unit tests for the b4 entry point.

Runs are kept offline and limited to steps that do not need external tools.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from b4.cli.main import main_cli
from b4.steps.base import Step


class BrokenStep(Step):
    id = "broken"
    header = "Broken"

    def process(self, context):
        raise RuntimeError("step bug")


@pytest.mark.unit
class TestMainCli:
    """Test cases for main_cli."""

    def test_empty_steps_exit_nonzero(self, temp_dir):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir), "--offline", "--steps", ""])

        assert exc_info.value.code != 0

    def test_unknown_steps_only_exit_nonzero(self, temp_dir):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir), "--offline", "--steps", "nothing"])

        assert exc_info.value.code != 0

    def test_missing_root_directory_exits_one(self, temp_dir):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir / "missing"), "--offline"])

        assert exc_info.value.code == 1

    def test_k9config_run_publishes_to_teamcity(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir), "--offline", "--teamcity", "--steps", "k9config"])

        assert exc_info.value.code == 0
        assert (temp_dir / "K9.ini").exists()
        assert (temp_dir / "B4.log").exists()
        output = capsys.readouterr().out
        assert "##teamcity[setParameter name='STEAM_Username' value='UNDEFINED']" in output

    def test_steps_from_config_file(self, temp_dir):
        (temp_dir / "B4.ini").write_text("steps=k9config\nk9-config=Config/K9.ini\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir), "--offline"])

        assert exc_info.value.code == 0
        assert (temp_dir / "Config" / "K9.ini").exists()

    def test_legacy_encoded_k9_config_exits_cleanly(self, temp_dir, capsys):
        (temp_dir / "K9.ini").write_bytes("STEAM_Password=caf\u00e9\n".encode("cp1252"))

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--root-directory", str(temp_dir), "--offline", "--teamcity", "--steps", "k9config"])

        assert exc_info.value.code == 0
        assert "name='STEAM_Password'" in capsys.readouterr().out

    def test_unexpected_error_exits_one_and_closes_log(self, temp_dir):
        with patch("b4.cli.main.default_steps", return_value=[BrokenStep()]):
            with pytest.raises(SystemExit) as exc_info:
                main_cli(["--root-directory", str(temp_dir), "--offline", "--steps", "broken"])

        assert exc_info.value.code == 1
        assert not any(
            isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == temp_dir / "B4.log"
            for handler in logging.getLogger().handlers
        )
        log_text = (temp_dir / "B4.log").read_text(encoding="utf-8")
        assert "step bug" in log_text
        assert "Exit code: 1" in log_text
