"""
Unit tests for publishing resolved values to TeamCity and the user environment.
"""

import io
import sys
from unittest.mock import patch

import pytest

from b4.system.environment import (
    EnvironmentPropagator,
    UserEnvironmentStore,
    escape_teamcity_value,
    format_teamcity_parameter,
)


@pytest.mark.unit
class TestTeamCityFormatting:
    """Test cases for TeamCity service messages."""

    def test_parameter_line(self):
        assert format_teamcity_parameter("K9", "/work/K9") == (
            "##teamcity[setParameter name='K9' value='/work/K9']"
        )

    def test_escaping(self):
        assert escape_teamcity_value("a'b|c[d]\n") == "a|'b||c|[d|]|n"


@pytest.mark.unit
class TestEnvironmentPropagator:
    """Test cases for EnvironmentPropagator.publish."""

    def test_no_targets_is_a_no_op(self, temp_dir):
        stream = io.StringIO()
        store = UserEnvironmentStore(temp_dir / "environment")

        EnvironmentPropagator(user_store=store, stream=stream).publish("K9", "/work/K9")

        assert stream.getvalue() == ""
        assert not store.file_path.exists()

    def test_teamcity_writes_one_line(self):
        stream = io.StringIO()

        EnvironmentPropagator(publish_to_ci=True, stream=stream).publish("UNITY_EDITOR", "/opt/Unity")

        assert stream.getvalue() == "##teamcity[setParameter name='UNITY_EDITOR' value='/opt/Unity']\n"

    def test_none_value_publishes_empty_string(self):
        stream = io.StringIO()
        EnvironmentPropagator(publish_to_ci=True, stream=stream).publish("K9", None)
        assert "value=''" in stream.getvalue()

    @pytest.mark.skipif(sys.platform == "win32", reason="Windows persists to the registry")
    def test_user_env_persists_to_file(self, temp_dir):
        store = UserEnvironmentStore(temp_dir / ".b4" / "environment")
        propagator = EnvironmentPropagator(persist_for_user=True, user_store=store)

        propagator.publish("K9", "/old")
        propagator.publish("UNITY_EDITOR", "/opt/Unity")
        propagator.publish("K9", "/new")

        assert store.read() == {"K9": "/new", "UNITY_EDITOR": "/opt/Unity"}


@pytest.mark.unit
class TestUserEnvironmentStore:
    """Test cases for UserEnvironmentStore."""

    def test_read_missing_file(self, temp_dir):
        assert UserEnvironmentStore(temp_dir / "environment").read() == {}

    @patch("b4.system.environment.sys.platform", "linux")
    def test_write_failure_is_logged_not_raised(self, temp_dir, caplog):
        blocker = temp_dir / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = UserEnvironmentStore(blocker / "environment")

        store.set("K9", "/work/K9")

        assert "persisting K9" in caplog.text
