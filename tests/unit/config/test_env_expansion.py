"""Unit tests for configuration environment variable expansion."""

import pytest

from cloudtag.config.utils import expand_config_env_vars, expand_env_vars


@pytest.mark.unit
class TestExpandEnvVars:
    def test_braced_and_bare_references(self, monkeypatch):
        monkeypatch.setenv("CLOUDTAG_TEST_ZONE", "asia-northeast3-a")
        assert expand_env_vars("${CLOUDTAG_TEST_ZONE}") == "asia-northeast3-a"
        assert expand_env_vars("zone=$CLOUDTAG_TEST_ZONE") == "zone=asia-northeast3-a"

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("CLOUDTAG_TEST_UNSET", raising=False)
        assert expand_env_vars("${CLOUDTAG_TEST_UNSET:fallback}") == "fallback"
        assert expand_env_vars("${CLOUDTAG_TEST_UNSET:}") == ""

    def test_unset_without_default_left_as_written(self, monkeypatch):
        monkeypatch.delenv("CLOUDTAG_TEST_UNSET", raising=False)
        assert expand_env_vars("${CLOUDTAG_TEST_UNSET}") == "${CLOUDTAG_TEST_UNSET}"

    def test_recurses_into_containers(self, monkeypatch):
        monkeypatch.setenv("CLOUDTAG_TEST_LEVEL", "DEBUG")
        value = {"logging": {"level": "${CLOUDTAG_TEST_LEVEL}"}, "list": ["$CLOUDTAG_TEST_LEVEL", 3]}

        assert expand_env_vars(value) == {"logging": {"level": "DEBUG"}, "list": ["DEBUG", 3]}

    def test_empty_values_and_sections_dropped(self, monkeypatch):
        monkeypatch.delenv("CLOUDTAG_TEST_UNSET", raising=False)
        config = {
            "provider": {
                "type": "mock",
                "gcp": {"project_id": "${CLOUDTAG_TEST_UNSET:}"},
            },
            "waiter": {"max_attempts": 3},
        }

        assert expand_config_env_vars(config) == {
            "provider": {"type": "mock"},
            "waiter": {"max_attempts": 3},
        }
