"""Tests for settings validation and service wiring."""

import pytest

from common.ai import AGiXTProvider
from common.storage import InMemoryStateStore
from fitcoach import dependencies
from fitcoach.config import Settings


@pytest.fixture(autouse=True)
def reset_services(monkeypatch):
    for name in ("_store", "_agent", "_batch_generator", "_plan_service", "_progress_service"):
        monkeypatch.setattr(dependencies, name, None)


class TestSettings:
    def test_agixt_requires_uri(self):
        settings = Settings(AI_PROVIDER="agixt", AGIXT_URI=None)

        with pytest.raises(ValueError, match="AGIXT_URI"):
            settings.validate_required()

    def test_unknown_store(self):
        settings = Settings(AGIXT_URI="http://agixt.test", STATE_STORE="redis")

        with pytest.raises(ValueError, match="STATE_STORE"):
            settings.validate_required()

    def test_defaults(self):
        settings = Settings(AGIXT_URI="http://agixt.test")

        settings.validate_required()
        assert settings.MAX_GENERATION_CHUNKS == 3
        assert settings.DEFAULT_ARTIFACT_FOCUS == "General"
        assert settings.DEFAULT_ARTIFACT_DIFFICULTY == 3


class TestInitServices:
    def test_getters_fail_before_init(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            dependencies.get_progress_service()

    def test_init_with_injected_agent(self, mock_agent, store):
        dependencies.init_services(Settings(), store=store, agent=mock_agent)

        assert dependencies.get_store() is store
        assert dependencies.get_agent() is mock_agent
        assert dependencies.get_batch_generator() is not None
        assert dependencies.get_plan_service() is not None
        assert dependencies.get_progress_service() is not None

    def test_builds_from_settings(self):
        settings = Settings(AGIXT_URI="http://agixt.test", AGIXT_AGENT_NAME="Coach")

        dependencies.init_services(settings)

        agent = dependencies.get_agent()
        assert isinstance(agent, AGiXTProvider)
        assert agent.agent_name == "Coach"
        assert isinstance(dependencies.get_store(), InMemoryStateStore)

    def test_invalid_settings_rejected(self):
        with pytest.raises(ValueError):
            dependencies.init_services(Settings(AI_PROVIDER="palm"))
