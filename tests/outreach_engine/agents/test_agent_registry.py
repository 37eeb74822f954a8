"""Tests for outreach_engine.agents.registry."""
import pytest

from outreach_engine.agents.registry import AGENTS, get_executor
from outreach_engine.config import AGENT_TYPES


class TestAgentRegistry:

    def test_every_agent_type_has_an_executor(self):
        assert set(AGENTS) == set(AGENT_TYPES)

    def test_executor_agent_type_matches_key(self):
        for name, cls in AGENTS.items():
            assert cls.agent_type == name

    def test_get_executor_injects_providers(self, providers):
        executor = get_executor('issue_scout', providers)
        assert executor.completion is providers.completion
        assert executor.discovery is providers.discovery

    def test_unknown_type(self, providers):
        with pytest.raises(ValueError, match='Unknown agent type: closer'):
            get_executor('closer', providers)
