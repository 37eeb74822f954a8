"""
Agent registry — the closed set of agent types and their executors.
"""
from typing import Dict, Type

from outreach_engine.agents.base import AgentExecutor
from outreach_engine.agents.donor_closer import DonorCloserAgent
from outreach_engine.agents.issue_scout import IssueScoutAgent
from outreach_engine.agents.outreach import OutreachAgent
from outreach_engine.agents.persuader import PersuaderAgent
from outreach_engine.agents.researcher import ResearcherAgent
from outreach_engine.agents.secretary import SecretaryAgent
from outreach_engine.pipeline.lead_generator import LeadGeneratorAgent

AGENTS: Dict[str, Type[AgentExecutor]] = {
    # both modes
    'lead_generator': LeadGeneratorAgent,
    'outreach': OutreachAgent,

    # business
    'researcher': ResearcherAgent,
    'secretary': SecretaryAgent,

    # political
    'issue_scout': IssueScoutAgent,
    'persuader': PersuaderAgent,
    'donor_closer': DonorCloserAgent,
}


def get_executor(agent_type: str, providers) -> AgentExecutor:
    """Look up and instantiate the executor for an agent type."""
    executor_cls = AGENTS.get(agent_type)
    if not executor_cls:
        raise ValueError(f"Unknown agent type: {agent_type}. Available: {sorted(AGENTS)}")
    return executor_cls(providers)
