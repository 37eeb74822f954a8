"""
Agent executor contract.

Every agent type implements AgentExecutor.perform() and returns an
AgentOutput. execute() wraps it with the run lifecycle: exactly one terminal
ledger write per run, plus an agent_error event and re-raise on failure so the
detached supervisor can observe it.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Callable, Optional

from outreach_engine.logging_config import run_logger
from outreach_engine.models.profile import as_list
from outreach_engine.services import ledger
from outreach_engine.services.activity import emit_activity
from outreach_engine.services.contacts import get_contact
from outreach_engine.services.integrations import get_verified_integration

logger = logging.getLogger('agents.base')

KNOWLEDGE_SOURCE_CHARS = 3000


@dataclass
class AgentOutput:
    """What a successful perform() hands back to the ledger."""
    output: Dict[str, Any]
    tokens_used: int = 0


class AgentExecutor(ABC):
    """
    Base class for all agent types.

    Subclasses set agent_type/label and implement perform(). Providers are
    injected once; executors never look them up from global state.
    """
    agent_type: str = ''
    label: str = ''

    def __init__(self, providers):
        self.providers = providers
        self.completion = providers.completion
        self.discovery = providers.discovery

    def execute(self, run_id: str, profile, input_data: Dict[str, Any] = None):
        """Run the agent and record the terminal state. Re-raises on failure."""
        input_data = input_data or {}
        try:
            result = self.perform(run_id, profile, input_data)
        except Exception as e:
            run_logger(logger, run_id, self.agent_type).error("Run failed: %s", e, exc_info=True)
            emit_activity(
                profile.id, 'agent_error',
                f"{self.label or self.agent_type} failed: {e}",
                agent_run_id=run_id,
            )
            ledger.fail(run_id, e)
            raise
        ledger.complete(run_id, result.output, result.tokens_used)

    @abstractmethod
    def perform(self, run_id: str, profile, input_data: Dict[str, Any]) -> AgentOutput:
        """
        Do the agent's work.

        Args:
            run_id:     AgentRun id, for tagging activity events.
            profile:    Profile row (detached).
            input_data: The run's input payload.

        Returns:
            AgentOutput with a JSON-serializable output dict and tokens used.
        """
        ...

    # ── helpers shared by the prompt-assembly agents ─────────────────────────

    def build_knowledge_context(self, profile) -> str:
        """
        Join the profile's knowledge base into prompt context.

        URL entries are scraped (first 3000 chars); a failed scrape is inlined
        as a placeholder rather than failing the run.
        """
        chunks = []
        for item in as_list(profile.knowledge_base):
            if item.startswith('http'):
                try:
                    page = self.discovery.scrape(item)
                    chunks.append(f"[Source: {item}]\n{page.content[:KNOWLEDGE_SOURCE_CHARS]}")
                except Exception as e:
                    logger.warning("Knowledge source %s failed: %s", item, e)
                    chunks.append(f"[Source: {item}] (failed to fetch)")
            else:
                chunks.append(item)
        return '\n\n---\n\n'.join(chunks)

    def resolve_contact(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Contact fields from an inline `contact` dict, else loaded by `contact_id`."""
        contact = input_data.get('contact')
        if isinstance(contact, dict):
            return contact
        contact_id = input_data.get('contact_id')
        if contact_id:
            row = get_contact(contact_id)
            if row is not None:
                data = row.to_dict()
                data['external_id'] = row.external_id
                data['issues_care'] = row.issues_care
                return data
        return {}

    def sync_crm(self, profile, action: Callable, provider: str = None,
                 run_id: str = None) -> Optional[Any]:
        """
        Best-effort side-sync to the profile's verified CRM integration.

        `action` receives the CRM provider instance. Returns its result, or
        None when there is no integration or the sync failed.
        """
        integration = None
        try:
            integration = get_verified_integration(profile.id, provider)
            if integration is None:
                return None
            crm = self.providers.crm_for(integration)
            result = action(crm)
        except Exception as e:
            target = integration.provider if integration is not None else (provider or 'CRM')
            log = run_logger(logger, run_id, self.agent_type) if run_id else logger
            log.warning("CRM sync to %s failed for profile %s: %s", target, profile.id, e)
            return None
        emit_activity(profile.id, 'crm_synced', f"Synced to {integration.provider}", agent_run_id=run_id)
        return result


def contact_name(contact: Dict[str, Any]) -> str:
    return f"{contact.get('first_name') or ''} {contact.get('last_name') or ''}".strip()


def format_list(value, default='N/A') -> str:
    items = as_list(value)
    return ', '.join(items) if items else default
