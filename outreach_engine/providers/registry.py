"""
Provider resolution.

Completion and discovery backends are chosen once per process from
LLM_PROVIDER / SCRAPE_PROVIDER and held in a Providers container that is
passed into every executor. CRM backends carry per-integration credentials,
so the container resolves them on demand from the closed CRM registry.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Any

from outreach_engine.config import LLM_PROVIDER, SCRAPE_PROVIDER
from outreach_engine.providers.completion import COMPLETION_PROVIDERS, CompletionProvider
from outreach_engine.providers.crm import CRM_PROVIDERS, CRMProvider
from outreach_engine.providers.discovery import DISCOVERY_PROVIDERS, DiscoveryProvider
from outreach_engine.providers.errors import ProviderError, UnknownProviderError

logger = logging.getLogger('providers.registry')


@dataclass
class Providers:
    completion: CompletionProvider
    discovery: DiscoveryProvider

    @property
    def llm_name(self) -> str:
        return self.completion.name

    def crm_for(self, integration) -> CRMProvider:
        return get_crm(integration.provider).from_integration(integration)


def get_crm(name: str):
    """Look up a CRM backend class by integration provider name."""
    crm_cls = CRM_PROVIDERS.get(name)
    if not crm_cls:
        raise UnknownProviderError('CRM', name, CRM_PROVIDERS)
    return crm_cls


def build_providers(llm_name: str = None, scrape_name: str = None) -> Providers:
    """Instantiate the configured completion + discovery backends. Unknown names fail fast."""
    llm_name = llm_name or LLM_PROVIDER
    scrape_name = scrape_name or SCRAPE_PROVIDER

    completion_cls = COMPLETION_PROVIDERS.get(llm_name)
    if not completion_cls:
        raise UnknownProviderError('LLM', llm_name, COMPLETION_PROVIDERS)
    discovery_cls = DISCOVERY_PROVIDERS.get(scrape_name)
    if not discovery_cls:
        raise UnknownProviderError('scrape', scrape_name, DISCOVERY_PROVIDERS)

    logger.info("Providers resolved: llm=%s scrape=%s", llm_name, scrape_name)
    return Providers(completion=completion_cls(), discovery=discovery_cls())


_providers = None


def get_providers() -> Providers:
    """Process-wide Providers, built on first use."""
    global _providers
    if _providers is None:
        _providers = build_providers()
    return _providers


def reset_providers():
    global _providers
    _providers = None


def check_integration(integration) -> Dict[str, Any]:
    """Run a CRM connection test; never raises."""
    try:
        crm = get_crm(integration.provider).from_integration(integration)
        result = crm.test_connection()
        return {'success': True, 'message': result.get('message', 'Connected')}
    except ProviderError as e:
        return {'success': False, 'message': str(e)}
