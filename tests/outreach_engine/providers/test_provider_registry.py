"""Tests for outreach_engine.providers.registry — resolution and connection checks."""
import pytest
from unittest.mock import patch, MagicMock

from outreach_engine.models.integration import Integration
from outreach_engine.providers import registry
from outreach_engine.providers.completion import AnthropicProvider, OllamaProvider
from outreach_engine.providers.crm import NationBuilderProvider
from outreach_engine.providers.discovery import BasicFetchProvider, FirecrawlProvider
from outreach_engine.providers.errors import (
    ProviderConfigurationError,
    ProviderUpstreamError,
    UnknownProviderError,
)


@pytest.fixture(autouse=True)
def _reset_memo():
    registry.reset_providers()
    yield
    registry.reset_providers()


class TestBuildProviders:
    """build_providers() resolves names from the closed registries."""

    def test_explicit_names(self):
        providers = registry.build_providers('anthropic', 'firecrawl')
        assert isinstance(providers.completion, AnthropicProvider)
        assert isinstance(providers.discovery, FirecrawlProvider)
        assert providers.llm_name == 'anthropic'

    def test_config_defaults(self):
        with patch.object(registry, 'LLM_PROVIDER', 'ollama'), \
                patch.object(registry, 'SCRAPE_PROVIDER', 'basic'):
            providers = registry.build_providers()
        assert isinstance(providers.completion, OllamaProvider)
        assert isinstance(providers.discovery, BasicFetchProvider)

    def test_unknown_llm_fails_fast(self):
        with pytest.raises(UnknownProviderError, match="Unknown LLM provider: 'gpt5'"):
            registry.build_providers('gpt5', 'basic')

    def test_unknown_scraper_is_configuration_error(self):
        with pytest.raises(ProviderConfigurationError):
            registry.build_providers('openai', 'selenium')


class TestGetProviders:
    """get_providers() memoizes for the process lifetime."""

    def test_returns_same_instance(self):
        with patch.object(registry, 'build_providers', wraps=registry.build_providers) as build:
            first = registry.get_providers()
            second = registry.get_providers()
        assert first is second
        assert build.call_count == 1


class TestCrmFor:
    """Providers.crm_for() builds a CRM backend from an Integration row."""

    def test_builds_backend_with_credentials(self):
        providers = registry.build_providers('ollama', 'basic')
        integration = Integration(provider='nationbuilder', access_token='nb',
                                  extra_config={'slug': 'camp'})
        crm = providers.crm_for(integration)
        assert isinstance(crm, NationBuilderProvider)
        assert crm.access_token == 'nb'
        assert crm.base_url == 'https://camp.nationbuilder.com/api/v2'

    def test_unknown_crm(self):
        providers = registry.build_providers('ollama', 'basic')
        with pytest.raises(UnknownProviderError):
            providers.crm_for(Integration(provider='salesforce'))


class TestCheckIntegration:
    """check_integration() never raises."""

    def test_success(self):
        integration = Integration(provider='custom_webhook', endpoint_url='https://x/hook')
        with patch('outreach_engine.providers.crm.WebhookProvider.test_connection',
                   return_value={'success': True, 'message': 'Webhook endpoint responded'}):
            assert registry.check_integration(integration) == {
                'success': True, 'message': 'Webhook endpoint responded',
            }

    def test_upstream_failure_reported(self):
        integration = Integration(provider='custom_webhook', endpoint_url='https://x/hook')
        with patch('outreach_engine.providers.crm.WebhookProvider.test_connection',
                   side_effect=ProviderUpstreamError('Webhook: 500', status_code=500)):
            assert registry.check_integration(integration) == {'success': False, 'message': 'Webhook: 500'}

    def test_unknown_provider_reported(self):
        result = registry.check_integration(Integration(provider='salesforce'))
        assert result['success'] is False
        assert 'salesforce' in result['message']
