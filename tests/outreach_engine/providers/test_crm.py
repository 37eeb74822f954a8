"""Tests for outreach_engine.providers.crm — vendor payloads and error mapping."""
import pytest
from unittest.mock import patch, MagicMock

from outreach_engine.providers.crm import (
    BeehiivProvider,
    ConstantContactProvider,
    HubSpotProvider,
    NationBuilderProvider,
    WebhookProvider,
    WordPressWebhookProvider,
)
from outreach_engine.providers.errors import (
    ProviderCapabilityError,
    ProviderConfigurationError,
    ProviderUpstreamError,
)

CONTACT = {'first_name': 'Ana', 'last_name': 'Silva', 'email': 'ana@example.com'}


def _mock_http(status=200, json_data=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.content = b'{}' if json_data is not None else b''
    resp.json.return_value = json_data
    return resp


@pytest.fixture
def mock_request():
    with patch('outreach_engine.providers.crm.requests.request') as mock:
        mock.return_value = _mock_http(json_data={'id': 'ext-1'})
        yield mock


class TestConstantContact:
    """Constant Contact v3 API."""

    def test_test_connection_hits_account_summary(self, mock_request):
        result = ConstantContactProvider(access_token='cc').test_connection()
        assert result == {'success': True, 'message': 'Connected to Constant Contact'}
        method, url = mock_request.call_args.args
        assert method == 'GET'
        assert url == 'https://api.cc.email/v3/account/summary'
        assert mock_request.call_args.kwargs['headers']['Authorization'] == 'Bearer cc'

    def test_push_contact_payload(self, mock_request):
        ConstantContactProvider(access_token='cc').push_contact(CONTACT)
        payload = mock_request.call_args.kwargs['json']
        assert payload['email_address'] == {'address': 'ana@example.com'}
        assert payload['first_name'] == 'Ana'

    def test_non_success_carries_status(self, mock_request):
        mock_request.return_value = _mock_http(status=401)
        with pytest.raises(ProviderUpstreamError) as exc_info:
            ConstantContactProvider(access_token='cc').test_connection()
        assert exc_info.value.status_code == 401
        assert 'Constant Contact: 401' in str(exc_info.value)

    def test_tags_unsupported(self, mock_request):
        with pytest.raises(ProviderCapabilityError):
            ConstantContactProvider(access_token='cc').add_tag('1', 'x')

    def test_missing_token(self, mock_request):
        with pytest.raises(ProviderConfigurationError):
            ConstantContactProvider().test_connection()
        mock_request.assert_not_called()


class TestBeehiiv:
    """Beehiiv v2 publication subscriptions."""

    def test_push_contact_uses_publication_from_extra_config(self, mock_request):
        crm = BeehiivProvider(api_key='bh', extra_config={'publication_id': 'pub_9'})
        crm.push_contact(CONTACT)
        method, url = mock_request.call_args.args
        assert method == 'POST'
        assert url == 'https://api.beehiiv.com/v2/publications/pub_9/subscriptions'
        assert mock_request.call_args.kwargs['json'] == {'email': 'ana@example.com'}

    def test_push_without_email_is_capability_error(self, mock_request):
        crm = BeehiivProvider(api_key='bh', extra_config={'publication_id': 'pub_9'})
        with pytest.raises(ProviderCapabilityError):
            crm.push_contact({'first_name': 'NoEmail'})


class TestNationBuilder:
    """NationBuilder v2 JSON:API payloads."""

    def _crm(self):
        return NationBuilderProvider(access_token='nb', extra_config={'slug': 'mycampaign'})

    def test_push_contact(self, mock_request):
        self._crm().push_contact(CONTACT)
        _, url = mock_request.call_args.args
        assert url == 'https://mycampaign.nationbuilder.com/api/v2/people'
        payload = mock_request.call_args.kwargs['json']
        assert payload['data']['type'] == 'people'
        assert payload['data']['attributes']['email'] == 'ana@example.com'

    def test_add_tag(self, mock_request):
        self._crm().add_tag('42', 'uae_donation_ask')
        _, url = mock_request.call_args.args
        assert url.endswith('/people/42/taggings')
        assert mock_request.call_args.kwargs['json'] == {
            'data': {'type': 'taggings', 'attributes': {'tag': 'uae_donation_ask'}},
        }

    def test_add_note(self, mock_request):
        self._crm().add_note('42', 'called')
        _, url = mock_request.call_args.args
        assert url.endswith('/people/42/contact_notes')
        assert mock_request.call_args.kwargs['json']['data']['attributes'] == {'content': 'called'}

    def test_pull_contacts_page_size(self, mock_request):
        self._crm().pull_contacts(limit=10)
        assert mock_request.call_args.kwargs['params'] == {'page[size]': 10}

    def test_missing_slug(self, mock_request):
        with patch('outreach_engine.providers.crm.NATIONBUILDER_SLUG', None):
            with pytest.raises(ProviderConfigurationError):
                NationBuilderProvider(access_token='nb').test_connection()


class TestWebhook:
    """WordPress / custom webhook endpoints."""

    def test_test_connection_posts_test_flag(self, mock_request):
        result = WordPressWebhookProvider(endpoint_url='https://site/hook').test_connection()
        assert result['success'] is True
        assert mock_request.call_args.args == ('POST', 'https://site/hook')
        assert mock_request.call_args.kwargs['json'] == {'test': True}

    def test_push_contact_posts_contact(self, mock_request):
        WebhookProvider(endpoint_url='https://site/hook').push_contact(CONTACT)
        assert mock_request.call_args.kwargs['json'] == CONTACT

    def test_missing_endpoint(self, mock_request):
        with pytest.raises(ProviderConfigurationError):
            WebhookProvider().push_contact(CONTACT)

    def test_empty_body_returns_empty_dict(self, mock_request):
        mock_request.return_value = _mock_http(status=204)
        assert WebhookProvider(endpoint_url='https://site/hook').push_contact(CONTACT) == {}


class TestHubSpot:
    """HubSpot CRM v3 objects."""

    def test_push_contact_drops_empty_properties(self, mock_request):
        HubSpotProvider(access_token='hs').push_contact(CONTACT)
        _, url = mock_request.call_args.args
        assert url == 'https://api.hubapi.com/crm/v3/objects/contacts'
        assert mock_request.call_args.kwargs['json'] == {'properties': {
            'email': 'ana@example.com', 'firstname': 'Ana', 'lastname': 'Silva',
        }}

    def test_add_tag_unsupported(self, mock_request):
        with pytest.raises(ProviderCapabilityError):
            HubSpotProvider(access_token='hs').add_tag('1', 'x')
