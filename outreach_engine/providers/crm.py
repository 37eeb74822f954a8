"""
CRM providers — push/pull contacts, tag and annotate them in a vendor CRM.

Each instance wraps one Integration row's credentials. Any non-2xx response
raises ProviderUpstreamError carrying the HTTP status; operations a vendor has
no counterpart for raise ProviderCapabilityError.
"""
import logging
from typing import Dict, Any

import requests

from outreach_engine.config import (
    BEEHIIV_PUBLICATION_ID,
    NATIONBUILDER_SLUG, NATIONBUILDER_API_TOKEN,
    CONSTANT_CONTACT_API_URL, HUBSPOT_API_URL,
    HTTP_TIMEOUT,
)
from outreach_engine.providers.errors import (
    ProviderCapabilityError,
    ProviderConfigurationError,
    ProviderUpstreamError,
)

logger = logging.getLogger('providers.crm')


def contact_fields(contact) -> Dict[str, Any]:
    """Accept a Contact row or a plain dict."""
    if contact is None:
        return {}
    if isinstance(contact, dict):
        return contact
    return contact.to_dict()


class CRMProvider:
    """Base CRM backend. Subclasses override the operations their vendor supports."""
    name: str = ''
    label: str = ''

    def __init__(self, api_key=None, api_secret=None, access_token=None,
                 endpoint_url=None, extra_config=None):
        self.api_key = api_key
        self.api_secret = api_secret
        self.access_token = access_token
        self.endpoint_url = endpoint_url
        self.extra_config = extra_config or {}

    @classmethod
    def from_integration(cls, integration):
        return cls(
            api_key=integration.api_key,
            api_secret=integration.api_secret,
            access_token=integration.access_token,
            endpoint_url=integration.endpoint_url,
            extra_config=integration.extra_config or {},
        )

    # ── transport ────────────────────────────────────────────────────────────

    def _headers(self) -> Dict[str, str]:
        return {'Content-Type': 'application/json'}

    def _request(self, method: str, url: str, **kwargs):
        try:
            resp = requests.request(method, url, headers=self._headers(), timeout=HTTP_TIMEOUT, **kwargs)
        except requests.RequestException as e:
            raise ProviderUpstreamError(f"{self.label}: {e}") from e
        if not resp.ok:
            raise ProviderUpstreamError(f"{self.label}: {resp.status_code}", status_code=resp.status_code)
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return {'raw': resp.text}

    def _unsupported(self, operation: str):
        raise ProviderCapabilityError(f"{self.label} does not support {operation}")

    # ── contract ─────────────────────────────────────────────────────────────

    def test_connection(self) -> Dict[str, Any]:
        self._unsupported('test_connection')

    def push_contact(self, contact):
        self._unsupported('push_contact')

    def pull_contacts(self, limit: int = 50):
        self._unsupported('pull_contacts')

    def add_tag(self, contact_id: str, tag: str):
        self._unsupported('add_tag')

    def add_note(self, contact_id: str, note: str):
        self._unsupported('add_note')


class ConstantContactProvider(CRMProvider):
    name = 'constant_contact'
    label = 'Constant Contact'

    def _headers(self):
        if not self.access_token:
            raise ProviderConfigurationError("Constant Contact access token not set")
        return {'Content-Type': 'application/json', 'Authorization': f'Bearer {self.access_token}'}

    def test_connection(self):
        self._request('GET', f"{CONSTANT_CONTACT_API_URL}/account/summary")
        return {'success': True, 'message': 'Connected to Constant Contact'}

    def push_contact(self, contact):
        c = contact_fields(contact)
        return self._request('POST', f"{CONSTANT_CONTACT_API_URL}/contacts", json={
            'email_address': {'address': c.get('email')},
            'first_name': c.get('first_name'),
            'last_name': c.get('last_name'),
            'create_source': 'Account',
        })

    def pull_contacts(self, limit=50):
        return self._request('GET', f"{CONSTANT_CONTACT_API_URL}/contacts", params={'limit': limit})


class BeehiivProvider(CRMProvider):
    name = 'beehiiv'
    label = 'Beehiiv'

    @property
    def base_url(self) -> str:
        publication_id = self.extra_config.get('publication_id') or BEEHIIV_PUBLICATION_ID
        if not publication_id:
            raise ProviderConfigurationError("Beehiiv publication_id not set")
        return f"https://api.beehiiv.com/v2/publications/{publication_id}"

    def _headers(self):
        if not self.api_key:
            raise ProviderConfigurationError("Beehiiv API key not set")
        return {'Content-Type': 'application/json', 'Authorization': f'Bearer {self.api_key}'}

    def test_connection(self):
        self._request('GET', self.base_url)
        return {'success': True, 'message': 'Connected to Beehiiv'}

    def push_contact(self, contact):
        c = contact_fields(contact)
        if not c.get('email'):
            raise ProviderCapabilityError("Beehiiv subscriptions require an email address")
        return self._request('POST', f"{self.base_url}/subscriptions", json={'email': c['email']})

    def pull_contacts(self, limit=50):
        return self._request('GET', f"{self.base_url}/subscriptions", params={'limit': limit})


class NationBuilderProvider(CRMProvider):
    name = 'nationbuilder'
    label = 'NationBuilder'

    @property
    def base_url(self) -> str:
        slug = self.extra_config.get('slug') or NATIONBUILDER_SLUG
        if not slug:
            raise ProviderConfigurationError("NationBuilder slug not set")
        return f"https://{slug}.nationbuilder.com/api/v2"

    def _headers(self):
        token = self.access_token or NATIONBUILDER_API_TOKEN
        if not token:
            raise ProviderConfigurationError("NationBuilder access token not set")
        return {'Content-Type': 'application/json', 'Authorization': f'Bearer {token}'}

    def test_connection(self):
        self._request('GET', f"{self.base_url}/people", params={'page[size]': 1})
        return {'success': True, 'message': 'Connected to NationBuilder'}

    def push_contact(self, contact):
        c = contact_fields(contact)
        return self._request('POST', f"{self.base_url}/people", json={
            'data': {
                'type': 'people',
                'attributes': {
                    'first_name': c.get('first_name'),
                    'last_name': c.get('last_name'),
                    'email': c.get('email'),
                },
            },
        })

    def pull_contacts(self, limit=50):
        return self._request('GET', f"{self.base_url}/people", params={'page[size]': limit})

    def add_tag(self, contact_id, tag):
        return self._request('POST', f"{self.base_url}/people/{contact_id}/taggings", json={
            'data': {'type': 'taggings', 'attributes': {'tag': tag}},
        })

    def add_note(self, contact_id, note):
        return self._request('POST', f"{self.base_url}/people/{contact_id}/contact_notes", json={
            'data': {'type': 'contact_notes', 'attributes': {'content': note}},
        })


class WebhookProvider(CRMProvider):
    """WordPress / custom endpoint that accepts JSON POSTs."""
    name = 'custom_webhook'
    label = 'Webhook'

    def _endpoint(self) -> str:
        if not self.endpoint_url:
            raise ProviderConfigurationError(f"{self.label} endpoint_url not set")
        return self.endpoint_url

    def test_connection(self):
        self._request('POST', self._endpoint(), json={'test': True})
        return {'success': True, 'message': 'Webhook endpoint responded'}

    def push_contact(self, contact):
        return self._request('POST', self._endpoint(), json=contact_fields(contact))

    def add_tag(self, contact_id, tag):
        return self._request('POST', self._endpoint(), json={
            'event': 'tag', 'contact_id': contact_id, 'tag': tag,
        })

    def add_note(self, contact_id, note):
        return self._request('POST', self._endpoint(), json={
            'event': 'note', 'contact_id': contact_id, 'note': note,
        })


class WordPressWebhookProvider(WebhookProvider):
    name = 'wordpress'
    label = 'WordPress Webhook'


class HubSpotProvider(CRMProvider):
    name = 'hubspot'
    label = 'HubSpot'

    def _headers(self):
        token = self.access_token or self.api_key
        if not token:
            raise ProviderConfigurationError("HubSpot access token not set")
        return {'Content-Type': 'application/json', 'Authorization': f'Bearer {token}'}

    def test_connection(self):
        self._request('GET', f"{HUBSPOT_API_URL}/crm/v3/objects/contacts", params={'limit': 1})
        return {'success': True, 'message': 'Connected to HubSpot'}

    def push_contact(self, contact):
        c = contact_fields(contact)
        properties = {
            'email': c.get('email'),
            'firstname': c.get('first_name'),
            'lastname': c.get('last_name'),
            'phone': c.get('phone'),
            'company': c.get('company'),
            'jobtitle': c.get('job_title'),
            'website': c.get('profile_url'),
        }
        properties = {k: v for k, v in properties.items() if v is not None and v != ''}
        return self._request('POST', f"{HUBSPOT_API_URL}/crm/v3/objects/contacts",
                             json={'properties': properties})

    def pull_contacts(self, limit=50):
        return self._request('GET', f"{HUBSPOT_API_URL}/crm/v3/objects/contacts", params={'limit': limit})

    def add_note(self, contact_id, note):
        return self._request('POST', f"{HUBSPOT_API_URL}/crm/v3/objects/notes", json={
            'properties': {'hs_note_body': note},
            'associations': [{
                'to': {'id': contact_id},
                'types': [{'associationCategory': 'HUBSPOT_DEFINED', 'associationTypeId': 202}],
            }],
        })


CRM_PROVIDERS = {
    'constant_contact': ConstantContactProvider,
    'beehiiv': BeehiivProvider,
    'nationbuilder': NationBuilderProvider,
    'wordpress': WordPressWebhookProvider,
    'custom_webhook': WebhookProvider,
    'hubspot': HubSpotProvider,
}
