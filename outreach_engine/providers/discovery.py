"""
Discovery providers — scrape a URL to text, or search the web.

basic:       plain GET + BeautifulSoup text extraction, no search
firecrawl:   managed scrape (markdown) + managed search
browserbase: session-based rendering, no search
"""
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Any

import requests
from bs4 import BeautifulSoup

from outreach_engine.config import (
    FIRECRAWL_API_KEY, FIRECRAWL_API_URL,
    BROWSERBASE_API_KEY, BROWSERBASE_PROJECT_ID, BROWSERBASE_API_URL,
    SCRAPE_MAX_CHARS, SCRAPE_USER_AGENT, HTTP_TIMEOUT,
)
from outreach_engine.providers.errors import (
    ProviderCapabilityError,
    ProviderConfigurationError,
    ProviderUpstreamError,
)

logger = logging.getLogger('providers.discovery')

_WHITESPACE = re.compile(r'\s+')


@dataclass
class ScrapedPage:
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    url: str = ''
    title: str = ''
    snippet: str = ''
    content: str = ''
    description: str = ''

    @property
    def text(self) -> str:
        """Best available body text: content, then snippet, then description."""
        return self.content or self.snippet or self.description or ''


class DiscoveryProvider(ABC):
    name: str = ''

    @abstractmethod
    def scrape(self, url: str) -> ScrapedPage:
        ...

    def search(self, query: str, limit: int = 10) -> List[SearchResult]:
        raise ProviderCapabilityError(f"{self.name} provider does not support search")


def html_to_text(html: str, max_chars: int = SCRAPE_MAX_CHARS) -> str:
    """Strip markup to whitespace-normalized plain text, truncated to max_chars."""
    soup = BeautifulSoup(html or '', 'html.parser')
    for tag in soup(['script', 'style', 'noscript']):
        tag.decompose()
    text = _WHITESPACE.sub(' ', soup.get_text(' ', strip=True)).strip()
    return text[:max_chars]


class BasicFetchProvider(DiscoveryProvider):
    """Always available — no credential, no search."""
    name = 'basic'

    def scrape(self, url):
        try:
            resp = requests.get(url, headers={'User-Agent': SCRAPE_USER_AGENT}, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise ProviderUpstreamError(f"Fetch failed for {url}: {e}") from e
        if not resp.ok:
            raise ProviderUpstreamError(f"Fetch failed for {url}: HTTP {resp.status_code}",
                                        status_code=resp.status_code)
        return ScrapedPage(content=html_to_text(resp.text), metadata={'url': url})

    def search(self, query, limit=10):
        raise ProviderCapabilityError("Basic fetch provider does not support search")


class FirecrawlProvider(DiscoveryProvider):
    name = 'firecrawl'

    def __init__(self, api_key: str = None, base_url: str = None):
        self.api_key = api_key if api_key is not None else FIRECRAWL_API_KEY
        self.base_url = (base_url or FIRECRAWL_API_URL).rstrip('/')

    def _post(self, path: str, payload: Dict) -> Dict:
        if not self.api_key:
            raise ProviderConfigurationError("FIRECRAWL_API_KEY not set")
        try:
            resp = requests.post(
                f"{self.base_url}/{path}",
                headers={
                    'Content-Type': 'application/json',
                    'Authorization': f'Bearer {self.api_key}',
                },
                json=payload,
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise ProviderUpstreamError(f"Firecrawl request failed: {e}") from e
        if not resp.ok:
            raise ProviderUpstreamError(f"Firecrawl {path} HTTP {resp.status_code}: {resp.text[:200]}",
                                        status_code=resp.status_code)
        data = resp.json()
        if data.get('success') is False:
            raise ProviderUpstreamError(data.get('error') or f"Firecrawl {path} failed")
        return data

    def scrape(self, url):
        data = self._post('scrape', {'url': url, 'formats': ['markdown']})
        page = data.get('data') or {}
        return ScrapedPage(
            content=page.get('markdown') or '',
            metadata=page.get('metadata') or {},
        )

    def search(self, query, limit=10):
        data = self._post('search', {'query': query, 'limit': limit})
        results = []
        for item in data.get('data') or []:
            if not isinstance(item, dict):
                continue
            results.append(SearchResult(
                url=item.get('url') or '',
                title=item.get('title') or '',
                snippet=item.get('snippet') or '',
                content=item.get('markdown') or item.get('content') or '',
                description=item.get('description') or '',
            ))
        return results


class BrowserbaseProvider(DiscoveryProvider):
    name = 'browserbase'

    def __init__(self, api_key: str = None, project_id: str = None, base_url: str = None):
        self.api_key = api_key if api_key is not None else BROWSERBASE_API_KEY
        self.project_id = project_id if project_id is not None else BROWSERBASE_PROJECT_ID
        self.base_url = (base_url or BROWSERBASE_API_URL).rstrip('/')

    def scrape(self, url):
        if not self.api_key:
            raise ProviderConfigurationError("BROWSERBASE_API_KEY not set")
        payload = {'url': url}
        if self.project_id:
            payload['projectId'] = self.project_id
        try:
            resp = requests.post(
                f"{self.base_url}/sessions",
                headers={'Content-Type': 'application/json', 'x-bb-api-key': self.api_key},
                json=payload,
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise ProviderUpstreamError(f"Browserbase request failed: {e}") from e
        if not resp.ok:
            raise ProviderUpstreamError(f"Browserbase HTTP {resp.status_code}: {resp.text[:200]}",
                                        status_code=resp.status_code)
        data = resp.json()
        return ScrapedPage(content=data.get('content') or '', metadata=data.get('metadata') or {})

    def search(self, query, limit=10):
        raise ProviderCapabilityError("Browserbase search not supported; use firecrawl for search")


DISCOVERY_PROVIDERS = {
    'basic': BasicFetchProvider,
    'firecrawl': FirecrawlProvider,
    'browserbase': BrowserbaseProvider,
}
