"""Tests for outreach_engine.providers.discovery — basic, Firecrawl, Browserbase."""
import pytest
from unittest.mock import patch, MagicMock

from outreach_engine.providers.discovery import (
    BasicFetchProvider,
    BrowserbaseProvider,
    FirecrawlProvider,
    SearchResult,
    html_to_text,
)
from outreach_engine.providers.errors import (
    ProviderCapabilityError,
    ProviderConfigurationError,
    ProviderUpstreamError,
)


def _mock_http(status=200, json_data=None, text=''):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.json.return_value = json_data if json_data is not None else {}
    resp.text = text
    return resp


class TestHtmlToText:
    """html_to_text() strips markup, scripts and styles."""

    def test_strips_scripts_styles_and_tags(self):
        html = """<html><head><style>body{color:red}</style><script>var x = 1;</script></head>
        <body><h1>Need a plumber</h1>
        <p>My   basement
        flooded</p></body></html>"""
        assert html_to_text(html) == 'Need a plumber My basement flooded'

    def test_truncates(self):
        assert html_to_text('<p>' + 'a' * 50 + '</p>', max_chars=10) == 'a' * 10


class TestBasicFetchProvider:
    """Basic fetch: GET + text extraction, no search."""

    @patch('outreach_engine.providers.discovery.requests.get')
    def test_scrape_returns_text_and_url_metadata(self, mock_get):
        mock_get.return_value = _mock_http(text='<p>Hello <b>world</b></p>')
        page = BasicFetchProvider().scrape('https://example.com')
        assert page.content == 'Hello world'
        assert page.metadata == {'url': 'https://example.com'}

    @patch('outreach_engine.providers.discovery.requests.get')
    def test_scrape_http_error_is_upstream_error(self, mock_get):
        mock_get.return_value = _mock_http(status=404)
        with pytest.raises(ProviderUpstreamError) as exc_info:
            BasicFetchProvider().scrape('https://example.com/missing')
        assert exc_info.value.status_code == 404

    def test_search_is_capability_error(self):
        with pytest.raises(ProviderCapabilityError):
            BasicFetchProvider().search('plumber')


class TestFirecrawlProvider:
    """Firecrawl: scrape → markdown, search → results."""

    @patch('outreach_engine.providers.discovery.requests.post')
    def test_scrape_returns_markdown(self, mock_post):
        mock_post.return_value = _mock_http(json_data={
            'success': True,
            'data': {'markdown': '# Title', 'metadata': {'title': 'T'}},
        })
        page = FirecrawlProvider(api_key='fc-key').scrape('https://example.com')

        assert page.content == '# Title'
        assert page.metadata == {'title': 'T'}
        assert mock_post.call_args.args[0].endswith('/scrape')
        assert mock_post.call_args.kwargs['json'] == {'url': 'https://example.com', 'formats': ['markdown']}
        assert mock_post.call_args.kwargs['headers']['Authorization'] == 'Bearer fc-key'

    @patch('outreach_engine.providers.discovery.requests.post')
    def test_unsuccessful_payload_is_upstream_error(self, mock_post):
        mock_post.return_value = _mock_http(json_data={'success': False, 'error': 'blocked'})
        with pytest.raises(ProviderUpstreamError, match='blocked'):
            FirecrawlProvider(api_key='fc-key').scrape('https://example.com')

    @patch('outreach_engine.providers.discovery.requests.post')
    def test_search_maps_results(self, mock_post):
        mock_post.return_value = _mock_http(json_data={'success': True, 'data': [
            {'url': 'https://reddit.com/r/x/1', 'title': 'Help', 'description': 'need a plumber asap'},
            'garbage',
        ]})
        results = FirecrawlProvider(api_key='fc-key').search('plumber', limit=5)

        assert len(results) == 1
        assert results[0].url == 'https://reddit.com/r/x/1'
        assert results[0].text == 'need a plumber asap'
        assert mock_post.call_args.kwargs['json'] == {'query': 'plumber', 'limit': 5}

    def test_missing_key_is_configuration_error(self):
        with pytest.raises(ProviderConfigurationError):
            FirecrawlProvider(api_key='').search('x')


class TestBrowserbaseProvider:
    """Browserbase: session scrape, no search."""

    @patch('outreach_engine.providers.discovery.requests.post')
    def test_scrape_sends_api_key_header(self, mock_post):
        mock_post.return_value = _mock_http(json_data={'content': 'rendered', 'metadata': {}})
        page = BrowserbaseProvider(api_key='bb-key', project_id='proj').scrape('https://example.com')
        assert page.content == 'rendered'
        assert mock_post.call_args.kwargs['headers']['x-bb-api-key'] == 'bb-key'
        assert mock_post.call_args.kwargs['json']['projectId'] == 'proj'

    @patch('outreach_engine.providers.discovery.requests.post')
    def test_search_fails_immediately(self, mock_post):
        with pytest.raises(ProviderCapabilityError):
            BrowserbaseProvider(api_key='bb-key').search('anything')
        mock_post.assert_not_called()


class TestSearchResultText:
    """SearchResult.text prefers content, then snippet, then description."""

    def test_preference_order(self):
        assert SearchResult(content='c', snippet='s', description='d').text == 'c'
        assert SearchResult(snippet='s', description='d').text == 's'
        assert SearchResult(description='d').text == 'd'
        assert SearchResult().text == ''
