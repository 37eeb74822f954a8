"""
Completion providers — one chat-style call returning text + token count.

OpenAI and Anthropic go through their official SDKs; Ollama is a local REST
server reached with requests. Clients are built lazily on first call so a
missing key surfaces as ProviderConfigurationError only when a run needs it.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import anthropic
import openai
import requests

from outreach_engine.config import (
    OPENAI_API_KEY, OPENAI_MODEL,
    ANTHROPIC_API_KEY, ANTHROPIC_MODEL,
    OLLAMA_URL, OLLAMA_MODEL,
    DEFAULT_TEMPERATURE, DEFAULT_MAX_TOKENS,
    HTTP_TIMEOUT,
)
from outreach_engine.providers.errors import (
    ProviderConfigurationError,
    ProviderUpstreamError,
)

logger = logging.getLogger('providers.completion')


@dataclass
class Completion:
    text: str
    tokens_used: int = 0


class CompletionProvider(ABC):
    name: str = ''

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float = None,
        max_tokens: int = None,
        model: str = None,
    ) -> Completion:
        ...


class OpenAIProvider(CompletionProvider):
    name = 'openai'

    def __init__(self, api_key: str = None, model: str = None, client=None):
        self.api_key = api_key if api_key is not None else OPENAI_API_KEY
        self.model = model or OPENAI_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ProviderConfigurationError("OPENAI_API_KEY not set")
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def complete(self, system_prompt, user_message, temperature=None, max_tokens=None, model=None):
        client = self.client
        try:
            response = client.chat.completions.create(
                model=model or self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
                max_tokens=max_tokens or DEFAULT_MAX_TOKENS,
            )
        except openai.APIStatusError as e:
            raise ProviderUpstreamError(f"OpenAI error: {e.message}", status_code=e.status_code) from e
        except openai.OpenAIError as e:
            raise ProviderUpstreamError(f"OpenAI error: {e}") from e

        text = response.choices[0].message.content or ''
        usage = getattr(response, 'usage', None)
        tokens = getattr(usage, 'total_tokens', 0) or 0
        return Completion(text=text, tokens_used=tokens)


class AnthropicProvider(CompletionProvider):
    name = 'anthropic'

    def __init__(self, api_key: str = None, model: str = None, client=None):
        self.api_key = api_key if api_key is not None else ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ProviderConfigurationError("ANTHROPIC_API_KEY not set")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def complete(self, system_prompt, user_message, temperature=None, max_tokens=None, model=None):
        client = self.client
        try:
            response = client.messages.create(
                model=model or self.model,
                max_tokens=max_tokens or DEFAULT_MAX_TOKENS,
                temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIStatusError as e:
            raise ProviderUpstreamError(f"Anthropic error: {e.message}", status_code=e.status_code) from e
        except anthropic.AnthropicError as e:
            raise ProviderUpstreamError(f"Anthropic error: {e}") from e

        text = ''.join(
            getattr(block, 'text', '') for block in response.content
            if getattr(block, 'type', 'text') == 'text'
        )
        usage = response.usage
        tokens = (getattr(usage, 'input_tokens', 0) or 0) + (getattr(usage, 'output_tokens', 0) or 0)
        return Completion(text=text, tokens_used=tokens)


class OllamaProvider(CompletionProvider):
    """Local model server — no credential required."""
    name = 'ollama'

    def __init__(self, base_url: str = None, model: str = None):
        self.base_url = (base_url or OLLAMA_URL).rstrip('/')
        self.model = model or OLLAMA_MODEL

    def complete(self, system_prompt, user_message, temperature=None, max_tokens=None, model=None):
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "stream": False,
            "options": {
                "temperature": DEFAULT_TEMPERATURE if temperature is None else temperature,
                "num_predict": max_tokens or DEFAULT_MAX_TOKENS,
            },
        }
        try:
            resp = requests.post(f"{self.base_url}/api/chat", json=payload, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise ProviderUpstreamError(f"Ollama request failed: {e}") from e

        if not resp.ok:
            raise ProviderUpstreamError(
                f"Ollama error {resp.status_code}: {resp.text[:200]}", status_code=resp.status_code,
            )
        data = resp.json()
        if data.get('error'):
            raise ProviderUpstreamError(f"Ollama error: {data['error']}")

        text = (data.get('message') or {}).get('content', '')
        tokens = (data.get('prompt_eval_count') or 0) + (data.get('eval_count') or 0)
        return Completion(text=text, tokens_used=tokens)


COMPLETION_PROVIDERS = {
    'openai': OpenAIProvider,
    'anthropic': AnthropicProvider,
    'ollama': OllamaProvider,
}
