"""
Provider clients - one adapter per LLM provider family.

Every adapter exposes the same capability:

    invoke(system_instruction, payload_text, options) -> raw text

Only the adapter knows its provider's wire format. A non-success HTTP status
raises ProviderHttpError, transport failures raise ProviderError, and nothing
is retried here; retry policy belongs to the caller.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from thoughtlog.core.exceptions import ProviderError, ProviderHttpError
from thoughtlog.core.logging_config import get_logger

logger = get_logger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

FAST_TIER = "fast"
SMART_TIER = "smart"


@dataclass(frozen=True)
class GenerationOptions:
    """
    Request settings chosen by the prompt for one call.

    Attributes:
        tier: 'fast' for short deterministic tasks, 'smart' for open-ended ones
        temperature: Sampling temperature
        max_tokens: Upper bound on the reply length
    """
    tier: str
    temperature: float
    max_tokens: int


class ProviderClient(ABC):
    """Stateless adapter for a single provider."""

    name: str = "provider"

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        if not api_key:
            raise ValueError(f"{self.name} client requires an API key")
        self.api_key = api_key
        self.timeout = timeout

    @abstractmethod
    def invoke(self, system_instruction: str, payload_text: str, options: GenerationOptions) -> str:
        """Send one non-streaming request and return the model's raw text."""

    def _post(self, url: str, headers: Dict[str, str], body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON body and return the decoded JSON envelope."""
        try:
            response = requests.post(url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{self.name} request failed: {e}")
            raise ProviderError(self.name, f"{self.name} request failed: {e}") from e

        if not response.ok:
            logger.error(f"{self.name} API error: status={response.status_code}")
            raise ProviderHttpError(self.name, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"{self.name} returned a non-JSON envelope") from e


class OpenAIClient(ProviderClient):
    """OpenAI-style chat completions adapter (primary provider)."""

    name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1-2025-04-14",
        timeout: Optional[float] = None,
        url: str = OPENAI_CHAT_URL,
    ):
        super().__init__(api_key, timeout)
        self.model = model
        self.url = url

    def invoke(self, system_instruction: str, payload_text: str, options: GenerationOptions) -> str:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": payload_text},
            ],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"OpenAI request: model={self.model}, temperature={options.temperature}")
        data = self._post(self.url, headers, body)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(self.name, "Unexpected OpenAI response envelope") from e

        return content or ""


class ClaudeClient(ProviderClient):
    """Anthropic messages adapter (secondary provider)."""

    name = "Claude"

    def __init__(
        self,
        api_key: str,
        fast_model: str = "claude-3-haiku-20240307",
        smart_model: str = "claude-3-sonnet-20240229",
        timeout: Optional[float] = None,
        url: str = ANTHROPIC_MESSAGES_URL,
    ):
        super().__init__(api_key, timeout)
        self.models = {FAST_TIER: fast_model, SMART_TIER: smart_model}
        self.url = url

    def invoke(self, system_instruction: str, payload_text: str, options: GenerationOptions) -> str:
        model = self.models.get(options.tier, self.models[SMART_TIER])
        body = {
            "model": model,
            "system": system_instruction,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "messages": [
                {"role": "user", "content": payload_text},
            ],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

        logger.debug(f"Claude request: model={model}, temperature={options.temperature}")
        data = self._post(self.url, headers, body)

        try:
            blocks = data["content"]
            return "".join(block.get("text", "") for block in blocks if block.get("type") == "text")
        except (KeyError, TypeError, AttributeError) as e:
            raise ProviderError(self.name, "Unexpected Claude response envelope") from e
