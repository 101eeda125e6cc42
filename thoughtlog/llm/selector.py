"""
Provider selection by configured credentials.

The priority is fixed: the primary slot (OpenAI) wins whenever it holds a
key, otherwise the secondary slot (Claude) is used. Every entry point goes
through ProviderSelector so they all honor the same order.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from thoughtlog.core.config import Settings
from thoughtlog.core.exceptions import NoProviderConfiguredError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.llm.client import ClaudeClient, OpenAIClient, ProviderClient

logger = get_logger(__name__)

ClientFactory = Callable[[str], ProviderClient]


@dataclass(frozen=True)
class ProviderCredentials:
    """Credential slots; None or blank means not configured."""
    primary_api_key: Optional[str] = None
    secondary_api_key: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderCredentials":
        return cls(
            primary_api_key=settings.openai_api_key or None,
            secondary_api_key=settings.claude_api_key or None,
        )

    def configured_slots(self) -> List[str]:
        slots = []
        if _is_set(self.primary_api_key):
            slots.append("primary")
        if _is_set(self.secondary_api_key):
            slots.append("secondary")
        return slots


def _is_set(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class ProviderSelector:
    """
    Chooses the ProviderClient for a call.

    Client factories take an API key and return a client; they default to
    the real adapters and are swapped for fakes in tests.

    Example:
        >>> selector = ProviderSelector(ProviderCredentials(secondary_api_key="sk-ant"))
        >>> selector.select().name
        'Claude'
    """

    def __init__(
        self,
        credentials: ProviderCredentials,
        primary_factory: ClientFactory = OpenAIClient,
        secondary_factory: ClientFactory = ClaudeClient,
    ):
        self.credentials = credentials
        self._primary_factory = primary_factory
        self._secondary_factory = secondary_factory

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderSelector":
        """Build a selector whose clients use the configured models and timeout."""
        timeout = settings.llm_timeout

        def primary(api_key: str) -> ProviderClient:
            return OpenAIClient(api_key, model=settings.openai_model, timeout=timeout)

        def secondary(api_key: str) -> ProviderClient:
            return ClaudeClient(
                api_key,
                fast_model=settings.claude_fast_model,
                smart_model=settings.claude_smart_model,
                timeout=timeout,
            )

        return cls(ProviderCredentials.from_settings(settings), primary, secondary)

    def select(self) -> ProviderClient:
        """
        Return the first configured provider client.

        Raises:
            NoProviderConfiguredError: If neither slot holds a credential
        """
        if _is_set(self.credentials.primary_api_key):
            client = self._primary_factory(self.credentials.primary_api_key.strip())
        elif _is_set(self.credentials.secondary_api_key):
            client = self._secondary_factory(self.credentials.secondary_api_key.strip())
        else:
            logger.error("No AI API keys configured")
            raise NoProviderConfiguredError()

        logger.info(f"Using {client.name} provider")
        return client
