"""Registry of enabled provider implementations, keyed by provider identity."""

import threading

import structlog

from vpc_file.exceptions import DuplicateProviderError, ProviderNotRegisteredError
from vpc_file.providers.protocol import Provider

logger = structlog.get_logger(__name__)


class ProviderRegistry:
    """
    Provider lookup by identity.

    Populated once at startup. Registering the same identity twice raises
    instead of overwriting, so a lookup always returns the provider that was
    registered first.
    """

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._lock = threading.Lock()

    def register(self, provider_id: str, provider: Provider) -> None:
        """
        Register a provider.

        Raises:
            DuplicateProviderError: If ``provider_id`` is already registered.
        """
        with self._lock:
            if provider_id in self._providers:
                raise DuplicateProviderError(provider_id)
            self._providers[provider_id] = provider
        logger.debug("Provider registered", provider_id=provider_id)

    def get(self, provider_id: str) -> Provider:
        """
        Exact-match lookup.

        Raises:
            ProviderNotRegisteredError: If nothing is registered under ``provider_id``.
        """
        provider = self._providers.get(provider_id)
        if provider is None:
            raise ProviderNotRegisteredError(provider_id)
        return provider

    @property
    def provider_ids(self) -> list[str]:
        """Registered identities, in registration order."""
        return list(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.provider_ids!r})"
