"""
vpc_file client facade.

This is the main entry point for users of the library. It wires provider
registration, session opening and the volume primitives behind one object.
"""

import threading
from collections.abc import Iterator
from typing import Self

import httpx
import structlog

from vpc_file.config import VPCFileConfig
from vpc_file.models.share import ListVolumeFilters
from vpc_file.models.volume import DeleteResult, VolumeList, VolumeRecord, VolumeSpec
from vpc_file.providers.init_provider import init_providers, open_provider_session
from vpc_file.providers.protocol import ProviderSession
from vpc_file.providers.registry import ProviderRegistry

logger = structlog.get_logger(__name__)


class VPCFileClient:
    """
    Client for VPC file share volumes.

    Example:
        ```python
        config = VPCFileConfig(vpc=VPCConfig(enabled=True, api_key="..."))

        with VPCFileClient(config) as client:
            volume = client.create_volume(VolumeSpec(name="data", capacity=10, zone="us-south-1"))
            page = client.list_volumes(filters=ListVolumeFilters(zone_name="us-south-1"))
            client.delete_volume(volume.volume_id)
        ```

    Args:
        config: Client configuration.
        provider_id: Provider identity to open. Defaults to the first registered provider.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        config: VPCFileConfig,
        *,
        provider_id: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the client. No network call is made until first use.

        Args:
            config: Client configuration.
            provider_id: Provider identity to open.
            transport: Optional transport for testing.
            timeout: Bound in seconds on each network call made while opening the session.
        """
        self._config = config
        self._provider_id = provider_id
        self._transport = transport
        self._timeout = timeout

        self._registry: ProviderRegistry | None = None
        self._session: ProviderSession | None = None
        self._init_lock = threading.Lock()

    def __enter__(self) -> Self:
        """Enter context, opening the provider session."""
        self._ensure_session()
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit context."""
        self.close()

    def _ensure_session(self) -> ProviderSession:
        """Ensure the registry is built and the session is open."""
        with self._init_lock:
            if self._session is not None:
                return self._session

            if self._registry is None:
                self._registry = init_providers(self._config, transport=self._transport)

            provider_id = self._provider_id or self._registry.provider_ids[0]
            self._session = open_provider_session(
                self._config, self._registry, provider_id, timeout=self._timeout
            )
            logger.debug("Client initialized", provider_id=provider_id)
            return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        with self._init_lock:
            if self._session is not None:
                self._session.close()
                self._session = None
            logger.debug("Client closed")

    @property
    def is_open(self) -> bool:
        """Check if a provider session is open."""
        return self._session is not None

    @property
    def registry(self) -> ProviderRegistry | None:
        return self._registry

    def create_volume(self, spec: VolumeSpec) -> VolumeRecord:
        """
        Create a volume and wait until it is usable.

        Raises:
            ValidationError: If the volume has no name or a non-positive capacity.
            VolumeNotReadyError: If the volume never reaches a usable state.
            APIError: If the API rejects the request.
        """
        return self._ensure_session().create_volume(spec)

    def get_volume(self, volume_id: str) -> VolumeRecord:
        """
        Get a volume by ID.

        Raises:
            InvalidVolumeIDError: If the ID is not a UUID.
            VolumeNotFoundError: If the volume does not exist.
        """
        return self._ensure_session().get_volume(volume_id)

    def get_volume_by_name(self, name: str) -> VolumeRecord:
        return self._ensure_session().get_volume_by_name(name)

    def expand_volume(self, volume_id: str, capacity: int | str) -> VolumeRecord:
        return self._ensure_session().expand_volume(volume_id, capacity)

    def delete_volume(self, volume_id: str) -> DeleteResult:
        """
        Delete a volume.

        Returns:
            ``DeleteResult.ALREADY_ABSENT`` if the volume did not exist.
        """
        return self._ensure_session().delete_volume(volume_id)

    def list_volumes(
        self,
        limit: int = 0,
        start: str | None = None,
        filters: ListVolumeFilters | None = None,
    ) -> VolumeList:
        """
        List one page of volumes.

        Example:
            ```python
            page = client.list_volumes(limit=50)
            while page.has_more:
                page = client.list_volumes(limit=50, start=page.next_cursor)
            ```
        """
        return self._ensure_session().list_volumes(limit, start, filters)

    def iter_volumes(
        self, filters: ListVolumeFilters | None = None, *, page_size: int = 50
    ) -> Iterator[VolumeRecord]:
        """Iterate over every matching volume across pages."""
        return self._ensure_session().iter_volumes(filters, page_size=page_size)
