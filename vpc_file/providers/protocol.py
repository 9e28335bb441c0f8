"""
Provider protocol definitions.

A provider is registered once per identity and exposes two capabilities:
producing a context-credentials factory, and opening a session from resolved
credentials. Sessions expose the volume primitives.
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from vpc_file.models.auth import ContextCredentials
from vpc_file.models.share import ListVolumeFilters
from vpc_file.models.volume import DeleteResult, VolumeList, VolumeRecord, VolumeSpec


@runtime_checkable
class ContextCredentialsFactory(Protocol):
    """Produces bearer credentials for a provider."""

    def for_iam_access_token(self, api_key: str) -> ContextCredentials:
        """
        Exchange an API key for IAM access-token credentials.

        Raises:
            InsufficientAuthenticationError: If the API key is empty.
            TokenExchangeError: If the token service rejects the key.
        """
        ...


@runtime_checkable
class ProviderSession(Protocol):
    """A live handle bound to one provider identity and its credentials."""

    @property
    def provider_id(self) -> str: ...

    def create_volume(self, spec: VolumeSpec) -> VolumeRecord: ...

    def get_volume(self, volume_id: str) -> VolumeRecord: ...

    def get_volume_by_name(self, name: str) -> VolumeRecord: ...

    def expand_volume(self, volume_id: str, capacity: int | str) -> VolumeRecord: ...

    def delete_volume(self, volume_id: str) -> DeleteResult: ...

    def list_volumes(
        self,
        limit: int = 0,
        start: str | None = None,
        filters: ListVolumeFilters | None = None,
    ) -> VolumeList: ...

    def iter_volumes(
        self, filters: ListVolumeFilters | None = None, *, page_size: int = 50
    ) -> Iterator[VolumeRecord]: ...

    def close(self) -> None: ...


@runtime_checkable
class Provider(Protocol):
    """A registered provider implementation."""

    def context_credentials_factory(
        self, *, timeout: float | None = None
    ) -> ContextCredentialsFactory:
        """
        Build the credentials factory for this provider.

        Args:
            timeout: Bound on each network call the factory makes, in seconds.
        """
        ...

    def open_session(
        self, credentials: ContextCredentials, *, timeout: float | None = None
    ) -> ProviderSession:
        """
        Open a session from resolved credentials.

        Deferred credentials are resolved here by the provider itself.

        Raises:
            AuthenticationError: If credentials cannot be obtained.
        """
        ...
