"""
VPC file share provider.

Opens sessions against the regional VPC API and exposes the volume primitives
through them.
"""

import os
from collections.abc import Iterator
from typing import Any, Self

import httpx
import structlog

from vpc_file.api.http_client import HttpClient
from vpc_file.config import VPCFileConfig
from vpc_file.core.retry import RetryPolicy
from vpc_file.exceptions import InsufficientAuthenticationError, SessionClosedError
from vpc_file.models.auth import ContextCredentials
from vpc_file.models.share import ListVolumeFilters
from vpc_file.models.volume import DeleteResult, VolumeList, VolumeRecord, VolumeSpec
from vpc_file.providers.credentials import IAMContextCredentialsFactory
from vpc_file.services.volume_service import VolumeService

logger = structlog.get_logger(__name__)


class VPCFileSession:
    """
    Session bound to one provider identity and one set of credentials.

    Owned by the caller. Holds an HTTP connection pool released by ``close``
    or on context exit; nothing else needs cleanup.
    """

    def __init__(
        self,
        provider_id: str,
        credentials: ContextCredentials,
        http: HttpClient,
        *,
        policy: RetryPolicy | None = None,
        default_resource_group_id: str = "",
    ) -> None:
        self._provider_id = provider_id
        self._credentials = credentials
        self._http = http
        self._closed = False
        self._volumes = VolumeService(
            http,
            provider_id=provider_id,
            policy=policy,
            default_resource_group_id=default_resource_group_id,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def credentials(self) -> ContextCredentials:
        return self._credentials

    @property
    def retry_policy(self) -> RetryPolicy | None:
        return self._volumes.policy

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _service(self) -> VolumeService:
        if self._closed:
            raise SessionClosedError(self._provider_id)
        return self._volumes

    def create_volume(self, spec: VolumeSpec) -> VolumeRecord:
        return self._service().create_volume(spec)

    def get_volume(self, volume_id: str) -> VolumeRecord:
        return self._service().get_volume(volume_id)

    def get_volume_by_name(self, name: str) -> VolumeRecord:
        return self._service().get_volume_by_name(name)

    def expand_volume(self, volume_id: str, capacity: int | str) -> VolumeRecord:
        return self._service().expand_volume(volume_id, capacity)

    def delete_volume(self, volume_id: str) -> DeleteResult:
        return self._service().delete_volume(volume_id)

    def list_volumes(
        self,
        limit: int = 0,
        start: str | None = None,
        filters: ListVolumeFilters | None = None,
    ) -> VolumeList:
        return self._service().list_volumes(limit, start, filters)

    def iter_volumes(
        self, filters: ListVolumeFilters | None = None, *, page_size: int = 50
    ) -> Iterator[VolumeRecord]:
        return self._service().iter_volumes(filters, page_size=page_size)

    def close(self) -> None:
        """Release the HTTP connection pool. The session cannot be used afterwards."""
        if self._closed:
            return
        self._closed = True
        self._http.close()
        self._http.clear_token()
        logger.debug("Session closed", provider_id=self._provider_id)


class VPCFileProvider:
    """Provider implementation for VPC file shares."""

    def __init__(
        self,
        config: VPCFileConfig,
        provider_id: str,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            provider_id: Identity this provider is registered under.
            transport: Optional httpx transport for testing.
        """
        self._config = config
        self._provider_id = provider_id
        self._transport = transport

    @property
    def provider_id(self) -> str:
        return self._provider_id

    def context_credentials_factory(
        self, *, timeout: float | None = None
    ) -> IAMContextCredentialsFactory:
        settings = self._config.api_settings
        http = HttpClient(settings.iam_url, timeout=settings.timeout, transport=self._transport)
        return IAMContextCredentialsFactory(http, self._provider_id, timeout=timeout)

    def open_session(
        self, credentials: ContextCredentials, *, timeout: float | None = None
    ) -> VPCFileSession:
        """
        Open a session.

        Deferred credentials are resolved here from the API key held in the
        environment variable configured for the deferred scheme.

        Raises:
            InsufficientAuthenticationError: If deferred credentials cannot be found.
            TokenExchangeError: If the API key is rejected.
        """
        if credentials.is_deferred:
            credentials = self._resolve_deferred_credentials(timeout)

        settings = self._config.api_settings
        http = HttpClient(
            settings.endpoint_url,
            timeout=settings.timeout,
            api_version=settings.api_version,
            transport=self._transport,
        )
        http.set_token(credentials.credential)

        logger.info("Provider session opened", provider_id=self._provider_id)
        return VPCFileSession(
            self._provider_id,
            credentials,
            http,
            policy=settings.retry_policy(),
            default_resource_group_id=settings.resource_group_id,
        )

    def _resolve_deferred_credentials(self, timeout: float | None) -> ContextCredentials:
        iks = self._config.iks
        if iks is None:
            raise InsufficientAuthenticationError(provider_id=self._provider_id)

        api_key = os.environ.get(iks.api_key_env_var, "")
        if not api_key:
            msg = f"Environment variable {iks.api_key_env_var} is not set"
            raise InsufficientAuthenticationError(msg, provider_id=self._provider_id)

        logger.debug(
            "Resolving deferred credentials from environment",
            provider_id=self._provider_id,
            env_var=iks.api_key_env_var,
        )
        factory = self.context_credentials_factory(timeout=timeout)
        return factory.for_iam_access_token(api_key)
