"""
Provider initialization and session opening.

``init_providers`` is called once at startup. ``open_provider_session`` turns
a provider identity into a usable session and reports whether a failure is
worth retrying; it never retries internally.
"""

import httpx
import structlog

from vpc_file.config import VPCFileConfig
from vpc_file.exceptions import NoProvidersRegisteredError, SessionOpenError, VPCFileError
from vpc_file.providers.credentials import generate_context_credentials
from vpc_file.providers.protocol import ProviderSession
from vpc_file.providers.registry import ProviderRegistry
from vpc_file.providers.vpc_provider import VPCFileProvider

logger = structlog.get_logger(__name__)


def init_providers(
    config: VPCFileConfig, *, transport: httpx.BaseTransport | None = None
) -> ProviderRegistry:
    """
    Register a provider for every enabled scheme.

    Args:
        config: Client configuration.
        transport: Optional httpx transport for testing, shared by all providers.

    Returns:
        Registry holding one provider per distinct enabled identity.

    Raises:
        NoProvidersRegisteredError: If every sub-config is absent or disabled.
    """
    registry = ProviderRegistry()

    enabled_ids = []
    if config.vpc is not None and config.vpc.enabled:
        enabled_ids.append(config.vpc.provider_type)
    if config.iks is not None and config.iks.enabled:
        enabled_ids.append(config.iks.provider_name)

    for provider_id in enabled_ids:
        if provider_id in registry:
            logger.debug("Provider already registered by another scheme", provider_id=provider_id)
            continue
        logger.info("Configuring VPC file provider", provider_id=provider_id)
        registry.register(provider_id, VPCFileProvider(config, provider_id, transport=transport))

    if not len(registry):
        raise NoProvidersRegisteredError()

    logger.info("Provider registration done", providers=registry.provider_ids)
    return registry


def open_provider_session(
    config: VPCFileConfig,
    registry: ProviderRegistry,
    provider_id: str,
    *,
    timeout: float | None = None,
) -> ProviderSession:
    """
    Open a session for ``provider_id``.

    Args:
        config: Client configuration.
        registry: Registry returned by ``init_providers``.
        provider_id: Provider identity to open.
        timeout: Bound in seconds on each network call made while opening.
            It does not cover retries of later volume operations.

    Returns:
        An open session, owned by the caller.

    Raises:
        SessionOpenError: On any failure. ``fatal`` is always True at this
            layer; the cause is chained as ``__cause__``.
    """
    try:
        provider = registry.get(provider_id)
    except VPCFileError as e:
        logger.error("Provider not available, it might not be registered", provider_id=provider_id)
        raise _open_error(provider_id, e) from e

    try:
        factory = provider.context_credentials_factory(timeout=timeout)
    except VPCFileError as e:
        logger.error("Failed to build credentials factory", provider_id=provider_id)
        raise _open_error(provider_id, e) from e

    try:
        credentials = generate_context_credentials(config, provider_id, factory)
        session = provider.open_session(credentials, timeout=timeout)
    except VPCFileError as e:
        logger.error(
            "Failed to open provider session", provider_id=provider_id, error=str(e), fatal=True
        )
        raise _open_error(provider_id, e) from e

    return session


def _open_error(provider_id: str, cause: VPCFileError) -> SessionOpenError:
    return SessionOpenError(
        f"Failed to open provider session: {cause}",
        provider_id=provider_id,
        fatal=True,
        reason_code=cause.reason_code,
    )
