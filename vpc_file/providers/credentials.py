"""
Context credential resolution.

Picks the authentication scheme for a provider identity and produces the
credentials a session is opened with.
"""

import structlog

from vpc_file.api.endpoints.iam import get_iam_access_token
from vpc_file.api.http_client import HttpClient
from vpc_file.config import VPCFileConfig
from vpc_file.exceptions import InsufficientAuthenticationError
from vpc_file.models.auth import AuthType, ContextCredentials
from vpc_file.providers.protocol import ContextCredentialsFactory

logger = structlog.get_logger(__name__)


class IAMContextCredentialsFactory:
    """Produces IAM access-token credentials by exchanging an API key."""

    def __init__(
        self, http: HttpClient, provider_id: str, *, timeout: float | None = None
    ) -> None:
        """
        Args:
            http: HTTP client bound to the IAM base URL.
            provider_id: Identity stamped on the produced credentials.
            timeout: Per-request timeout for the token exchange, in seconds.
        """
        self._http = http
        self._provider_id = provider_id
        self._timeout = timeout

    def for_iam_access_token(self, api_key: str) -> ContextCredentials:
        """
        Exchange an API key for IAM access-token credentials.

        Raises:
            InsufficientAuthenticationError: If the API key is empty.
            TokenExchangeError: If the token service rejects the key.
        """
        if not api_key:
            msg = "API key required for IAM access token"
            raise InsufficientAuthenticationError(msg, provider_id=self._provider_id)

        with self._http:
            token = get_iam_access_token(self._http, api_key, timeout=self._timeout)

        return ContextCredentials(
            auth_type=AuthType.IAM_ACCESS_TOKEN,
            credential=token.access_token,
            provider_id=self._provider_id,
            iam_account_id=token.account_id,
        )


def generate_context_credentials(
    config: VPCFileConfig,
    provider_id: str,
    factory: ContextCredentialsFactory,
) -> ContextCredentials:
    """
    Resolve credentials for ``provider_id``. The first matching scheme wins.

    1. Token scheme tagged with ``provider_id``: exchange the configured API key.
       Factory errors propagate unchanged.
    2. Deferred scheme tagged with ``provider_id``: return the empty sentinel;
       the provider fetches credentials while opening the session.
    3. Otherwise: InsufficientAuthenticationError.

    Raises:
        InsufficientAuthenticationError: If no configured scheme matches.
    """
    logger.info("Generating context credentials", provider_id=provider_id)

    if config.vpc is not None and provider_id == config.vpc.provider_type:
        logger.debug("Using IAM access token scheme", provider_id=provider_id)
        return factory.for_iam_access_token(config.vpc.api_key)

    if config.iks is not None and provider_id == config.iks.provider_name:
        logger.debug("Deferring credentials to session open", provider_id=provider_id)
        return ContextCredentials.deferred(provider_id)

    raise InsufficientAuthenticationError(provider_id=provider_id)
