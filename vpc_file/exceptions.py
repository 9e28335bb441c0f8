"""
vpc_file exception hierarchy.

All exceptions inherit from VPCFileError and carry a ``reason_code`` so callers
can branch on the cause without matching on message text.
"""

from typing import Any

from vpc_file.core.reason_code import ReasonCode, reason_code_for
from vpc_file.models.errors import ErrorEnvelope


class VPCFileError(Exception):
    """Base exception for all vpc_file errors."""

    reason_code: ReasonCode = ReasonCode.UNCLASSIFIED

    def __init__(
        self, message: str, *, reason_code: ReasonCode | None = None, **context: Any
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context
        if reason_code is not None:
            self.reason_code = reason_code

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ConfigurationError(VPCFileError):
    """Provider configuration or registry problem. Never retryable."""


class ProviderNotRegisteredError(ConfigurationError):
    """No provider is registered under the requested identity."""

    reason_code = ReasonCode.PROVIDER_NOT_REGISTERED

    def __init__(self, provider_id: str) -> None:
        super().__init__("Provider not registered", provider_id=provider_id)
        self.provider_id = provider_id


class NoProvidersRegisteredError(ConfigurationError):
    """Every provider sub-config is absent or disabled."""

    reason_code = ReasonCode.NO_PROVIDERS_REGISTERED

    def __init__(self, message: str = "no providers registered") -> None:
        super().__init__(message)


class DuplicateProviderError(ConfigurationError):
    """A provider is already registered under this identity."""

    reason_code = ReasonCode.DUPLICATE_PROVIDER

    def __init__(self, provider_id: str) -> None:
        super().__init__("Provider already registered", provider_id=provider_id)
        self.provider_id = provider_id


class AuthenticationError(VPCFileError):
    """Authentication failed."""


class InsufficientAuthenticationError(AuthenticationError):
    """No configured authentication scheme matches the requested provider."""

    reason_code = ReasonCode.INSUFFICIENT_AUTHENTICATION

    def __init__(
        self, message: str = "Insufficient authentication credentials", **context: Any
    ) -> None:
        super().__init__(message, **context)


class TokenExchangeError(AuthenticationError):
    """The IAM token endpoint rejected the API key or could not be reached."""

    reason_code = ReasonCode.FAILED_TOKEN_EXCHANGE

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.status_code = status_code


class SessionOpenError(VPCFileError):
    """
    Opening a provider session failed.

    ``fatal`` tells the caller whether retrying the whole open is pointless.
    The underlying error is available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        provider_id: str,
        fatal: bool,
        reason_code: ReasonCode = ReasonCode.SESSION_OPEN_FAILED,
    ) -> None:
        super().__init__(message, reason_code=reason_code, provider_id=provider_id, fatal=fatal)
        self.provider_id = provider_id
        self.fatal = fatal


class SessionClosedError(VPCFileError):
    """The session was used after ``close``."""

    reason_code = ReasonCode.SESSION_CLOSED

    def __init__(self, provider_id: str) -> None:
        super().__init__("Session is closed", provider_id=provider_id)
        self.provider_id = provider_id


class ValidationError(VPCFileError):
    """Caller input rejected before any network call."""

    reason_code = ReasonCode.REQUIRED_FIELD_MISSING

    def __init__(
        self, message: str, *, field: str, reason_code: ReasonCode | None = None
    ) -> None:
        super().__init__(message, reason_code=reason_code, field=field)
        self.field = field


class InvalidVolumeIDError(ValidationError):
    """Volume identifier is not a canonical UUID."""

    def __init__(self, volume_id: str) -> None:
        super().__init__(
            f"Invalid volume ID {volume_id!r}",
            field="volume_id",
            reason_code=ReasonCode.INVALID_VOLUME_ID,
        )
        self.volume_id = volume_id


class APIError(VPCFileError):
    """The shares API returned an error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        envelope: ErrorEnvelope | None = None,
        endpoint: str | None = None,
    ) -> None:
        reason_code = reason_code_for(envelope.code) if envelope else None
        super().__init__(
            message, reason_code=reason_code, status_code=status_code, endpoint=endpoint
        )
        self.status_code = status_code
        self.envelope = envelope
        self.endpoint = endpoint

    @property
    def upstream_code(self) -> str | None:
        """Raw code of the first envelope item."""
        return self.envelope.code if self.envelope else None

    def __str__(self) -> str:
        if self.envelope is None:
            return super().__str__()
        first = self.envelope.first
        return f"Trace Code:{self.envelope.trace}, {first.message} Please check {first.more_info}"


class VolumeNotFoundError(APIError):
    """Volume does not exist."""

    reason_code = ReasonCode.VOLUME_NOT_FOUND

    def __init__(
        self,
        message: str,
        *,
        envelope: ErrorEnvelope | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message, status_code=404, envelope=envelope, endpoint=endpoint)
        self.reason_code = ReasonCode.VOLUME_NOT_FOUND


class InvalidResponseError(APIError):
    """A success response that cannot be decoded into the expected shape."""

    reason_code = ReasonCode.INVALID_RESPONSE

    def __init__(
        self, message: str, *, status_code: int = 200, endpoint: str | None = None
    ) -> None:
        super().__init__(message, status_code=status_code, endpoint=endpoint)


class VolumeNotReadyError(VPCFileError):
    """The volume exists but is not in a usable state."""

    reason_code = ReasonCode.VOLUME_NOT_IN_VALID_STATE

    def __init__(self, volume_id: str, status: str | None) -> None:
        super().__init__("Volume not in valid state", volume_id=volume_id, status=status)
        self.volume_id = volume_id
        self.status = status


class NetworkError(VPCFileError):
    """Network-level error (connection failed, timeout)."""

    reason_code = ReasonCode.TRANSPORT
