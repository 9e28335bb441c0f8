"""
Authentication-related domain models.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class AuthType(StrEnum):
    """Kind of bearer material carried by ContextCredentials."""

    IAM_ACCESS_TOKEN = "iam_access_token"
    DEFERRED = "deferred"


@dataclass(frozen=True, kw_only=True)
class ContextCredentials:
    """
    Resolved authentication material for one session open.

    Never cached: a fresh value is produced for every open call.

    Attributes:
        auth_type: Scheme that produced the credential.
        credential: Bearer token, or empty when resolution is deferred.
        provider_id: Provider identity the credentials were resolved for.
        iam_account_id: Account owning the token, when the token service reports it.
    """

    auth_type: AuthType
    credential: str = ""
    provider_id: str = ""
    iam_account_id: str | None = None

    @classmethod
    def deferred(cls, provider_id: str) -> Self:
        """Sentinel telling the session open step to fetch credentials itself."""
        return cls(auth_type=AuthType.DEFERRED, provider_id=provider_id)

    @property
    def is_deferred(self) -> bool:
        return self.auth_type == AuthType.DEFERRED or not self.credential

    def __repr__(self) -> str:
        masked = "***" if self.credential else ""
        return (
            f"ContextCredentials(auth_type={self.auth_type!r}, credential={masked!r}, "
            f"provider_id={self.provider_id!r}, iam_account_id={self.iam_account_id!r})"
        )


@dataclass(frozen=True, kw_only=True)
class IAMToken:
    """
    Access token returned by the IAM token service.

    Attributes:
        access_token: Bearer token.
        token_type: Usually "Bearer".
        expires_in: Token lifetime in seconds.
        account_id: Account the token belongs to, if known.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0
    account_id: str | None = None
