"""
Domain reason codes.

Every upstream error code the shares API is known to return maps to exactly one
ReasonCode. Codes that are not in the table classify as ``ErrorUnclassified``,
which the retry engine treats as transient.
"""

from enum import StrEnum


class ReasonCode(StrEnum):
    """Stable reason codes callers can branch on."""

    UNCLASSIFIED = "ErrorUnclassified"

    # Configuration / registry
    PROVIDER_NOT_REGISTERED = "ErrorProviderNotRegistered"
    NO_PROVIDERS_REGISTERED = "ErrorNoProvidersRegistered"
    DUPLICATE_PROVIDER = "ErrorDuplicateProvider"

    # Authentication
    INSUFFICIENT_AUTHENTICATION = "ErrorInsufficientAuthentication"
    FAILED_TOKEN_EXCHANGE = "ErrorFailedTokenExchange"
    SESSION_OPEN_FAILED = "ErrorSessionOpenFailed"

    # Local validation
    REQUIRED_FIELD_MISSING = "ErrorRequiredFieldMissing"
    INVALID_VOLUME_ID = "ErrorInvalidVolumeID"
    INVALID_VOLUME_NAME = "ErrorInvalidVolumeName"
    INVALID_CAPACITY = "ErrorVolumeCapacityInvalid"
    INVALID_IOPS = "ErrorVolumeIopsInvalid"

    # Upstream
    VOLUME_NOT_FOUND = "ErrorVolumeNotFound"
    VOLUME_NOT_IN_VALID_STATE = "ErrorVolumeNotInValidState"
    INVALID_PROFILE = "ErrorInvalidProfile"
    RESOURCE_GROUP_NOT_FOUND = "ErrorResourceGroupNotFound"
    ENCRYPTION_KEY_NOT_FOUND = "ErrorEncryptionKeyNotFound"
    VOLUME_NAME_DUPLICATE = "ErrorVolumeNameDuplicate"
    QUOTA_EXCEEDED = "ErrorQuotaExceeded"
    UNAUTHORIZED = "ErrorUnauthorized"
    FORBIDDEN = "ErrorForbidden"
    RATE_LIMITED = "ErrorRateLimited"
    INTERNAL_ERROR = "ErrorInternal"
    SERVICE_UNAVAILABLE = "ErrorServiceUnavailable"
    TRANSPORT = "ErrorTransport"
    INVALID_RESPONSE = "ErrorInvalidResponse"
    SESSION_CLOSED = "ErrorSessionClosed"


UPSTREAM_REASON_CODES: dict[str, ReasonCode] = {
    "validation_invalid_name": ReasonCode.INVALID_VOLUME_NAME,
    "shares_name_invalid": ReasonCode.INVALID_VOLUME_NAME,
    "shares_name_duplicate": ReasonCode.VOLUME_NAME_DUPLICATE,
    "volume_capacity_max": ReasonCode.INVALID_CAPACITY,
    "volume_capacity_zero_or_negative": ReasonCode.INVALID_CAPACITY,
    "shares_size_invalid": ReasonCode.INVALID_CAPACITY,
    "shares_profile_capacity_iops_invalid": ReasonCode.INVALID_IOPS,
    "volume_profile_iops_invalid": ReasonCode.INVALID_IOPS,
    "shares_profile_not_found": ReasonCode.INVALID_PROFILE,
    "volume_id_invalid": ReasonCode.INVALID_VOLUME_ID,
    "shares_id_invalid": ReasonCode.INVALID_VOLUME_ID,
    "not_found": ReasonCode.VOLUME_NOT_FOUND,
    "shares_not_found": ReasonCode.VOLUME_NOT_FOUND,
    "share_not_found": ReasonCode.VOLUME_NOT_FOUND,
    "volume_name_not_found": ReasonCode.VOLUME_NOT_FOUND,
    "resource_group_not_found": ReasonCode.RESOURCE_GROUP_NOT_FOUND,
    "invalid_resource_group": ReasonCode.RESOURCE_GROUP_NOT_FOUND,
    "encryption_key_not_found": ReasonCode.ENCRYPTION_KEY_NOT_FOUND,
    "shares_quota_exceeded": ReasonCode.QUOTA_EXCEEDED,
    "not_authorized": ReasonCode.UNAUTHORIZED,
    "forbidden": ReasonCode.FORBIDDEN,
    "rate_limit_exceeded": ReasonCode.RATE_LIMITED,
    "internal_error": ReasonCode.INTERNAL_ERROR,
    "service_unavailable": ReasonCode.SERVICE_UNAVAILABLE,
}

# A request failing with one of these will keep failing until the caller changes it.
TERMINAL_REASON_CODES = frozenset(
    {
        ReasonCode.INVALID_VOLUME_NAME,
        ReasonCode.VOLUME_NAME_DUPLICATE,
        ReasonCode.INVALID_CAPACITY,
        ReasonCode.INVALID_IOPS,
        ReasonCode.INVALID_PROFILE,
        ReasonCode.INVALID_VOLUME_ID,
        ReasonCode.VOLUME_NOT_FOUND,
        ReasonCode.RESOURCE_GROUP_NOT_FOUND,
        ReasonCode.ENCRYPTION_KEY_NOT_FOUND,
        ReasonCode.QUOTA_EXCEEDED,
        ReasonCode.INVALID_RESPONSE,
        ReasonCode.SESSION_CLOSED,
    }
)


def reason_code_for(upstream_code: str | None) -> ReasonCode:
    """Map a raw upstream error code to its domain reason code."""
    if not upstream_code:
        return ReasonCode.UNCLASSIFIED
    return UPSTREAM_REASON_CODES.get(upstream_code, ReasonCode.UNCLASSIFIED)


def is_terminal(reason_code: ReasonCode) -> bool:
    return reason_code in TERMINAL_REASON_CODES
