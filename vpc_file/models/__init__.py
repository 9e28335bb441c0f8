"""
Domain models for vpc_file.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from vpc_file.models.auth import AuthType, ContextCredentials, IAMToken
from vpc_file.models.errors import ErrorEnvelope, ErrorItem
from vpc_file.models.share import (
    FileShare,
    ListVolumeFilters,
    ResourceGroup,
    ShareCollection,
    ShareCreateRequest,
)
from vpc_file.models.volume import (
    DeleteResult,
    VolumeList,
    VolumeRecord,
    VolumeSpec,
    VolumeStatus,
)

__all__ = [
    # Auth
    "AuthType",
    "ContextCredentials",
    "IAMToken",
    # Errors
    "ErrorEnvelope",
    "ErrorItem",
    # Shares API
    "FileShare",
    "ListVolumeFilters",
    "ResourceGroup",
    "ShareCollection",
    "ShareCreateRequest",
    # Volumes
    "DeleteResult",
    "VolumeList",
    "VolumeRecord",
    "VolumeSpec",
    "VolumeStatus",
]
