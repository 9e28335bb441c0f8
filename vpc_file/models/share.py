"""
Shares API models.

These mirror the REST representation and are converted into VolumeRecord
by the volume service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, kw_only=True)
class ResourceGroup:
    id: str = ""
    name: str = ""


@dataclass(frozen=True, kw_only=True)
class FileShare:
    """
    A file share as returned by the shares API.

    ``lifecycle_state`` is the raw state string ("pending", "stable", ...).
    """

    share_id: str
    name: str
    size: int = 0
    iops: int = 0
    created_at: datetime | None = None
    zone_name: str | None = None
    lifecycle_state: str | None = None
    resource_group: ResourceGroup | None = None
    encryption_key_crn: str | None = None
    profile_name: str | None = None
    crn: str | None = None
    href: str | None = None


@dataclass(frozen=True, kw_only=True)
class ShareCollection:
    """
    One page of the share list.

    Attributes:
        shares: Shares in upstream order.
        next_start: Cursor for the following page, None on the last page.
        total_count: Total number of shares matching the query, if reported.
    """

    shares: tuple[FileShare, ...] = ()
    next_start: str | None = None
    total_count: int | None = None


@dataclass(frozen=True, kw_only=True)
class ListVolumeFilters:
    """
    Optional list predicates. ``None`` or an empty string means no constraint.
    """

    resource_group_id: str | None = None
    tag: str | None = None
    zone_name: str | None = None
    volume_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class ShareCreateRequest:
    """Body of ``POST /shares``."""

    name: str
    size: int
    profile_name: str
    zone_name: str | None = None
    iops: int | None = None
    resource_group_id: str | None = None
    encryption_key_crn: str | None = None
    user_tags: tuple[str, ...] = field(default_factory=tuple)

    def to_json(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "size": self.size,
            "profile": {"name": self.profile_name},
        }
        if self.zone_name:
            body["zone"] = {"name": self.zone_name}
        if self.iops:
            body["iops"] = self.iops
        if self.resource_group_id:
            body["resource_group"] = {"id": self.resource_group_id}
        if self.encryption_key_crn:
            body["encryption_at_rest_type"] = "user_managed"
            body["encryption_key"] = {"crn": self.encryption_key_crn}
        if self.user_tags:
            body["user_tags"] = list(self.user_tags)
        return body
