"""
Volume domain models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from vpc_file.models.share import ResourceGroup

DEFAULT_PROFILE = "dp2"


class VolumeStatus(StrEnum):
    """Known share lifecycle states."""

    PENDING = "pending"
    STABLE = "stable"
    AVAILABLE = "available"
    UPDATING = "updating"
    DELETING = "deleting"
    FAILED = "failed"
    SUSPENDED = "suspended"


USABLE_STATES = frozenset({VolumeStatus.STABLE, VolumeStatus.AVAILABLE})


class DeleteResult(StrEnum):
    """Outcome of a delete call."""

    DELETED = "deleted"
    ALREADY_ABSENT = "already_absent"


@dataclass(frozen=True, kw_only=True)
class VolumeSpec:
    """
    Caller request for a new volume.

    ``capacity`` (GB) and ``iops`` accept ints or base-10 strings and are parsed
    strictly by the volume service before any request is made.
    """

    name: str | None = None
    capacity: int | str | None = None
    iops: int | str | None = None
    profile: str = DEFAULT_PROFILE
    zone: str | None = None
    resource_group_id: str | None = None
    encryption_key_crn: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class VolumeRecord:
    """
    A provisioned file-share volume.

    Only built by the volume service from a successful API response.
    """

    volume_id: str
    name: str
    capacity: int
    iops: int = 0
    created_at: datetime | None = None
    zone: str | None = None
    status: str | None = None
    resource_group: ResourceGroup | None = None
    encryption_key_crn: str | None = None
    profile: str | None = None
    provider: str = ""
    crn: str | None = None

    @property
    def is_usable(self) -> bool:
        """Check if the volume is in a state that accepts mounts."""
        return self.status in USABLE_STATES


@dataclass(frozen=True, kw_only=True)
class VolumeList:
    """
    One page of volumes.

    Attributes:
        volumes: Volumes in upstream order.
        next_cursor: Pass back as ``start`` to fetch the next page; None when done.
        total_count: Total number of matching volumes, if the API reported it.
    """

    volumes: tuple[VolumeRecord, ...] = ()
    next_cursor: str | None = None
    total_count: int | None = None

    def __len__(self) -> int:
        return len(self.volumes)

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None
