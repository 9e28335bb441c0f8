"""
Volume service.

Validates caller input, runs each shares API call under the retry engine, and
maps API shares into VolumeRecord values. Validation always happens before the
retry loop so invalid input never consumes a retry attempt.
"""

from collections.abc import Iterator

import structlog

from vpc_file.api.endpoints.shares import (
    create_share,
    delete_share,
    get_share,
    list_shares,
    update_share,
)
from vpc_file.api.http_client import HttpClient
from vpc_file.core.convert import is_valid_volume_id, parse_int
from vpc_file.core.reason_code import ReasonCode
from vpc_file.core.retry import RetryPolicy, retry
from vpc_file.exceptions import (
    InvalidVolumeIDError,
    ValidationError,
    VolumeNotFoundError,
    VolumeNotReadyError,
)
from vpc_file.models.share import FileShare, ListVolumeFilters, ShareCreateRequest
from vpc_file.models.volume import (
    USABLE_STATES,
    DeleteResult,
    VolumeList,
    VolumeRecord,
    VolumeSpec,
)

logger = structlog.get_logger(__name__)


def _validate_volume_id(volume_id: str) -> None:
    if not is_valid_volume_id(volume_id):
        raise InvalidVolumeIDError(volume_id)


def _validate_capacity(capacity: int | str | None) -> int:
    if capacity is None:
        msg = "Volume capacity is required"
        raise ValidationError(msg, field="capacity")
    size = parse_int(capacity, "capacity", reason_code=ReasonCode.INVALID_CAPACITY)
    if size <= 0:
        msg = f"Volume capacity must be positive, got {size}"
        raise ValidationError(msg, field="capacity", reason_code=ReasonCode.INVALID_CAPACITY)
    return size


class VolumeService:
    """
    Volume primitives on top of the shares API.

    Each public method issues its network calls through ``retry`` with the
    policy captured when the service was built.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        provider_id: str = "",
        policy: RetryPolicy | None = None,
        default_resource_group_id: str = "",
    ) -> None:
        """
        Args:
            http: Authenticated HTTP client bound to the VPC API.
            provider_id: Provider identity stamped on returned records.
            policy: Retry policy; the process-wide default is used when omitted.
            default_resource_group_id: Resource group for volumes created without one.
        """
        self._http = http
        self._provider_id = provider_id
        self._policy = policy
        self._default_resource_group_id = default_resource_group_id

    @property
    def policy(self) -> RetryPolicy | None:
        return self._policy

    def create_volume(self, spec: VolumeSpec) -> VolumeRecord:
        """
        Create a volume and wait until it is usable.

        Args:
            spec: Requested volume. ``name`` must be non-empty and ``capacity`` positive.

        Returns:
            The created volume.

        Raises:
            ValidationError: If the request is invalid. No call is made.
            VolumeNotReadyError: If the volume never reaches a usable state.
            APIError: If the API rejects the request.
        """
        request = self._build_create_request(spec)
        logger.info(
            "Creating volume",
            name=request.name,
            capacity=request.size,
            profile=request.profile_name,
            zone=request.zone_name,
        )

        share = retry(lambda: create_share(self._http, request), policy=self._policy)
        logger.info("Volume created, waiting for valid state", volume_id=share.share_id)

        share = self._wait_for_valid_state(share.share_id)
        return self._to_record(share)

    def get_volume(self, volume_id: str) -> VolumeRecord:
        """
        Fetch a volume by ID.

        Raises:
            InvalidVolumeIDError: If ``volume_id`` is not a UUID.
            VolumeNotFoundError: If the volume does not exist.
        """
        _validate_volume_id(volume_id)
        share = retry(lambda: get_share(self._http, volume_id), policy=self._policy)
        return self._to_record(share)

    def get_volume_by_name(self, name: str) -> VolumeRecord:
        """
        Fetch a volume by exact name.

        Raises:
            ValidationError: If ``name`` is empty.
            VolumeNotFoundError: If no volume has that name.
        """
        if not name:
            msg = "Volume name is required"
            raise ValidationError(msg, field="name")

        page = self.list_volumes(filters=ListVolumeFilters(volume_name=name))
        for volume in page.volumes:
            if volume.name == name:
                return volume

        msg = f"Volume {name!r} not found"
        raise VolumeNotFoundError(msg)

    def expand_volume(self, volume_id: str, capacity: int | str) -> VolumeRecord:
        """
        Grow a volume to ``capacity`` GB.

        Raises:
            InvalidVolumeIDError: If ``volume_id`` is not a UUID.
            ValidationError: If ``capacity`` is not a positive integer.
        """
        _validate_volume_id(volume_id)
        size = _validate_capacity(capacity)

        logger.info("Expanding volume", volume_id=volume_id, capacity=size)
        share = retry(
            lambda: update_share(self._http, volume_id, size=size), policy=self._policy
        )
        return self._to_record(share)

    def delete_volume(self, volume_id: str) -> DeleteResult:
        """
        Delete a volume.

        Deleting a volume that does not exist is not an error: the call returns
        ``DeleteResult.ALREADY_ABSENT`` instead of ``DeleteResult.DELETED``.

        Raises:
            InvalidVolumeIDError: If ``volume_id`` is not a UUID.
        """
        _validate_volume_id(volume_id)

        def _delete() -> DeleteResult:
            try:
                delete_share(self._http, volume_id)
            except VolumeNotFoundError:
                return DeleteResult.ALREADY_ABSENT
            return DeleteResult.DELETED

        result = retry(_delete, policy=self._policy)
        logger.info("Volume deleted", volume_id=volume_id, result=str(result))
        return result

    def list_volumes(
        self,
        limit: int = 0,
        start: str | None = None,
        filters: ListVolumeFilters | None = None,
    ) -> VolumeList:
        """
        List one page of volumes.

        Args:
            limit: Page size; 0 lets the API decide.
            start: Cursor from a previous page's ``next_cursor``.
            filters: Optional predicates; empty fields add no constraint.

        Returns:
            Volumes in upstream order and the cursor for the next page.
        """
        collection = retry(
            lambda: list_shares(self._http, limit=limit, start=start, filters=filters),
            policy=self._policy,
        )
        return VolumeList(
            volumes=tuple(self._to_record(s) for s in collection.shares),
            next_cursor=collection.next_start,
            total_count=collection.total_count,
        )

    def iter_volumes(
        self, filters: ListVolumeFilters | None = None, *, page_size: int = 50
    ) -> Iterator[VolumeRecord]:
        """Yield every matching volume, following pagination cursors."""
        start: str | None = None
        while True:
            page = self.list_volumes(limit=page_size, start=start, filters=filters)
            yield from page.volumes
            if page.next_cursor is None:
                break
            start = page.next_cursor

    def _build_create_request(self, spec: VolumeSpec) -> ShareCreateRequest:
        if spec.name is None:
            msg = "Volume name is required"
            raise ValidationError(msg, field="name")
        if not spec.name.strip():
            msg = "Volume name must not be empty"
            raise ValidationError(msg, field="name", reason_code=ReasonCode.INVALID_VOLUME_NAME)

        size = _validate_capacity(spec.capacity)

        iops = None
        if spec.iops is not None:
            iops = parse_int(spec.iops, "iops", reason_code=ReasonCode.INVALID_IOPS)
            if iops < 0:
                msg = f"Volume IOPS must not be negative, got {iops}"
                raise ValidationError(msg, field="iops", reason_code=ReasonCode.INVALID_IOPS)

        return ShareCreateRequest(
            name=spec.name,
            size=size,
            profile_name=spec.profile,
            zone_name=spec.zone,
            iops=iops,
            resource_group_id=spec.resource_group_id or self._default_resource_group_id or None,
            encryption_key_crn=spec.encryption_key_crn,
            user_tags=spec.tags,
        )

    def _wait_for_valid_state(self, volume_id: str) -> FileShare:
        def _check() -> FileShare:
            # A share just created may not be visible yet; keep polling.
            try:
                share = get_share(self._http, volume_id)
            except VolumeNotFoundError as e:
                logger.debug("Volume not visible yet", volume_id=volume_id)
                raise VolumeNotReadyError(volume_id, None) from e
            if share.lifecycle_state not in USABLE_STATES:
                logger.debug(
                    "Volume not ready", volume_id=volume_id, status=share.lifecycle_state
                )
                raise VolumeNotReadyError(volume_id, share.lifecycle_state)
            return share

        return retry(_check, policy=self._policy)

    def _to_record(self, share: FileShare) -> VolumeRecord:
        return VolumeRecord(
            volume_id=share.share_id,
            name=share.name,
            capacity=share.size,
            iops=share.iops,
            created_at=share.created_at,
            zone=share.zone_name,
            status=share.lifecycle_state,
            resource_group=share.resource_group,
            encryption_key_crn=share.encryption_key_crn,
            profile=share.profile_name,
            provider=self._provider_id,
            crn=share.crn,
        )
