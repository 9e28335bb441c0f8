"""File share endpoints (create, get, update, delete, list)."""

from datetime import datetime
from typing import Any

import httpx

from vpc_file.api.http_client import HttpClient
from vpc_file.core.convert import to_int
from vpc_file.exceptions import InvalidResponseError
from vpc_file.models.share import (
    FileShare,
    ListVolumeFilters,
    ResourceGroup,
    ShareCollection,
    ShareCreateRequest,
)

SHARES_PATH = "/v1/shares"
MERGE_PATCH_HEADERS = {"Content-Type": "application/merge-patch+json"}


def build_list_params(
    limit: int = 0,
    start: str | None = None,
    filters: ListVolumeFilters | None = None,
) -> dict[str, str]:
    """
    Build list query parameters.

    Each argument adds its own parameter independently; empty values add nothing.
    The ``version`` parameter is added by the HTTP client.
    """
    params: dict[str, str] = {}
    if limit > 0:
        params["limit"] = str(limit)
    if start:
        params["start"] = start
    if filters is not None:
        if filters.resource_group_id:
            params["resource_group.id"] = filters.resource_group_id
        if filters.tag:
            params["tag"] = filters.tag
        if filters.zone_name:
            params["zone.name"] = filters.zone_name
        if filters.volume_name:
            params["name"] = filters.volume_name
    return params


def create_share(http: HttpClient, request: ShareCreateRequest) -> FileShare:
    """Create a file share."""
    response = http.request("POST", SHARES_PATH, json=request.to_json())
    return _parse_share(response)


def get_share(http: HttpClient, share_id: str) -> FileShare:
    """Get file share details."""
    response = http.request("GET", f"{SHARES_PATH}/{share_id}")
    return _parse_share(response)


def update_share(
    http: HttpClient,
    share_id: str,
    *,
    size: int | None = None,
    iops: int | None = None,
    name: str | None = None,
) -> FileShare:
    """
    Update a file share with a merge patch.

    Args:
        http: Configured HTTP client.
        share_id: Share ID.
        size: New capacity in GB.
        iops: New IOPS.
        name: New name.

    Returns:
        The updated share.
    """
    patch: dict[str, Any] = {}
    if size is not None:
        patch["size"] = size
    if iops is not None:
        patch["iops"] = iops
    if name is not None:
        patch["name"] = name

    response = http.request(
        "PATCH", f"{SHARES_PATH}/{share_id}", json=patch, headers=MERGE_PATCH_HEADERS
    )
    return _parse_share(response)


def delete_share(http: HttpClient, share_id: str) -> None:
    """Delete a file share."""
    http.request("DELETE", f"{SHARES_PATH}/{share_id}")


def list_shares(
    http: HttpClient,
    *,
    limit: int = 0,
    start: str | None = None,
    filters: ListVolumeFilters | None = None,
) -> ShareCollection:
    """
    List one page of file shares.

    Args:
        http: Configured HTTP client.
        limit: Page size; 0 lets the API decide.
        start: Cursor returned by a previous page.
        filters: Optional predicates.

    Returns:
        Shares in upstream order and the cursor for the next page.
    """
    response = http.request("GET", SHARES_PATH, params=build_list_params(limit, start, filters))
    shares = response.get("shares") or []
    total_count = response.get("total_count")

    return ShareCollection(
        shares=tuple(_parse_share(s) for s in shares),
        next_start=_next_start(response),
        total_count=to_int(total_count) if total_count is not None else None,
    )


def _parse_share(data: Any) -> FileShare:
    """
    Build a FileShare from a share body.

    Raises:
        InvalidResponseError: If the body has no id or a field has the wrong shape.
    """
    if not isinstance(data, dict) or not data.get("id"):
        msg = "Share response is missing an id"
        raise InvalidResponseError(msg, endpoint=SHARES_PATH)

    try:
        return _build_share(data)
    except (AttributeError, TypeError, ValueError) as e:
        msg = f"Malformed share response: {e}"
        raise InvalidResponseError(msg, endpoint=SHARES_PATH) from e


def _build_share(data: dict[str, Any]) -> FileShare:
    resource_group = data.get("resource_group")
    return FileShare(
        share_id=data["id"],
        name=data.get("name", ""),
        size=to_int(data.get("size", 0)),
        iops=to_int(data.get("iops", 0)),
        created_at=_parse_timestamp(data.get("created_at")),
        zone_name=(data.get("zone") or {}).get("name"),
        lifecycle_state=data.get("lifecycle_state") or data.get("status"),
        resource_group=(
            ResourceGroup(id=resource_group.get("id", ""), name=resource_group.get("name", ""))
            if resource_group
            else None
        ),
        encryption_key_crn=(data.get("encryption_key") or {}).get("crn"),
        profile_name=(data.get("profile") or {}).get("name"),
        crn=data.get("crn"),
        href=data.get("href"),
    )


def _next_start(data: dict[str, Any]) -> str | None:
    """Extract the ``start`` cursor from the ``next`` link, if any."""
    next_link = data.get("next") or {}
    if start := next_link.get("start"):
        return start
    href = next_link.get("href")
    if not href:
        return None
    return httpx.URL(href).params.get("start") or None


def _parse_timestamp(timestamp: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp."""
    if not timestamp:
        return None
    return datetime.fromisoformat(timestamp)
