from collections.abc import Callable
from typing import Any

import pytest

from vpc_file.api.http_client import HttpClient
from vpc_file.config import API_VERSION, IKSConfig, VPCConfig, VPCFileConfig
from vpc_file.core import retry as retry_module
from vpc_file.core.retry import RetryPolicy
from vpc_file.tests.constants import (
    ACCESS_TOKEN,
    API_KEY,
    IAM_ENDPOINT,
    RESOURCE_GROUP_ID,
    VOLUME_ID,
    VPC_ENDPOINT,
)
from vpc_file.tests.utils.mock_transport import MockTransport


@pytest.fixture(autouse=True)
def reset_retry_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(retry_module, "_default_policy", RetryPolicy())


@pytest.fixture(autouse=True)
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry delays instead of sleeping."""
    recorded: list[float] = []
    monkeypatch.setattr(retry_module.time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def vpc_http(mock_transport: MockTransport) -> HttpClient:
    client = HttpClient(VPC_ENDPOINT, api_version=API_VERSION, transport=mock_transport)
    client.set_token(ACCESS_TOKEN)
    return client


@pytest.fixture
def vpc_config() -> VPCConfig:
    return VPCConfig(
        enabled=True,
        api_key=API_KEY,
        endpoint_url=VPC_ENDPOINT,
        iam_url=IAM_ENDPOINT,
        resource_group_id=RESOURCE_GROUP_ID,
    )


@pytest.fixture
def iks_config() -> IKSConfig:
    return IKSConfig(enabled=True)


@pytest.fixture
def config(vpc_config: VPCConfig) -> VPCFileConfig:
    return VPCFileConfig(vpc=vpc_config)


@pytest.fixture
def make_share_payload() -> Callable[..., dict[str, Any]]:
    def _make(
        share_id: str = VOLUME_ID,
        name: str = "test-volume",
        size: int = 10,
        status: str = "stable",
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "id": share_id,
            "name": name,
            "size": size,
            "iops": 100,
            "created_at": "2024-01-15T10:30:00Z",
            "lifecycle_state": status,
            "zone": {"name": "us-south-1"},
            "profile": {"name": "dp2"},
            "resource_group": {"id": RESOURCE_GROUP_ID, "name": "default"},
            "crn": f"crn:v1:bluemix:public:is:us-south-1:a/acc::share:{share_id}",
            "href": f"{VPC_ENDPOINT}/v1/shares/{share_id}",
            **extra,
        }

    return _make


def token_payload(access_token: str = ACCESS_TOKEN) -> dict[str, Any]:
    return {
        "access_token": access_token,
        "token_type": "Bearer",
        "expires_in": 3600,
        "refresh_token": "not-used",
    }
