"""
VPC File Share Python Client.

Provisions and manages file-share volumes through the VPC shares API, with
provider/session resolution and retry around every call.

Example:
    ```python
    from vpc_file import VPCConfig, VPCFileClient, VPCFileConfig, VolumeSpec

    config = VPCFileConfig(vpc=VPCConfig(enabled=True, api_key="..."))

    with VPCFileClient(config) as client:
        volume = client.create_volume(VolumeSpec(name="data", capacity=10, zone="us-south-1"))
        print(volume.volume_id, volume.status)
    ```
"""

from vpc_file.client import VPCFileClient
from vpc_file.config import API_VERSION, IKSConfig, VPCConfig, VPCFileConfig
from vpc_file.core.reason_code import ReasonCode
from vpc_file.core.retry import (
    RetryPolicy,
    get_retry_policy,
    retry,
    set_retry_parameters,
    skip_retry,
)
from vpc_file.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DuplicateProviderError,
    InsufficientAuthenticationError,
    InvalidResponseError,
    InvalidVolumeIDError,
    NetworkError,
    NoProvidersRegisteredError,
    ProviderNotRegisteredError,
    SessionClosedError,
    SessionOpenError,
    TokenExchangeError,
    ValidationError,
    VolumeNotFoundError,
    VolumeNotReadyError,
    VPCFileError,
)
from vpc_file.models.share import ListVolumeFilters
from vpc_file.models.volume import DeleteResult, VolumeList, VolumeRecord, VolumeSpec
from vpc_file.providers import (
    ProviderRegistry,
    VPCFileSession,
    init_providers,
    open_provider_session,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "VPCFileClient",
    "VPCFileConfig",
    "VPCConfig",
    "IKSConfig",
    "API_VERSION",
    # Providers
    "ProviderRegistry",
    "VPCFileSession",
    "init_providers",
    "open_provider_session",
    # Retry
    "RetryPolicy",
    "get_retry_policy",
    "retry",
    "set_retry_parameters",
    "skip_retry",
    # Models
    "DeleteResult",
    "ListVolumeFilters",
    "VolumeList",
    "VolumeRecord",
    "VolumeSpec",
    # Exceptions
    "ReasonCode",
    "VPCFileError",
    "ConfigurationError",
    "ProviderNotRegisteredError",
    "NoProvidersRegisteredError",
    "DuplicateProviderError",
    "AuthenticationError",
    "InsufficientAuthenticationError",
    "TokenExchangeError",
    "SessionOpenError",
    "SessionClosedError",
    "ValidationError",
    "InvalidVolumeIDError",
    "APIError",
    "VolumeNotFoundError",
    "VolumeNotReadyError",
    "InvalidResponseError",
    "NetworkError",
]
