"""
vpc_file client configuration.
"""

from dataclasses import dataclass

from vpc_file.core.retry import RetryPolicy, get_retry_policy

API_VERSION = "2023-07-11"
DEFAULT_VPC_PROVIDER_TYPE = "vpc-file"
DEFAULT_IKS_PROVIDER_NAME = "iks-vpc-file"


@dataclass(frozen=True, kw_only=True)
class VPCConfig:
    """
    Token-based (IAM API key) provider configuration.

    Attributes:
        enabled: Whether the provider is registered at startup.
        provider_type: Provider identity this config authenticates.
        api_key: IAM API key exchanged for an access token.
        endpoint_url: Base URL of the regional VPC API.
        iam_url: Base URL of the IAM token service.
        api_version: Value of the ``version`` query parameter sent on every call.
        resource_group_id: Default resource group for new volumes.
        timeout: Request timeout in seconds.
        max_retry_attempt: Maximum number of attempts per API call. Falls back to the
            process-wide default when unset.
        max_retry_gap: Delay between attempts in seconds. Falls back to the
            process-wide default when unset.
    """

    enabled: bool = False
    provider_type: str = DEFAULT_VPC_PROVIDER_TYPE
    api_key: str = ""
    endpoint_url: str = "https://us-south.iaas.cloud.ibm.com"
    iam_url: str = "https://iam.cloud.ibm.com"
    api_version: str = API_VERSION
    resource_group_id: str = ""
    timeout: float = 30.0
    max_retry_attempt: int | None = None
    max_retry_gap: float | None = None

    def __post_init__(self) -> None:
        if not self.provider_type:
            msg = "provider_type must not be empty"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.max_retry_attempt is not None and self.max_retry_attempt < 1:
            msg = "max_retry_attempt must be at least 1"
            raise ValueError(msg)
        if self.max_retry_gap is not None and self.max_retry_gap < 0:
            msg = "max_retry_gap must be non-negative"
            raise ValueError(msg)

    def retry_policy(self) -> RetryPolicy:
        """Policy for sessions opened with this config, captured at open time."""
        default = get_retry_policy()
        return RetryPolicy(
            max_attempts=(
                self.max_retry_attempt
                if self.max_retry_attempt is not None
                else default.max_attempts
            ),
            delay=self.max_retry_gap if self.max_retry_gap is not None else default.delay,
        )


@dataclass(frozen=True, kw_only=True)
class IKSConfig:
    """
    Deferred-credentials provider configuration.

    Credentials are not resolved up front: the session open step reads the
    API key from the environment variable named by ``api_key_env_var``.

    Attributes:
        enabled: Whether the provider is registered at startup.
        provider_name: Provider identity this config authenticates.
        api_key_env_var: Environment variable holding the API key.
    """

    enabled: bool = False
    provider_name: str = DEFAULT_IKS_PROVIDER_NAME
    api_key_env_var: str = "IBMCLOUD_API_KEY"

    def __post_init__(self) -> None:
        if not self.provider_name:
            msg = "provider_name must not be empty"
            raise ValueError(msg)
        if not self.api_key_env_var:
            msg = "api_key_env_var must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class VPCFileConfig:
    """
    Top-level configuration bundle, at most one sub-config per authentication scheme.

    Attributes:
        vpc: Token-based scheme configuration.
        iks: Deferred scheme configuration.
    """

    vpc: VPCConfig | None = None
    iks: IKSConfig | None = None

    @property
    def api_settings(self) -> VPCConfig:
        """Endpoint, version and retry settings shared by every provider session."""
        return self.vpc or VPCConfig()
