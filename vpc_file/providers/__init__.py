"""
Provider registry, credential resolution and session opening.
"""

from vpc_file.providers.credentials import (
    IAMContextCredentialsFactory,
    generate_context_credentials,
)
from vpc_file.providers.init_provider import init_providers, open_provider_session
from vpc_file.providers.protocol import ContextCredentialsFactory, Provider, ProviderSession
from vpc_file.providers.registry import ProviderRegistry
from vpc_file.providers.vpc_provider import VPCFileProvider, VPCFileSession

__all__ = [
    "ContextCredentialsFactory",
    "IAMContextCredentialsFactory",
    "Provider",
    "ProviderRegistry",
    "ProviderSession",
    "VPCFileProvider",
    "VPCFileSession",
    "generate_context_credentials",
    "init_providers",
    "open_provider_session",
]
