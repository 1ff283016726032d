"""Manifest resolution and the capabilities it consumes."""

from .config_resolver import ConfigResolver, create_config_resolver
from .coordinates import KNOWN_SCOPES, check_dependency, is_reverse_domain
from .sdk_info import (
    ChainedSdkInfoProvider,
    MappingSdkInfoProvider,
    create_sdk_info_provider,
    load_sdk_info,
    parse_properties,
)
from .signing import (
    InMemorySigningRegistry,
    debug_signing_identity,
    load_signing_registry,
)


__all__ = [
    "ChainedSdkInfoProvider",
    "ConfigResolver",
    "InMemorySigningRegistry",
    "KNOWN_SCOPES",
    "MappingSdkInfoProvider",
    "check_dependency",
    "create_config_resolver",
    "create_sdk_info_provider",
    "debug_signing_identity",
    "is_reverse_domain",
    "load_sdk_info",
    "load_signing_registry",
    "parse_properties",
]
