"""Protocol definitions for droidplan collaborators.

These protocols use Python's typing.Protocol system with the
@runtime_checkable decorator to enable both static type checking and runtime
isinstance() checks of injected capabilities.
"""

from .capability_protocols import SdkInfoProviderProtocol, SigningRegistryProtocol


__all__ = [
    "SdkInfoProviderProtocol",
    "SigningRegistryProtocol",
]
