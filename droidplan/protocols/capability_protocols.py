"""Protocol definitions for the lookup capabilities consumed by the resolver."""

from typing import Protocol, runtime_checkable

from droidplan.models.plan import SigningIdentity


@runtime_checkable
class SdkInfoProviderProtocol(Protocol):
    """Maps symbolic SDK references (``flutter.compileSdkVersion``) to values."""

    def lookup(self, symbol: str) -> int | str | None:
        """Return the value for *symbol*, or None when it is not known."""
        ...


@runtime_checkable
class SigningRegistryProtocol(Protocol):
    """Maps signing-config names to signing identities."""

    def lookup(self, name: str) -> SigningIdentity | None:
        """Return the identity registered as *name*, or None."""
        ...
