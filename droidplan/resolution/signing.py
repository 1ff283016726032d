"""Signing registries mapping signing-config names to identities."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from droidplan.core.errors import CapabilityLoadError
from droidplan.core.structlog_logger import get_struct_logger
from droidplan.models.plan import SigningIdentity


logger = get_struct_logger(__name__)

DEBUG_SIGNING_CONFIG = "debug"


def debug_signing_identity() -> SigningIdentity:
    """Identity of the Android SDK debug keystore, declared by every app build."""
    return SigningIdentity(
        name=DEBUG_SIGNING_CONFIG,
        key_alias="androiddebugkey",
        store_file="~/.android/debug.keystore",
        store_type="jks",
        debug=True,
    )


class InMemorySigningRegistry:
    """Signing registry holding identities in a dict keyed by config name."""

    def __init__(self, identities: Iterable[SigningIdentity] = ()) -> None:
        self._identities: dict[str, SigningIdentity] = {}
        for identity in identities:
            self.register(identity)

    def register(self, identity: SigningIdentity) -> None:
        if identity.name in self._identities:
            logger.info("signing_config_replaced", name=identity.name)
        self._identities[identity.name] = identity

    def lookup(self, name: str) -> SigningIdentity | None:
        return self._identities.get(name)

    def names(self) -> list[str]:
        return sorted(self._identities)

    def __contains__(self, name: object) -> bool:
        return name in self._identities

    def __len__(self) -> int:
        return len(self._identities)


def _identities_from_mapping(data: Mapping[str, Any]) -> list[SigningIdentity]:
    identities = []
    for name, entry in data.items():
        fields = dict(entry or {})
        if fields.setdefault("name", name) != name:
            raise ValueError(
                f"signing config {name!r} declares a different name {fields['name']!r}"
            )
        identities.append(SigningIdentity.model_validate(fields))
    return identities


def load_signing_registry(
    path: Path | None = None, include_debug: bool = True
) -> InMemorySigningRegistry:
    """Create a registry from a YAML file of ``name: {key_alias, store_file, ...}``.

    Args:
        path: Optional YAML file with signing configs
        include_debug: Register the Android debug identity before file entries

    Raises:
        CapabilityLoadError: If the file cannot be read, parsed or validated
    """
    registry = InMemorySigningRegistry()
    if include_debug:
        registry.register(debug_signing_identity())
    if path is None:
        return registry

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise CapabilityLoadError(f"Signing config file {path} must contain a mapping")
        for identity in _identities_from_mapping(data):
            registry.register(identity)
    except (OSError, yaml.YAMLError, ValidationError, TypeError, ValueError) as e:
        msg = f"Failed to load signing configs from {path}: {e}"
        logger.error("signing_registry_load_failed", path=str(path), error=str(e))
        raise CapabilityLoadError(msg) from e

    logger.debug("signing_registry_loaded", path=str(path), names=registry.names())
    return registry
