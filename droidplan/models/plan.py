"""Resolved build plan models.

Every model here is frozen: a plan is created once per resolution and handed
to the caller, who owns it from then on.
"""

import hashlib
import json

from .base import FrozenModel
from .manifest import DependencyRef
from .plugin import PluginKind


class SigningIdentity(FrozenModel):
    """Credential/key configuration used to sign a build artifact."""

    name: str
    key_alias: str | None = None
    store_file: str | None = None
    store_type: str | None = None
    debug: bool = False


class ResolvedPlugin(FrozenModel):
    kind: PluginKind
    identifier: str
    version: str | None = None


class ResolvedSdkVersions(FrozenModel):
    compile: int
    min: int
    target: int


class ResolvedVersionInfo(FrozenModel):
    code: int
    name: str


class ResolvedCompileOptions(FrozenModel):
    source_compatibility: str
    target_compatibility: str
    jvm_target: str


class SigningBinding(FrozenModel):
    """Signing slot of a variant bound to a concrete identity."""

    slot: str
    identity: SigningIdentity


class ResolvedVariant(FrozenModel):
    name: str
    signing: tuple[SigningBinding, ...] = ()

    def signing_for(self, slot: str = "signing_config") -> SigningIdentity | None:
        for binding in self.signing:
            if binding.slot == slot:
                return binding.identity
        return None


class ResolvedBuildPlan(FrozenModel):
    """Fully concrete, validated build configuration.

    No symbolic references remain; the plan is ready to be handed to a build
    orchestrator.
    """

    plugins: tuple[ResolvedPlugin, ...]
    namespace: str
    application_id: str
    sdk: ResolvedSdkVersions
    ndk_version: str | None = None
    version: ResolvedVersionInfo
    compile_options: ResolvedCompileOptions
    variants: tuple[ResolvedVariant, ...] = ()
    dependencies: tuple[DependencyRef, ...] = ()
    flutter_source: str | None = None

    def has_plugin(self, kind: PluginKind) -> bool:
        return any(plugin.kind == kind for plugin in self.plugins)

    def variant(self, name: str) -> ResolvedVariant | None:
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None

    def to_json(self, indent: int | None = 2) -> str:
        """Render the plan as canonical JSON.

        Keys are sorted so identical plans always render to identical bytes.
        """
        return json.dumps(self.to_dict_full(), sort_keys=True, indent=indent)

    def fingerprint(self) -> str:
        """SHA-256 of the canonical JSON rendering."""
        return hashlib.sha256(self.to_json(indent=None).encode("utf-8")).hexdigest()
