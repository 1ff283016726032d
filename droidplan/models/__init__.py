"""Manifest and build plan models."""

from .base import DroidplanBaseModel, FrozenModel
from .manifest import (
    BuildVariant,
    CompileOptions,
    DependencyRef,
    Manifest,
    PluginRef,
    SdkVersionConstraints,
    SymbolicRef,
    VersionInfo,
)
from .plan import (
    ResolvedBuildPlan,
    ResolvedCompileOptions,
    ResolvedPlugin,
    ResolvedSdkVersions,
    ResolvedVariant,
    ResolvedVersionInfo,
    SigningBinding,
    SigningIdentity,
)
from .plugin import PLUGIN_ALIASES, PLUGIN_REQUIREMENTS, PluginKind


__all__ = [
    "BuildVariant",
    "CompileOptions",
    "DependencyRef",
    "DroidplanBaseModel",
    "FrozenModel",
    "Manifest",
    "PLUGIN_ALIASES",
    "PLUGIN_REQUIREMENTS",
    "PluginKind",
    "PluginRef",
    "ResolvedBuildPlan",
    "ResolvedCompileOptions",
    "ResolvedPlugin",
    "ResolvedSdkVersions",
    "ResolvedVariant",
    "ResolvedVersionInfo",
    "SdkVersionConstraints",
    "SigningBinding",
    "SigningIdentity",
    "SymbolicRef",
    "VersionInfo",
]
