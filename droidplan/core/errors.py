"""Exception hierarchy for droidplan."""

from typing import Any


class DroidplanError(Exception):
    """Base exception for all droidplan errors."""


class ConfigError(DroidplanError):
    """Error loading settings or input files."""


class ManifestLoadError(ConfigError):
    """Manifest file could not be read, parsed or validated."""


class CapabilityLoadError(ConfigError):
    """SDK info or signing registry file could not be loaded."""


class ResolutionError(DroidplanError):
    """Manifest failed resolution.

    Every resolution error names the offending field (as a dotted path into the
    manifest) and the literal value found there.
    """

    def __init__(self, field: str, value: Any, detail: str | None = None) -> None:
        self.field = field
        self.value = value
        self.detail = detail
        message = f"{field}={value!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON friendly representation of the error."""
        return {
            "error": self.__class__.__name__,
            "field": self.field,
            "value": self.value,
            "detail": self.detail,
        }


class PreconditionError(ResolutionError):
    """Manifest violates a precondition of resolution."""


class DuplicatePluginError(PreconditionError):
    """Plugin identifier declared more than once."""


class InvalidNamespaceError(PreconditionError):
    """Namespace or application id is not a reverse domain name."""


class UnknownPluginError(ResolutionError):
    """Plugin identifier is outside the supported plugin set."""


class PluginRequirementError(ResolutionError):
    """Plugin declared without a plugin it depends on."""


class UnresolvedSdkReferenceError(ResolutionError):
    """Symbolic reference has no mapping in the SDK info provider."""


class SdkConstraintViolationError(ResolutionError):
    """Resolved SDK versions break ``min <= target <= compile``."""


class InvalidVersionInfoError(ResolutionError):
    """Version code or version name resolved to an unusable value."""


class CompileOptionsError(ResolutionError):
    """Java or Kotlin compile options are unknown or inconsistent."""


class UnknownSigningConfigError(ResolutionError):
    """Build variant references a signing config that is not registered."""


class MalformedDependencyCoordinateError(ResolutionError):
    """Dependency coordinate or scope is not well formed."""


__all__ = [
    "CapabilityLoadError",
    "CompileOptionsError",
    "ConfigError",
    "DroidplanError",
    "DuplicatePluginError",
    "InvalidNamespaceError",
    "InvalidVersionInfoError",
    "MalformedDependencyCoordinateError",
    "ManifestLoadError",
    "PluginRequirementError",
    "PreconditionError",
    "ResolutionError",
    "SdkConstraintViolationError",
    "UnknownPluginError",
    "UnknownSigningConfigError",
    "UnresolvedSdkReferenceError",
]
