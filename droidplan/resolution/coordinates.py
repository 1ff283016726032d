"""Well-formedness checks for identifiers and Maven coordinates."""

import re
from collections.abc import Iterable

from droidplan.core.errors import MalformedDependencyCoordinateError
from droidplan.models.manifest import DependencyRef


NAMESPACE_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*(?:\.[A-Za-z][A-Za-z0-9_]*)+")
MAVEN_ID_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.\-]*")
VERSION_PATTERN = re.compile(
    r"\d+(?:\.\d+)*(?:-[0-9A-Za-z][0-9A-Za-z.\-]*)?(?:\+[0-9A-Za-z][0-9A-Za-z.\-]*)?"
)

KNOWN_SCOPES = frozenset(
    {
        "implementation",
        "api",
        "compileOnly",
        "runtimeOnly",
        "testImplementation",
        "androidTestImplementation",
        "coreLibraryDesugaring",
        "annotationProcessor",
        "kapt",
    }
)


def is_reverse_domain(name: str) -> bool:
    """True for names like ``com.example.smart_system``."""
    return bool(NAMESPACE_PATTERN.fullmatch(name))


def allowed_scopes(variant_names: Iterable[str]) -> frozenset[str]:
    """Known configurations plus ``<variant>Implementation`` per build type."""
    return KNOWN_SCOPES | {f"{name}Implementation" for name in variant_names}


def check_dependency(
    dependency: DependencyRef, field: str, scopes: frozenset[str] = KNOWN_SCOPES
) -> MalformedDependencyCoordinateError | None:
    """Return the first well-formedness problem of *dependency*, if any.

    Args:
        dependency: Coordinate to check
        field: Dotted manifest path of the dependency, used in the error
        scopes: Dependency configurations accepted as scope
    """
    if not MAVEN_ID_PATTERN.fullmatch(dependency.group):
        return MalformedDependencyCoordinateError(
            f"{field}.group", dependency.group, "group must be a non-empty Maven id"
        )
    if not MAVEN_ID_PATTERN.fullmatch(dependency.artifact):
        return MalformedDependencyCoordinateError(
            f"{field}.artifact",
            dependency.artifact,
            "artifact must be a non-empty Maven id",
        )
    if not VERSION_PATTERN.fullmatch(dependency.version):
        return MalformedDependencyCoordinateError(
            f"{field}.version",
            dependency.version,
            "version must look like 1.2.3, 1.2.3-qualifier or 1.2.3+build",
        )
    if dependency.scope not in scopes:
        return MalformedDependencyCoordinateError(
            f"{field}.scope", dependency.scope, "unknown dependency configuration"
        )
    return None
