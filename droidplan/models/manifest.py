"""Manifest models describing the Android build target of an app.

The manifest is a structural model only: it accepts anything with the right
shape so that semantic problems (duplicate plugins, unresolved references,
malformed coordinates) are reported by the resolver with the offending field
and value instead of a generic validation failure.
"""

import re
from typing import Any

from pydantic import Field, field_validator, model_validator

from .base import DroidplanBaseModel, FrozenModel


SYMBOL_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)+")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")

DEFAULT_DEPENDENCY_SCOPE = "implementation"


class SymbolicRef(FrozenModel):
    """Named placeholder resolved through an SDK info provider."""

    ref: str

    def __str__(self) -> str:
        return self.ref


def coerce_int_or_ref(value: Any) -> Any:
    """Turn numeric strings into ints and any other string into a reference."""
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_PATTERN.fullmatch(text):
            return int(text)
        return SymbolicRef(ref=text)
    return value


def coerce_str_or_ref(value: Any) -> Any:
    """Turn dotted identifiers into references, keep other strings literal.

    A dotted value meant literally (a version name such as ``release.candidate``)
    is written as ``{literal: release.candidate}``.
    """
    if isinstance(value, dict) and set(value) == {"literal"}:
        return str(value["literal"])
    if isinstance(value, str) and SYMBOL_PATTERN.fullmatch(value.strip()):
        return SymbolicRef(ref=value.strip())
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class PluginRef(DroidplanBaseModel):
    """Plugin applied to the build."""

    identifier: str = Field(alias="id")
    version: str | None = None

    @field_validator("version", mode="before")
    @classmethod
    def stringify_version(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v


class SdkVersionConstraints(DroidplanBaseModel):
    """Android SDK levels; each a literal API level or a symbolic reference."""

    compile: int | SymbolicRef
    min: int | SymbolicRef
    target: int | SymbolicRef

    @field_validator("compile", "min", "target", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> Any:
        return coerce_int_or_ref(v)


class VersionInfo(DroidplanBaseModel):
    """Version code and version name published with the app.

    A bare dotted ``name`` such as ``flutter.versionName`` is a reference; use
    ``{literal: ...}`` for a dotted literal name.
    """

    code: int | SymbolicRef
    name: str | SymbolicRef

    @field_validator("code", mode="before")
    @classmethod
    def parse_code(cls, v: Any) -> Any:
        return coerce_int_or_ref(v)

    @field_validator("name", mode="before")
    @classmethod
    def parse_name(cls, v: Any) -> Any:
        return coerce_str_or_ref(v)


def normalize_java_version(value: Any) -> Any:
    """Normalize ``JavaVersion.VERSION_11``, ``VERSION_1_8``, ``11`` or ``1.8``."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.startswith("JavaVersion."):
        text = text[len("JavaVersion.") :]
    if text.startswith("VERSION_"):
        text = text[len("VERSION_") :].replace("_", ".")
    return text


class CompileOptions(DroidplanBaseModel):
    """Java compile options and the Kotlin JVM target."""

    source_compatibility: str = "1.8"
    target_compatibility: str = "1.8"
    jvm_target: str | None = None

    @field_validator(
        "source_compatibility", "target_compatibility", "jvm_target", mode="before"
    )
    @classmethod
    def parse_java_version(cls, v: Any) -> Any:
        return normalize_java_version(v)


class BuildVariant(DroidplanBaseModel):
    """Build type with its signing-config references.

    ``signing`` maps a signing slot to the name of a signing config.
    ``signing_config: debug`` is accepted as shorthand for
    ``signing: {signing_config: debug}``.
    """

    name: str
    signing: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def expand_signing_shorthand(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("signing_config", "signingConfig"):
            if key in data:
                signing = dict(data.get("signing") or {})
                signing.setdefault("signing_config", data.pop(key))
                data["signing"] = signing
        return data


class DependencyRef(FrozenModel):
    """Maven coordinate declared in a dependency scope."""

    group: str
    artifact: str
    version: str
    scope: str = DEFAULT_DEPENDENCY_SCOPE

    @field_validator("version", mode="before")
    @classmethod
    def stringify_version(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_notation(
        cls, notation: str, scope: str = DEFAULT_DEPENDENCY_SCOPE
    ) -> "DependencyRef":
        """Build a reference from Gradle ``group:artifact:version`` notation.

        Missing parts are left empty so the resolver reports them.
        """
        parts = notation.strip().split(":", 2)
        parts += [""] * (3 - len(parts))
        group, artifact, version = parts
        return cls(group=group, artifact=artifact, version=version, scope=scope)

    @property
    def coordinate(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


class Manifest(DroidplanBaseModel):
    """Declarative description of the Android build target."""

    plugins: list[PluginRef] = Field(default_factory=list)
    namespace: str
    application_id: str | None = None
    sdk: SdkVersionConstraints
    ndk_version: str | SymbolicRef | None = None
    version: VersionInfo
    compile_options: CompileOptions = Field(default_factory=CompileOptions)
    build_types: list[BuildVariant] = Field(default_factory=list)
    dependencies: list[DependencyRef] = Field(default_factory=list)
    flutter_source: str | None = None

    @field_validator("ndk_version", mode="before")
    @classmethod
    def parse_ndk_version(cls, v: Any) -> Any:
        return coerce_str_or_ref(v)

    @field_validator("plugins", mode="before")
    @classmethod
    def expand_plugin_shorthand(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        return [{"id": item} if isinstance(item, str) else item for item in v]

    @field_validator("dependencies", mode="before")
    @classmethod
    def expand_dependency_notation(cls, v: Any) -> Any:
        """Accept ``"g:a:v"`` strings and ``{scope: "g:a:v"}`` single-key maps."""
        if not isinstance(v, list):
            return v
        expanded = []
        for item in v:
            if isinstance(item, str):
                expanded.append(DependencyRef.from_notation(item))
            elif (
                isinstance(item, dict)
                and len(item) == 1
                and not set(item) & set(DependencyRef.model_fields)
            ):
                ((scope, notation),) = item.items()
                expanded.append(DependencyRef.from_notation(str(notation), scope))
            else:
                expanded.append(item)
        return expanded

    @model_validator(mode="before")
    @classmethod
    def flatten_flutter_section(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "flutter" not in data:
            return data
        data = dict(data)
        flutter = data.pop("flutter")
        if isinstance(flutter, dict):
            data.setdefault("flutter_source", flutter.get("source"))
        else:
            data.setdefault("flutter_source", flutter)
        return data
