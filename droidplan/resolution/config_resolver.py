"""Resolve a declarative manifest into an immutable build plan."""

from typing import Any

from droidplan.core.errors import (
    CompileOptionsError,
    DuplicatePluginError,
    InvalidNamespaceError,
    InvalidVersionInfoError,
    PluginRequirementError,
    PreconditionError,
    ResolutionError,
    SdkConstraintViolationError,
    UnknownPluginError,
    UnknownSigningConfigError,
    UnresolvedSdkReferenceError,
)
from droidplan.core.structlog_logger import StructlogMixin
from droidplan.models.manifest import (
    BuildVariant,
    CompileOptions,
    DependencyRef,
    Manifest,
    PluginRef,
    SdkVersionConstraints,
    SymbolicRef,
    VersionInfo,
)
from droidplan.models.plan import (
    ResolvedBuildPlan,
    ResolvedCompileOptions,
    ResolvedPlugin,
    ResolvedSdkVersions,
    ResolvedVariant,
    ResolvedVersionInfo,
    SigningBinding,
)
from droidplan.models.plugin import PLUGIN_REQUIREMENTS, PluginKind
from droidplan.protocols import SdkInfoProviderProtocol, SigningRegistryProtocol

from .coordinates import allowed_scopes, check_dependency, is_reverse_domain


JAVA_VERSIONS = ("1.8", "11", "17", "21")
# Play Store upper bound for versionCode
MAX_VERSION_CODE = 2_100_000_000
# Fields where a bare dotted name may also be meant literally
_STRING_FIELDS = frozenset({"version.name", "ndk_version"})


class _Diagnostics:
    """Collects resolution errors, or raises the first one in fail-fast mode."""

    def __init__(self, fail_fast: bool) -> None:
        self.fail_fast = fail_fast
        self.errors: list[ResolutionError] = []

    def report(self, error: ResolutionError) -> None:
        if self.fail_fast:
            raise error
        self.errors.append(error)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class ConfigResolver(StructlogMixin):
    """Transform a manifest into a ResolvedBuildPlan or fail with a diagnostic.

    The resolver holds no state between calls; the same instance may be used
    concurrently for independent manifests.
    """

    def resolve(
        self,
        manifest: Manifest,
        sdk_info_provider: SdkInfoProviderProtocol,
        signing_registry: SigningRegistryProtocol,
    ) -> ResolvedBuildPlan:
        """Resolve *manifest* into a build plan.

        Resolution is all-or-nothing: either every check passes and a plan is
        returned, or the first failing check raises and nothing is returned.

        Args:
            manifest: Manifest to resolve
            sdk_info_provider: Lookup for symbolic SDK references
            signing_registry: Lookup for signing configs

        Returns:
            ResolvedBuildPlan: Immutable plan with only concrete values

        Raises:
            ResolutionError: Subclass naming the offending field and value
        """
        self.logger.debug("resolving_manifest", namespace=manifest.namespace)
        diagnostics = _Diagnostics(fail_fast=True)
        try:
            plan = self._run(manifest, sdk_info_provider, signing_registry, diagnostics)
        except ResolutionError as e:
            self.logger.warning(
                "manifest_resolution_failed",
                error_type=e.__class__.__name__,
                field=e.field,
                value=e.value,
            )
            raise

        assert plan is not None
        self.logger.info(
            "manifest_resolved",
            namespace=plan.namespace,
            plugins=len(plan.plugins),
            variants=len(plan.variants),
            dependencies=len(plan.dependencies),
        )
        return plan

    def diagnose(
        self,
        manifest: Manifest,
        sdk_info_provider: SdkInfoProviderProtocol,
        signing_registry: SigningRegistryProtocol,
    ) -> list[ResolutionError]:
        """Run every check and return all problems found.

        Checks that need a value which already failed (e.g. SDK ordering after
        an unresolved reference) are skipped. An empty list means ``resolve``
        would succeed.
        """
        diagnostics = _Diagnostics(fail_fast=False)
        self._run(manifest, sdk_info_provider, signing_registry, diagnostics)
        self.logger.debug(
            "manifest_diagnosed",
            namespace=manifest.namespace,
            errors=len(diagnostics.errors),
        )
        return diagnostics.errors

    def _run(
        self,
        manifest: Manifest,
        sdk_info_provider: SdkInfoProviderProtocol,
        signing_registry: SigningRegistryProtocol,
        diagnostics: _Diagnostics,
    ) -> ResolvedBuildPlan | None:
        self._check_identifiers(manifest, diagnostics)
        duplicates = self._check_duplicate_plugins(manifest.plugins, diagnostics)
        plugins = self._resolve_plugins(manifest.plugins, duplicates, diagnostics)
        sdk = self._resolve_sdk(manifest.sdk, sdk_info_provider, diagnostics)
        ndk_version = self._resolve_ndk_version(
            manifest.ndk_version, sdk_info_provider, diagnostics
        )
        version = self._resolve_version_info(
            manifest.version, sdk_info_provider, diagnostics
        )
        compile_options = self._resolve_compile_options(
            manifest.compile_options, diagnostics
        )
        variants = self._resolve_variants(
            manifest.build_types, signing_registry, diagnostics
        )
        dependencies = self._check_dependencies(
            manifest.dependencies,
            [variant.name for variant in manifest.build_types],
            diagnostics,
        )

        if diagnostics.errors:
            return None
        assert sdk is not None and version is not None and compile_options is not None

        return ResolvedBuildPlan(
            plugins=tuple(plugins),
            namespace=manifest.namespace,
            application_id=manifest.application_id or manifest.namespace,
            sdk=sdk,
            ndk_version=ndk_version,
            version=version,
            compile_options=compile_options,
            variants=tuple(variants),
            dependencies=tuple(dependencies),
            flutter_source=manifest.flutter_source,
        )

    def _check_identifiers(self, manifest: Manifest, diagnostics: _Diagnostics) -> None:
        if not is_reverse_domain(manifest.namespace):
            diagnostics.report(
                InvalidNamespaceError(
                    "namespace",
                    manifest.namespace,
                    "expected a reverse domain name such as com.example.app",
                )
            )
        if manifest.application_id is not None and not is_reverse_domain(
            manifest.application_id
        ):
            diagnostics.report(
                InvalidNamespaceError(
                    "application_id",
                    manifest.application_id,
                    "expected a reverse domain name such as com.example.app",
                )
            )

    def _check_duplicate_plugins(
        self, plugins: list[PluginRef], diagnostics: _Diagnostics
    ) -> set[int]:
        """Report repeated plugins, known or not; returns the repeated positions.

        Aliases count as the plugin they stand for.
        """
        duplicates: set[int] = set()
        seen: dict[str, int] = {}
        for index, plugin in enumerate(plugins):
            kind = PluginKind.from_identifier(plugin.identifier)
            key = kind.value if kind else plugin.identifier
            if key in seen:
                duplicates.add(index)
                diagnostics.report(
                    DuplicatePluginError(
                        f"plugins[{index}].id",
                        plugin.identifier,
                        f"already applied as plugins[{seen[key]}]",
                    )
                )
                continue
            seen[key] = index
        return duplicates

    def _resolve_plugins(
        self,
        plugins: list[PluginRef],
        duplicates: set[int],
        diagnostics: _Diagnostics,
    ) -> list[ResolvedPlugin]:
        resolved: list[ResolvedPlugin] = []
        positions: list[int] = []
        unknown = False

        for index, plugin in enumerate(plugins):
            if index in duplicates:
                continue
            field = f"plugins[{index}].id"
            kind = PluginKind.from_identifier(plugin.identifier)

            if not plugin.identifier:
                unknown = True
                diagnostics.report(
                    UnknownPluginError(field, plugin.identifier, "identifier is empty")
                )
            elif kind is None:
                unknown = True
                diagnostics.report(
                    UnknownPluginError(
                        field,
                        plugin.identifier,
                        f"supported plugins: {', '.join(k.value for k in PluginKind)}",
                    )
                )
            else:
                resolved.append(
                    ResolvedPlugin(
                        kind=kind, identifier=plugin.identifier, version=plugin.version
                    )
                )
                positions.append(index)

        if not unknown:
            self._check_plugin_requirements(resolved, positions, diagnostics)
        self.logger.debug("plugins_resolved", plugins=[p.kind for p in resolved])
        return resolved

    def _check_plugin_requirements(
        self,
        plugins: list[ResolvedPlugin],
        positions: list[int],
        diagnostics: _Diagnostics,
    ) -> None:
        applied = {plugin.kind for plugin in plugins}
        for index, plugin in zip(positions, plugins):
            required = PLUGIN_REQUIREMENTS.get(PluginKind(plugin.kind), ())
            if required and not applied & {kind.value for kind in required}:
                diagnostics.report(
                    PluginRequirementError(
                        f"plugins[{index}].id",
                        plugin.identifier,
                        f"requires one of: {', '.join(k.value for k in required)}",
                    )
                )

    def _lookup(
        self,
        value: Any,
        field: str,
        provider: SdkInfoProviderProtocol,
        diagnostics: _Diagnostics,
    ) -> Any:
        """Resolve *value* if it is symbolic; None signals a reported failure."""
        if not isinstance(value, SymbolicRef):
            return value
        resolved = provider.lookup(value.ref)
        if resolved is None:
            detail = "no value known for this reference"
            if field in _STRING_FIELDS:
                detail = f"{detail}; write {{literal: {value.ref}}} for a literal value"
            diagnostics.report(UnresolvedSdkReferenceError(field, value.ref, detail))
            return None
        self.logger.debug(
            "sdk_reference_resolved", field=field, ref=value.ref, value=resolved
        )
        return resolved

    def _resolve_sdk(
        self,
        sdk: SdkVersionConstraints,
        provider: SdkInfoProviderProtocol,
        diagnostics: _Diagnostics,
    ) -> ResolvedSdkVersions | None:
        levels: dict[str, int] = {}
        for name in ("compile", "min", "target"):
            field = f"sdk.{name}"
            value = self._lookup(getattr(sdk, name), field, provider, diagnostics)
            if value is None:
                continue
            level = _as_int(value)
            if level is None or level < 1:
                diagnostics.report(
                    SdkConstraintViolationError(
                        field, value, "SDK level must be a positive integer"
                    )
                )
                continue
            levels[name] = level

        if len(levels) < 3:
            return None

        ordered = True
        if levels["min"] > levels["target"]:
            ordered = False
            diagnostics.report(
                SdkConstraintViolationError(
                    "sdk.min",
                    levels["min"],
                    f"min ({levels['min']}) exceeds target ({levels['target']})",
                )
            )
        if levels["target"] > levels["compile"]:
            ordered = False
            diagnostics.report(
                SdkConstraintViolationError(
                    "sdk.target",
                    levels["target"],
                    f"target ({levels['target']}) exceeds compile ({levels['compile']})",
                )
            )
        return ResolvedSdkVersions(**levels) if ordered else None

    def _resolve_ndk_version(
        self,
        ndk_version: str | SymbolicRef | None,
        provider: SdkInfoProviderProtocol,
        diagnostics: _Diagnostics,
    ) -> str | None:
        if ndk_version is None:
            return None
        value = self._lookup(ndk_version, "ndk_version", provider, diagnostics)
        if value is None:
            return None
        text = str(value).strip()
        if not text or not all(part.isdigit() for part in text.split(".")):
            diagnostics.report(
                SdkConstraintViolationError(
                    "ndk_version", value, "NDK version must look like 26.1.10909125"
                )
            )
            return None
        return text

    def _resolve_version_info(
        self,
        version: VersionInfo,
        provider: SdkInfoProviderProtocol,
        diagnostics: _Diagnostics,
    ) -> ResolvedVersionInfo | None:
        code = None
        raw_code = self._lookup(version.code, "version.code", provider, diagnostics)
        if raw_code is not None:
            code = _as_int(raw_code)
            if code is None or not 1 <= code <= MAX_VERSION_CODE:
                code = None
                diagnostics.report(
                    InvalidVersionInfoError(
                        "version.code",
                        raw_code,
                        f"version code must be an integer in 1..{MAX_VERSION_CODE}",
                    )
                )

        name = None
        raw_name = self._lookup(version.name, "version.name", provider, diagnostics)
        if raw_name is not None:
            name = str(raw_name).strip()
            if not name:
                name = None
                diagnostics.report(
                    InvalidVersionInfoError(
                        "version.name", raw_name, "version name must not be empty"
                    )
                )

        if code is None or name is None:
            return None
        return ResolvedVersionInfo(code=code, name=name)

    def _resolve_compile_options(
        self, options: CompileOptions, diagnostics: _Diagnostics
    ) -> ResolvedCompileOptions | None:
        jvm_target = options.jvm_target or options.target_compatibility
        valid = True
        for field, value in (
            ("compile_options.source_compatibility", options.source_compatibility),
            ("compile_options.target_compatibility", options.target_compatibility),
            ("compile_options.jvm_target", jvm_target),
        ):
            if value not in JAVA_VERSIONS:
                valid = False
                diagnostics.report(
                    CompileOptionsError(
                        field, value, f"supported versions: {', '.join(JAVA_VERSIONS)}"
                    )
                )
        if not valid:
            return None

        if JAVA_VERSIONS.index(options.source_compatibility) > JAVA_VERSIONS.index(
            options.target_compatibility
        ):
            diagnostics.report(
                CompileOptionsError(
                    "compile_options.source_compatibility",
                    options.source_compatibility,
                    f"source is newer than target {options.target_compatibility}",
                )
            )
            return None
        if jvm_target != options.target_compatibility:
            diagnostics.report(
                CompileOptionsError(
                    "compile_options.jvm_target",
                    jvm_target,
                    f"Kotlin JVM target must match Java target "
                    f"{options.target_compatibility}",
                )
            )
            return None

        return ResolvedCompileOptions(
            source_compatibility=options.source_compatibility,
            target_compatibility=options.target_compatibility,
            jvm_target=jvm_target,
        )

    def _resolve_variants(
        self,
        variants: list[BuildVariant],
        registry: SigningRegistryProtocol,
        diagnostics: _Diagnostics,
    ) -> list[ResolvedVariant]:
        resolved: list[ResolvedVariant] = []
        seen: set[str] = set()

        for index, variant in enumerate(variants):
            if not variant.name or variant.name in seen:
                diagnostics.report(
                    PreconditionError(
                        f"build_types[{index}].name",
                        variant.name,
                        "build type names must be non-empty and unique",
                    )
                )
                continue
            seen.add(variant.name)

            bindings: list[SigningBinding] = []
            for slot, config_name in variant.signing.items():
                identity = registry.lookup(config_name)
                if identity is None:
                    diagnostics.report(
                        UnknownSigningConfigError(
                            f"build_types[{index}].signing.{slot}",
                            config_name,
                            f"signing config is not declared (variant {variant.name})",
                        )
                    )
                    continue
                bindings.append(SigningBinding(slot=slot, identity=identity))

            resolved.append(ResolvedVariant(name=variant.name, signing=tuple(bindings)))
        return resolved

    def _check_dependencies(
        self,
        dependencies: list[DependencyRef],
        variant_names: list[str],
        diagnostics: _Diagnostics,
    ) -> list[DependencyRef]:
        scopes = allowed_scopes(variant_names)
        checked: list[DependencyRef] = []
        seen: set[tuple[str, str, str]] = set()

        for index, dependency in enumerate(dependencies):
            error = check_dependency(dependency, f"dependencies[{index}]", scopes)
            if error is not None:
                diagnostics.report(error)
                continue
            key = (dependency.scope, dependency.group, dependency.artifact)
            if key in seen:
                self.logger.warning(
                    "duplicate_dependency",
                    coordinate=dependency.coordinate,
                    scope=dependency.scope,
                )
            seen.add(key)
            checked.append(dependency)
        return checked


def create_config_resolver() -> ConfigResolver:
    """Create config resolver instance.

    Returns:
        ConfigResolver: New config resolver
    """
    return ConfigResolver()
