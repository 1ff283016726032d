"""Test manifest models and their input normalization."""

from typing import Any

import pytest
from pydantic import ValidationError

from droidplan.models import (
    BuildVariant,
    CompileOptions,
    DependencyRef,
    Manifest,
    PluginKind,
    SdkVersionConstraints,
    SymbolicRef,
    VersionInfo,
)


class TestSymbolicReferences:
    def test_literal_and_symbolic_levels(self):
        sdk = SdkVersionConstraints(compile="flutter.compileSdkVersion", min="21", target=34)

        assert sdk.compile == SymbolicRef(ref="flutter.compileSdkVersion")
        assert sdk.min == 21
        assert sdk.target == 34

    def test_explicit_ref_mapping(self):
        sdk = SdkVersionConstraints(compile={"ref": "sdk.compile"}, min=21, target=34)

        assert isinstance(sdk.compile, SymbolicRef)
        assert str(sdk.compile) == "sdk.compile"

    def test_version_name_literal_vs_reference(self):
        literal = VersionInfo(code=3, name="1.0.0")
        symbolic = VersionInfo(code="flutter.versionCode", name="flutter.versionName")

        assert literal.name == "1.0.0"
        assert symbolic.code == SymbolicRef(ref="flutter.versionCode")
        assert symbolic.name == SymbolicRef(ref="flutter.versionName")

    def test_literal_form_keeps_dotted_strings(self):
        version = VersionInfo(code=1, name={"literal": "release.candidate"})

        assert version.name == "release.candidate"

    def test_literal_ndk_version(self, manifest_data: dict[str, Any]):
        manifest_data["ndk_version"] = {"literal": "26.1.10909125"}

        assert Manifest.model_validate(manifest_data).ndk_version == "26.1.10909125"

    def test_numeric_version_name_becomes_string(self):
        assert VersionInfo(code=1, name=2).name == "2"


class TestCompileOptions:
    @pytest.mark.parametrize(
        ("declared", "expected"),
        [
            ("JavaVersion.VERSION_11", "11"),
            ("VERSION_1_8", "1.8"),
            ("JavaVersion.VERSION_17", "17"),
            (11, "11"),
            (1.8, "1.8"),
            ("21", "21"),
        ],
    )
    def test_java_version_notations(self, declared: Any, expected: str):
        options = CompileOptions(source_compatibility=declared)

        assert options.source_compatibility == expected

    def test_defaults(self):
        options = CompileOptions()

        assert options.source_compatibility == "1.8"
        assert options.target_compatibility == "1.8"
        assert options.jvm_target is None


class TestBuildVariant:
    def test_signing_config_shorthand(self):
        variant = BuildVariant.model_validate({"name": "release", "signing_config": "debug"})

        assert variant.signing == {"signing_config": "debug"}

    def test_gradle_spelling_shorthand(self):
        variant = BuildVariant.model_validate({"name": "release", "signingConfig": "upload"})

        assert variant.signing == {"signing_config": "upload"}

    def test_explicit_signing_map(self):
        variant = BuildVariant.model_validate(
            {"name": "release", "signing": {"signing_config": "upload", "bundle": "play"}}
        )

        assert variant.signing["bundle"] == "play"


class TestManifest:
    def test_flutter_app_manifest(self, manifest: Manifest):
        assert manifest.plugins[0].identifier == "com.android.application"
        assert manifest.namespace == "com.example.smart_system"
        assert manifest.ndk_version == SymbolicRef(ref="flutter.ndkVersion")
        assert manifest.compile_options.jvm_target == "11"
        assert manifest.build_types[0].signing == {"signing_config": "debug"}
        assert manifest.flutter_source == "../.."

    def test_plugin_string_shorthand(self, manifest_data: dict[str, Any]):
        manifest_data["plugins"] = ["com.android.application", {"id": "kotlin-android"}]

        manifest = Manifest.model_validate(manifest_data)

        assert [plugin.identifier for plugin in manifest.plugins] == [
            "com.android.application",
            "kotlin-android",
        ]

    def test_dependency_notations(self, manifest_data: dict[str, Any]):
        manifest_data["dependencies"] = [
            "androidx.core:core-ktx:1.12.0",
            {"testImplementation": "junit:junit:4.13.2"},
            {"group": "com.google.firebase", "artifact": "firebase-bom", "version": "32.7.0", "scope": "api"},
        ]

        manifest = Manifest.model_validate(manifest_data)

        assert manifest.dependencies == [
            DependencyRef(group="androidx.core", artifact="core-ktx", version="1.12.0"),
            DependencyRef(group="junit", artifact="junit", version="4.13.2", scope="testImplementation"),
            DependencyRef(group="com.google.firebase", artifact="firebase-bom", version="32.7.0", scope="api"),
        ]

    def test_flutter_source_as_scalar(self, manifest_data: dict[str, Any]):
        manifest_data["flutter"] = "../../app"

        assert Manifest.model_validate(manifest_data).flutter_source == "../../app"

    def test_unknown_sections_rejected(self, manifest_data: dict[str, Any]):
        manifest_data["buildFeatures"] = {"compose": True}

        with pytest.raises(ValidationError):
            Manifest.model_validate(manifest_data)

    def test_missing_sdk_rejected(self, manifest_data: dict[str, Any]):
        del manifest_data["sdk"]

        with pytest.raises(ValidationError):
            Manifest.model_validate(manifest_data)

    def test_unknown_plugin_is_structurally_valid(self, manifest_data: dict[str, Any]):
        manifest_data["plugins"].append({"id": "com.example.custom"})

        manifest = Manifest.model_validate(manifest_data)

        assert manifest.plugins[-1].identifier == "com.example.custom"


class TestPluginKind:
    def test_kotlin_alias(self):
        assert PluginKind.from_identifier("org.jetbrains.kotlin.android") is PluginKind.KOTLIN_ANDROID

    def test_unknown_identifier(self):
        assert PluginKind.from_identifier("com.example.custom") is None
