"""Core test fixtures for the droidplan project."""

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from typer.testing import CliRunner

from droidplan.models import Manifest, SigningIdentity
from droidplan.resolution import (
    ConfigResolver,
    InMemorySigningRegistry,
    MappingSdkInfoProvider,
    debug_signing_identity,
)


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def resolver() -> ConfigResolver:
    return ConfigResolver()


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Undo handlers installed by the CLI's logging setup."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Remove DROIDPLAN_ variables and run from an empty directory."""
    import os

    for key in list(os.environ):
        if key.startswith("DROIDPLAN_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---- Manifest Fixtures ----


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """Manifest equivalent to a Flutter app's android/app/build.gradle.kts."""
    return {
        "plugins": [
            {"id": "com.android.application"},
            {"id": "kotlin-android"},
            {"id": "com.google.gms.google-services"},
            {"id": "dev.flutter.flutter-gradle-plugin"},
        ],
        "namespace": "com.example.smart_system",
        "application_id": "com.example.smart_system",
        "sdk": {
            "compile": "flutter.compileSdkVersion",
            "min": 19,
            "target": "flutter.targetSdkVersion",
        },
        "ndk_version": "flutter.ndkVersion",
        "version": {"code": "flutter.versionCode", "name": "flutter.versionName"},
        "compile_options": {
            "source_compatibility": "JavaVersion.VERSION_11",
            "target_compatibility": "JavaVersion.VERSION_11",
            "jvm_target": "11",
        },
        "build_types": [{"name": "release", "signing_config": "debug"}],
        "dependencies": [
            {"implementation": "com.google.firebase:firebase-auth:22.3.1"}
        ],
        "flutter": {"source": "../.."},
    }


@pytest.fixture
def manifest(manifest_data: dict[str, Any]) -> Manifest:
    return Manifest.model_validate(manifest_data)


@pytest.fixture
def sdk_values() -> dict[str, Any]:
    return {
        "flutter.compileSdkVersion": 34,
        "flutter.targetSdkVersion": 34,
        "flutter.ndkVersion": "26.1.10909125",
        "flutter.versionCode": 1,
        "flutter.versionName": "1.0.0",
    }


@pytest.fixture
def sdk_provider(sdk_values: dict[str, Any]) -> MappingSdkInfoProvider:
    return MappingSdkInfoProvider(sdk_values)


@pytest.fixture
def signing_registry() -> InMemorySigningRegistry:
    return InMemorySigningRegistry([debug_signing_identity()])


@pytest.fixture
def release_identity() -> SigningIdentity:
    return SigningIdentity(
        name="release",
        key_alias="upload",
        store_file="keystore/upload.jks",
        store_type="jks",
    )


# ---- File Fixtures ----


@pytest.fixture
def manifest_file(tmp_path: Path, manifest_data: dict[str, Any]) -> Path:
    path = tmp_path / "app.yaml"
    path.write_text(yaml.safe_dump(manifest_data, sort_keys=False))
    return path


@pytest.fixture
def local_properties(tmp_path: Path) -> Path:
    path = tmp_path / "local.properties"
    path.write_text(
        "# generated by flutter\n"
        "sdk.dir=/opt/android-sdk\n"
        "flutter.sdk=/opt/flutter\n"
        "flutter.compileSdkVersion=34\n"
        "flutter.targetSdkVersion=34\n"
        "flutter.ndkVersion=26.1.10909125\n"
        "flutter.versionCode=7\n"
        "flutter.versionName=2.1.0\n"
    )
    return path
