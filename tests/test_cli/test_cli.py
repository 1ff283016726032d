"""Test the droidplan command line interface."""

import json
from pathlib import Path
from typing import Any

import pytest
import yaml
from typer.testing import CliRunner

from droidplan.cli import app


pytestmark = pytest.mark.usefixtures("clean_environment")


@pytest.fixture(autouse=True)
def wide_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich tables from wrapping plugin identifiers."""
    monkeypatch.setenv("COLUMNS", "200")


class TestResolveCommand:
    def test_resolve_prints_json_plan(
        self, cli_runner: CliRunner, manifest_file: Path, local_properties: Path
    ):
        result = cli_runner.invoke(
            app, ["resolve", str(manifest_file), "--sdk-info", str(local_properties)]
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.stdout)
        assert plan["sdk"] == {"compile": 34, "min": 19, "target": 34}
        assert plan["version"] == {"code": 7, "name": "2.1.0"}
        assert plan["ndk_version"] == "26.1.10909125"
        assert plan["variants"][0]["signing"][0]["identity"]["name"] == "debug"

    def test_set_overrides_sdk_info(
        self, cli_runner: CliRunner, manifest_file: Path, local_properties: Path
    ):
        result = cli_runner.invoke(
            app,
            [
                "resolve",
                str(manifest_file),
                "-s",
                str(local_properties),
                "--set",
                "flutter.versionCode=42",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["version"]["code"] == 42

    def test_resolve_table_format(
        self, cli_runner: CliRunner, manifest_file: Path, local_properties: Path
    ):
        result = cli_runner.invoke(
            app,
            ["resolve", str(manifest_file), "-s", str(local_properties), "-f", "table"],
        )

        assert result.exit_code == 0, result.output
        assert "com.example.smart_system" in result.stdout
        assert "Build types" in result.stdout

    def test_resolve_to_file(
        self,
        cli_runner: CliRunner,
        manifest_file: Path,
        local_properties: Path,
        tmp_path: Path,
    ):
        output = tmp_path / "out" / "plan.json"

        result = cli_runner.invoke(
            app,
            ["resolve", str(manifest_file), "-s", str(local_properties), "-o", str(output)],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["namespace"] == "com.example.smart_system"

    def test_missing_sdk_info_fails_with_field(
        self, cli_runner: CliRunner, manifest_file: Path
    ):
        result = cli_runner.invoke(app, ["resolve", str(manifest_file)])

        assert result.exit_code == 1
        assert "sdk.compile" in result.output
        assert "UnresolvedSdkReferenceError" in result.output

    def test_no_debug_signing(
        self, cli_runner: CliRunner, manifest_file: Path, local_properties: Path
    ):
        result = cli_runner.invoke(
            app,
            [
                "resolve",
                str(manifest_file),
                "-s",
                str(local_properties),
                "--no-debug-signing",
            ],
        )

        assert result.exit_code == 1
        assert "UnknownSigningConfigError" in result.output

    def test_signing_file(
        self,
        cli_runner: CliRunner,
        tmp_path: Path,
        manifest_data: dict[str, Any],
        local_properties: Path,
    ):
        manifest_data["build_types"] = [{"name": "release", "signing_config": "upload"}]
        manifest_file = tmp_path / "app.yaml"
        manifest_file.write_text(yaml.safe_dump(manifest_data))
        signing_file = tmp_path / "signing.yaml"
        signing_file.write_text("upload:\n  key_alias: upload\n  store_file: upload.jks\n")

        result = cli_runner.invoke(
            app,
            [
                "resolve",
                str(manifest_file),
                "-s",
                str(local_properties),
                "--signing",
                str(signing_file),
            ],
        )

        assert result.exit_code == 0, result.output
        identity = json.loads(result.stdout)["variants"][0]["signing"][0]["identity"]
        assert identity["key_alias"] == "upload"

    def test_invalid_set_value(self, cli_runner: CliRunner, manifest_file: Path):
        result = cli_runner.invoke(
            app, ["resolve", str(manifest_file), "--set", "flutter.versionCode"]
        )

        assert result.exit_code == 1
        assert "expected SYMBOL=VALUE" in result.output

    def test_invalid_manifest(self, cli_runner: CliRunner, tmp_path: Path):
        manifest_file = tmp_path / "broken.yaml"
        manifest_file.write_text("- not a manifest\n")

        result = cli_runner.invoke(app, ["resolve", str(manifest_file)])

        assert result.exit_code == 1
        assert "must be a mapping" in result.output

    def test_settings_supply_sdk_info(
        self,
        cli_runner: CliRunner,
        clean_environment: Path,
        manifest_file: Path,
        local_properties: Path,
    ):
        (clean_environment / "droidplan.yaml").write_text(
            f"sdk_info_paths:\n  - {local_properties}\n"
        )

        result = cli_runner.invoke(app, ["resolve", str(manifest_file)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["sdk"]["target"] == 34

    @pytest.mark.parametrize("config_text", [None, "log_level: WARNING\n"])
    def test_stdout_holds_only_the_plan(
        self,
        cli_runner: CliRunner,
        clean_environment: Path,
        manifest_file: Path,
        local_properties: Path,
        config_text: str | None,
    ):
        if config_text is not None:
            (clean_environment / "droidplan.yaml").write_text(config_text)

        result = cli_runner.invoke(
            app, ["resolve", str(manifest_file), "-s", str(local_properties)]
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("{")
        assert "settings_" not in result.stdout
        json.loads(result.stdout)


class TestValidateCommand:
    def test_clean_manifest(
        self, cli_runner: CliRunner, manifest_file: Path, local_properties: Path
    ):
        result = cli_runner.invoke(
            app, ["validate", str(manifest_file), "-s", str(local_properties)]
        )

        assert result.exit_code == 0, result.output
        assert "resolves cleanly" in result.stdout

    def test_reports_every_problem(
        self, cli_runner: CliRunner, tmp_path: Path, manifest_data: dict[str, Any]
    ):
        manifest_data["namespace"] = "smart_system"
        manifest_data["dependencies"] = ["com.google.firebase:firebase-auth"]
        manifest_file = tmp_path / "app.yaml"
        manifest_file.write_text(yaml.safe_dump(manifest_data))

        result = cli_runner.invoke(
            app, ["validate", str(manifest_file), "--format", "json"]
        )

        assert result.exit_code == 1
        fields = {error["field"] for error in json.loads(result.stdout)}
        assert "namespace" in fields
        assert "sdk.compile" in fields
        assert "dependencies[0].version" in fields


class TestMiscCommands:
    def test_plugins(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["plugins"])

        assert result.exit_code == 0, result.output
        assert "dev.flutter.flutter-gradle-plugin" in result.stdout
        assert "org.jetbrains.kotlin.android" in result.stdout

    def test_version(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.startswith("droidplan v")

    def test_missing_config_file(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["--config", "missing.yaml", "plugins"])

        assert result.exit_code == 1
        assert "Config file not found" in result.output
