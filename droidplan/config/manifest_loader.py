"""Manifest file loading.

Manifests are YAML (or JSON, which YAML also reads) documents mirroring the
sections of :class:`droidplan.models.Manifest`.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from droidplan.core.errors import ManifestLoadError
from droidplan.core.structlog_logger import get_struct_logger
from droidplan.models.manifest import Manifest


logger = get_struct_logger(__name__)


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def parse_manifest(data: Any, source: str = "<memory>") -> Manifest:
    """Validate raw manifest data.

    Args:
        data: Parsed document (a mapping)
        source: Name used in error messages

    Raises:
        ManifestLoadError: If the data does not have the manifest structure
    """
    if not isinstance(data, dict):
        msg = f"Manifest {source} must be a mapping, got {type(data).__name__}"
        raise ManifestLoadError(msg)
    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid manifest {source}: {_format_validation_error(e)}"
        logger.error("manifest_invalid", source=source, errors=e.error_count())
        raise ManifestLoadError(msg) from e


def load_manifest(path: Path) -> Manifest:
    """Load and structurally validate a manifest file.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.json`` manifest

    Returns:
        Manifest: Parsed manifest, not yet resolved

    Raises:
        ManifestLoadError: If the file cannot be read, parsed or validated
    """
    logger.debug("loading_manifest", path=str(path))
    try:
        with path.open(encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        msg = f"Failed to load manifest {path}: {e}"
        logger.error("manifest_load_failed", path=str(path), error=str(e))
        raise ManifestLoadError(msg) from e

    return parse_manifest(data, source=str(path))
