"""Manifest loading and user settings."""

from .manifest_loader import load_manifest, parse_manifest
from .settings import DroidplanSettings, default_config_paths, load_settings


__all__ = [
    "DroidplanSettings",
    "default_config_paths",
    "load_manifest",
    "load_settings",
    "parse_manifest",
]
