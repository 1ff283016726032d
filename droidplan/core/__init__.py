from .errors import (
    CapabilityLoadError,
    ConfigError,
    DroidplanError,
    ManifestLoadError,
    ResolutionError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
    "DroidplanError",
    "ConfigError",
    "ManifestLoadError",
    "CapabilityLoadError",
    "ResolutionError",
]
