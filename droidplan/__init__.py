"""droidplan - declarative Android build manifest resolver."""

from importlib.metadata import distribution

from .core.errors import DroidplanError, ResolutionError
from .models import Manifest, ResolvedBuildPlan
from .resolution import ConfigResolver, create_config_resolver


__version__ = distribution(__package__ or "droidplan").version

__all__ = [
    "ConfigResolver",
    "DroidplanError",
    "Manifest",
    "ResolutionError",
    "ResolvedBuildPlan",
    "__version__",
    "create_config_resolver",
]
