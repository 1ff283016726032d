"""SDK info providers resolving symbolic references to concrete values."""

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from droidplan.core.errors import CapabilityLoadError
from droidplan.core.structlog_logger import get_struct_logger
from droidplan.protocols import SdkInfoProviderProtocol


logger = get_struct_logger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def _coerce_scalar(value: Any) -> int | str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    return text


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, int | str]:
    """Flatten nested mappings into dotted keys (``flutter: {a: 1}`` -> ``flutter.a``)."""
    flat: dict[str, int | str] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{name}."))
        elif value is not None:
            flat[name] = _coerce_scalar(value)
    return flat


class MappingSdkInfoProvider:
    """SDK info provider backed by an in-memory mapping."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = _flatten(values or {})

    def lookup(self, symbol: str) -> int | str | None:
        return self._values.get(symbol)

    def symbols(self) -> list[str]:
        return sorted(self._values)

    def __len__(self) -> int:
        return len(self._values)


class ChainedSdkInfoProvider:
    """Asks each provider in turn; the first one knowing a symbol wins."""

    def __init__(self, providers: Iterable[SdkInfoProviderProtocol]) -> None:
        self._providers = list(providers)

    def lookup(self, symbol: str) -> int | str | None:
        for provider in self._providers:
            value = provider.lookup(symbol)
            if value is not None:
                return value
        return None


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java ``.properties`` content such as Flutter's ``local.properties``.

    Supports ``key=value`` and ``key: value`` lines, ``#``/``!`` comments and
    backslash line continuations. Escapes other than ``\\:``, ``\\=`` and
    ``\\\\`` are kept verbatim.
    """
    properties: dict[str, str] = {}
    pending = ""
    for raw_line in text.splitlines():
        line = pending + raw_line.lstrip()
        pending = ""
        if not line or line[0] in "#!":
            continue
        if line.endswith("\\") and not line.endswith("\\\\"):
            pending = line[:-1]
            continue
        match = re.match(r"((?:[^\\:=\s]|\\.)+)\s*[:=]?\s*(.*)", line)
        if not match:
            continue
        key, value = match.groups()
        unescape = {"\\:": ":", "\\=": "=", "\\\\": "\\"}
        for escaped, plain in unescape.items():
            key = key.replace(escaped, plain)
            value = value.replace(escaped, plain)
        properties[key] = value.rstrip()
    if pending:
        logger.debug("dangling_properties_continuation", line=pending)
    return properties


def load_sdk_info(path: Path) -> MappingSdkInfoProvider:
    """Load an SDK info provider from a YAML/JSON file or a ``.properties`` file.

    Raises:
        CapabilityLoadError: If the file cannot be read or parsed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read SDK info file {path}: {e}"
        logger.error("sdk_info_read_failed", path=str(path), error=str(e))
        raise CapabilityLoadError(msg) from e

    if path.suffix == ".properties":
        data: Any = parse_properties(text)
    else:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            msg = f"Failed to parse SDK info file {path}: {e}"
            logger.error("sdk_info_parse_failed", path=str(path), error=str(e))
            raise CapabilityLoadError(msg) from e

    if not isinstance(data, Mapping):
        msg = f"SDK info file {path} must contain a mapping"
        raise CapabilityLoadError(msg)

    provider = MappingSdkInfoProvider(data)
    logger.debug("sdk_info_loaded", path=str(path), symbols=len(provider))
    return provider


def create_sdk_info_provider(
    paths: Iterable[Path] = (), overrides: Mapping[str, Any] | None = None
) -> ChainedSdkInfoProvider:
    """Create a provider from files, with *overrides* consulted first.

    Later files take precedence over earlier ones.
    """
    providers: list[SdkInfoProviderProtocol] = []
    if overrides:
        providers.append(MappingSdkInfoProvider(overrides))
    providers.extend(reversed([load_sdk_info(Path(p)) for p in paths]))
    return ChainedSdkInfoProvider(providers)
