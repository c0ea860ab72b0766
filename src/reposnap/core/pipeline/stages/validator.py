from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper between untrusted inputs (CLI flags, JSON config
files) and the snapshot engine. Handles type coercion, CSV expansion,
extension normalization and default value injection, and derives the
immutable option records the engine consumes.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from reposnap.core.pipeline.components.filters import normalize_extension
from reposnap.domain.config import get_default_config
from reposnap.domain.constants import FORMAT_ALIASES
from reposnap.domain.errors import ConfigError
from reposnap.domain.snapshot_models import OutputFormat, ProbeOptions, RenderOptions

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["input_path", "output_file"]

_BOOL_FIELDS = [
    "include_files", "include_size", "include_loc", "include_counts", "include_hidden",
]

_LIST_FIELDS = ["extensions", "exclude", "ignore_files"]

# Explicit None disables the limit
_NULLABLE_FIELDS = {"depth", "max_file_size_kb"}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise ConfigError on invalid values instead of
            falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
        a list of human-readable warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        _reject(msg, warnings, strict)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None or k in _NULLABLE_FIELDS})

    for name in _STRING_FIELDS:
        merged[name] = _as_str(merged.get(name), defaults[name], name, warnings, strict)

    for name in _BOOL_FIELDS:
        merged[name] = _as_bool(merged.get(name), defaults[name], name, warnings, strict)

    for name in _LIST_FIELDS:
        merged[name] = _as_list_str(merged.get(name), defaults[name], name, warnings, strict)

    merged["depth"] = _as_optional_int(merged.get("depth"), "depth", warnings, strict)
    merged["sample_lines"] = _as_non_negative_int(
        merged.get("sample_lines"), defaults["sample_lines"], "sample_lines", warnings, strict
    )
    merged["max_workers"] = max(1, _as_non_negative_int(
        merged.get("max_workers"), defaults["max_workers"], "max_workers", warnings, strict
    ))
    merged["max_file_size_kb"] = _as_size_limit(
        merged.get("max_file_size_kb"), defaults["max_file_size_kb"], warnings, strict
    )
    merged["output_format"] = _as_format(merged.get("output_format"), warnings, strict).value

    merged["extensions"] = sorted({e for e in map(normalize_extension, merged["extensions"]) if e})

    return merged, warnings


def build_probe_options(config: Dict[str, Any]) -> ProbeOptions:
    """Derive per-file probe options from a validated configuration."""
    limit_kb = config.get("max_file_size_kb")
    sample = int(config.get("sample_lines") or 0)
    return ProbeOptions(
        max_file_size_bytes=None if limit_kb is None else int(limit_kb * 1024),
        count_loc=bool(config.get("include_loc")),
        sample_lines=sample,
    )


def build_render_options(config: Dict[str, Any]) -> RenderOptions:
    """Derive text renderer decorations from a validated configuration."""
    return RenderOptions(
        show_size=bool(config.get("include_size")),
        show_loc=bool(config.get("include_loc")),
        show_counts=bool(config.get("include_counts")),
        show_sample=int(config.get("sample_lines") or 0) > 0,
    )


def parse_output_format(value: Any) -> OutputFormat:
    """
    Resolve a format name or alias to an OutputFormat.

    Raises:
        ValueError: If the name is not recognized.
    """
    if isinstance(value, OutputFormat):
        return value
    key = str(value).strip().lower()
    return OutputFormat(FORMAT_ALIASES.get(key, key))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigError(msg)
    warnings.append(f"{msg} Using fallback.")
    logger.debug(msg)


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip() or fallback
    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str):
        items = [x.strip() for x in value.split(",") if x.strip()]
        return items if items else list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                _reject(f"Invalid item in '{field}[{i}]': expected str.", warnings, strict)
        return out if out else list(fallback)

    _reject(f"Invalid field '{field}': expected list[str], received {type(value).__name__}.", warnings, strict)
    return list(fallback)


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_optional_int(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[int]:
    """Integers pass through; None and 'unlimited'-style strings mean no limit."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in ("", "inf", "infinity", "unlimited", "none"):
        return None
    parsed = _coerce_int(value)
    if parsed is None:
        _reject(f"Invalid field '{field}': expected int, received {value!r}.", warnings, strict)
    return parsed


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    parsed = _coerce_int(value)
    if parsed is None or parsed < 0:
        _reject(f"Invalid field '{field}': expected non-negative int, received {value!r}.", warnings, strict)
        return fallback
    return parsed


def _as_size_limit(value: Any, fallback: float, warnings: List[str], strict: bool) -> Optional[float]:
    """Kilobyte ceiling; None disables it."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            pass
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0:
        return value
    _reject(f"Invalid field 'max_file_size_kb': expected non-negative number, received {value!r}.", warnings, strict)
    return fallback


def _as_format(value: Any, warnings: List[str], strict: bool) -> OutputFormat:
    try:
        return parse_output_format(value)
    except ValueError:
        allowed = ", ".join(f.value for f in OutputFormat)
        _reject(f"Invalid field 'output_format': '{value}' is not one of {allowed}.", warnings, strict)
        return OutputFormat.TEXT
