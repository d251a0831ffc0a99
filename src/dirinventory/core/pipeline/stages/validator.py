from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI flags, JSON config
files) and the pipeline. Fills missing keys with defaults, coerces loosely
typed values and normalizes paths.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from dirinventory.domain.config import DEFAULT_IGNORED_DIRECTORIES, get_default_config
from dirinventory.infra.fs import normalize_path

logger = logging.getLogger(__name__)


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
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.

    Raises:
        TypeError: In strict mode, when a value has the wrong type.
        ValueError: In strict mode, when an ignore entry is not a base name.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    unknown = sorted(set(config) - set(defaults))
    for key in unknown:
        warnings.append(f"Unknown configuration key '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    path_fields = ["root", "output_dir"]
    bool_fields = ["include_hidden", "follow_symlinks", "save_skipped_report"]

    for field in path_fields:
        raw = _as_str(merged.get(field), defaults[field], field, warnings, strict)
        merged[field] = normalize_path(raw, defaults[field])

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults[field], field, warnings, strict
        )

    ignore = _as_list_str(
        merged.get("ignore"), DEFAULT_IGNORED_DIRECTORIES, "ignore", warnings, strict,
        allow_empty=True,
    )
    merged["ignore"] = _normalize_ignore_names(ignore, warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
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

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool,
        allow_empty: bool = False,
) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items if items or allow_empty else list(fallback)

    if isinstance(value, (list, tuple, set, frozenset)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out or allow_empty else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_ignore_names(names: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Keep ignore entries as unique base names; path-like entries are trimmed."""
    out: List[str] = []
    for name in names:
        base = os.path.basename(name.rstrip("/\\"))
        if base != name:
            if strict:
                raise ValueError(f"Invalid ignore entry '{name}': must be a directory name.")
            warnings.append(f"Ignore entry '{name}' reduced to base name '{base}'.")
        if base and base not in out:
            out.append(base)
    return out
