from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the project file. Coerces untrusted JSON values into the
expected types, fills missing keys with domain defaults and reports every
correction as a warning instead of aborting the run.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from depprune.domain import constants as const
from depprune.domain.config import get_default_config

logger = logging.getLogger(__name__)

_KNOWN_LAYOUTS = (const.LAYOUT_SHARED, const.LAYOUT_LOCAL)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize project-level settings.

    Args:
        config: Raw settings (usually the parsed project file).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized settings and warnings.
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
        warnings.append(f"Unknown setting '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in ("artifact_suffix", "layout", "object_dir_name", "object_dir_prefix"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("source_extensions", "tracked_trees"):
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    # Domain-specific normalization
    merged["artifact_suffix"] = _normalize_suffix(merged["artifact_suffix"], warnings, strict)
    merged["source_extensions"] = _normalize_extensions(
        merged["source_extensions"], defaults["source_extensions"], warnings, strict
    )
    merged["tracked_trees"] = _normalize_trees(
        merged["tracked_trees"], defaults["tracked_trees"], warnings, strict
    )

    if merged["layout"] not in _KNOWN_LAYOUTS:
        msg = f"Unknown layout '{merged['layout']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Falling back to '{const.DEFAULT_LAYOUT}'.")
        merged["layout"] = const.DEFAULT_LAYOUT

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


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, list):
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
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_suffix(suffix: str, warnings: List[str], strict: bool) -> str:
    if suffix.startswith("."):
        return suffix
    if strict:
        raise ValueError(f"Invalid artifact suffix '{suffix}': must start with '.'.")
    warnings.append(f"Artifact suffix '{suffix}' corrected to '.{suffix}'.")
    return "." + suffix


def _normalize_extensions(exts: List[str], fallback: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all file extensions are prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out if out else list(fallback)


def _normalize_trees(trees: List[str], fallback: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Tracked trees must stay relative to the project root."""
    out: List[str] = []
    for tree in trees:
        t = os.path.normpath(tree)
        if os.path.isabs(t) or t == os.pardir or t.startswith(os.pardir + os.sep):
            msg = f"Tracked tree '{tree}' must be relative to the project root."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Entry discarded.")
            continue
        out.append(t)
    return out if out else list(fallback)
