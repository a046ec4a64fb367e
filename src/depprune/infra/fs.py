from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin, failure-tolerant wrappers over 'os' used by the scanner, the
reconciler and the link sweep. Helpers here report problems through
return values so callers can keep going on a per-file basis.
"""

import logging
import os
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str, base: Optional[str] = None) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.
        base: Directory relative paths are resolved against. Defaults to
              the process working directory.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    if base:
        p = os.path.join(base, p)
    return os.path.abspath(p)


def same_directory(a: str, b: str) -> bool:
    """True if both paths resolve to the same directory on disk."""
    try:
        return os.path.samefile(a, b)
    except OSError:
        return os.path.realpath(a) == os.path.realpath(b)

# -----------------------------------------------------------------------------
# FILESYSTEM INSPECTION API
# -----------------------------------------------------------------------------

def is_readable(path: str) -> bool:
    """True if path exists (following links) and can be read by this process."""
    return os.path.exists(path) and os.access(path, os.R_OK)


def is_dangling_link(path: str) -> bool:
    """True if path is a symbolic link whose target does not exist."""
    return os.path.islink(path) and not os.path.exists(path)


def read_text(path: str) -> Optional[str]:
    """
    Read a file as text, tolerating undecodable bytes.

    Returns:
        Optional[str]: File contents, or None if the file cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        logger.warning(f"Cannot read '{path}': {e}")
        return None

# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def safe_remove(path: str) -> Tuple[bool, Optional[str]]:
    """
    Delete a file or symbolic link without raising.

    A path that is already gone counts as removed.

    Args:
        path: Target file or link.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.remove(path)
        return True, None
    except FileNotFoundError:
        logger.debug(f"'{path}' already removed.")
        return True, None
    except OSError as e:
        return False, str(e)
