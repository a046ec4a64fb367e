from __future__ import annotations

"""
Artifact Discovery Service.

Lazily walks object-directory trees and yields dependency artifacts,
optionally narrowed to those whose contents mention a given token.
Scanning is strictly read-only.
"""

import logging
import os
from typing import Iterator, List

from depprune.domain import constants as const
from depprune.infra.fs import is_dangling_link, read_text

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def find_artifacts(root: str, suffix: str = const.DEFAULT_ARTIFACT_SUFFIX) -> Iterator[str]:
    """
    Recursively yield every file under root whose name ends with suffix.

    A root that does not exist yields nothing. Symlinked directories are
    not followed.

    Args:
        root: Object directory to walk.
        suffix: Dependency artifact suffix.

    Yields:
        str: Absolute artifact path.
    """
    root_abs = os.path.abspath(root)

    for dirpath, dirs, files in os.walk(root_abs, onerror=_log_walk_error):
        dirs.sort()
        files.sort()
        for file_name in files:
            if file_name.endswith(suffix) and file_name != suffix:
                yield os.path.join(dirpath, file_name)


def find_artifacts_referencing(
        root: str,
        token: str,
        suffix: str = const.DEFAULT_ARTIFACT_SUFFIX,
) -> Iterator[str]:
    """
    Yield artifacts under root whose text contains token.

    Matching is a plain substring test on the whole file. A bare file
    name also matches same-named files in unrelated directories; callers
    accept those false positives.

    Args:
        root: Object directory to walk.
        token: Text to look for (usually a bare source file name).
        suffix: Dependency artifact suffix.

    Yields:
        str: Absolute artifact path.
    """
    for artifact in find_artifacts(root, suffix):
        content = read_text(artifact)
        if content is not None and token in content:
            yield artifact


def find_dangling_links(root: str, extensions: List[str]) -> List[str]:
    """
    Collect symbolic links under root whose targets no longer exist.

    Only names ending in one of the given extensions are considered. The
    result is a complete list, not a generator, so callers can mutate
    the tree afterwards.

    Args:
        root: Source tree to walk.
        extensions: Tracked source extensions (case-sensitive).

    Returns:
        List[str]: Absolute paths of dangling links.
    """
    exts = tuple(extensions)
    found: List[str] = []
    for dirpath, dirs, files in os.walk(os.path.abspath(root), onerror=_log_walk_error):
        dirs.sort()
        # os.walk lists links to missing targets under files
        for name in sorted(files):
            if not name.endswith(exts):
                continue
            path = os.path.join(dirpath, name)
            if is_dangling_link(path):
                found.append(path)
    return found


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _log_walk_error(err: OSError) -> None:
    if isinstance(err, FileNotFoundError):
        logger.debug(f"Walk root missing: {err.filename}")
        return
    logger.warning(f"Cannot list '{err.filename}': {err.strerror}")
