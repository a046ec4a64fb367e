from __future__ import annotations

"""
Configuration Domain Management.

Resolves the immutable run configuration from three layers: built-in
defaults, the optional project file (depprune.json in the project root)
and the build environment (platform identifier and project root, from
command-line overrides or environment variables).
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from depprune.domain import constants as const
from depprune.domain.errors import BuildEnvironmentError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PruneConfig:
    """
    Immutable run configuration shared by every component.

    Attributes:
        project_root: Absolute path of the designated project root.
        platform: Platform/options identifier segmenting object directories.
        artifact_suffix: Suffix identifying dependency artifacts.
        source_extensions: Extensions marking a file as a build input.
        tracked_trees: Top-level trees (relative to the root) swept for links.
        layout: Name of the object-directory layout strategy.
        object_dir_name: Shared object directory name ('shared' layout).
        object_dir_prefix: Per-directory object prefix ('local' layout).
    """
    project_root: str
    platform: str
    artifact_suffix: str = const.DEFAULT_ARTIFACT_SUFFIX
    source_extensions: Tuple[str, ...] = tuple(const.DEFAULT_SOURCE_EXTENSIONS)
    tracked_trees: Tuple[str, ...] = tuple(const.DEFAULT_TRACKED_TREES)
    layout: str = const.DEFAULT_LAYOUT
    object_dir_name: str = const.DEFAULT_OBJECT_DIR_NAME
    object_dir_prefix: str = const.DEFAULT_OBJECT_DIR_PREFIX

    def tracked_tree_paths(self) -> List[str]:
        return [os.path.join(self.project_root, t) for t in self.tracked_trees]


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default project-level settings.

    Returns:
        Dict[str, Any]: Default values for every project file key.
    """
    return {
        "artifact_suffix": const.DEFAULT_ARTIFACT_SUFFIX,
        "source_extensions": list(const.DEFAULT_SOURCE_EXTENSIONS),
        "tracked_trees": list(const.DEFAULT_TRACKED_TREES),
        "layout": const.DEFAULT_LAYOUT,
        "object_dir_name": const.DEFAULT_OBJECT_DIR_NAME,
        "object_dir_prefix": const.DEFAULT_OBJECT_DIR_PREFIX,
    }


# -----------------------------------------------------------------------------
# Environment Resolution
# -----------------------------------------------------------------------------
def resolve_environment(
        environ: Optional[Mapping[str, str]] = None,
        *,
        platform: Optional[str] = None,
        project_root: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Determine the platform identifier and project root.

    Explicit arguments win over the environment.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        platform: Explicit platform override.
        project_root: Explicit project root override.

    Returns:
        Tuple[str, str]: (platform, absolute project root).

    Raises:
        BuildEnvironmentError: If either value is unset, or the root is
            not an existing directory.
    """
    env = os.environ if environ is None else environ

    plat = (platform or env.get(const.ENV_PLATFORM, "")).strip()
    if not plat:
        raise BuildEnvironmentError(
            f"Platform identifier is not set (use --platform or ${const.ENV_PLATFORM})."
        )

    root = (project_root or env.get(const.ENV_PROJECT_ROOT, "")).strip()
    if not root:
        raise BuildEnvironmentError(
            f"Project root is not set (use --root or ${const.ENV_PROJECT_ROOT})."
        )

    root = os.path.abspath(os.path.expanduser(root))
    if not os.path.isdir(root):
        raise BuildEnvironmentError(f"Project root '{root}' is not a directory.")

    return plat, root


def load_project_settings(project_root: str) -> Dict[str, Any]:
    """
    Read the raw project file, if present.

    Args:
        project_root: Directory expected to hold depprune.json.

    Returns:
        Dict[str, Any]: Raw settings, or an empty dict if no file exists.

    Raises:
        BuildEnvironmentError: If the file exists but cannot be parsed.
    """
    path = os.path.join(project_root, const.PROJECT_CONFIG_FILE)
    if not os.path.exists(path):
        logger.debug(f"No project file at '{path}'. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BuildEnvironmentError(f"Unreadable project file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise BuildEnvironmentError(
            f"Project file '{path}' must contain a JSON object, found {type(data).__name__}."
        )

    logger.debug(f"Loaded project settings from '{path}'.")
    return data


def load_config(
        environ: Optional[Mapping[str, str]] = None,
        *,
        platform: Optional[str] = None,
        project_root: Optional[str] = None,
) -> Tuple[PruneConfig, List[str]]:
    """
    Build the full run configuration.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        platform: Explicit platform override.
        project_root: Explicit project root override.

    Returns:
        Tuple[PruneConfig, List[str]]: Configuration and validation warnings.
    """
    # Local import: the validator depends on this module's defaults
    from depprune.core.validator import validate_config

    plat, root = resolve_environment(environ, platform=platform, project_root=project_root)
    clean, warnings = validate_config(load_project_settings(root), strict=False)

    cfg = PruneConfig(
        project_root=root,
        platform=plat,
        artifact_suffix=clean["artifact_suffix"],
        source_extensions=tuple(clean["source_extensions"]),
        tracked_trees=tuple(clean["tracked_trees"]),
        layout=clean["layout"],
        object_dir_name=clean["object_dir_name"],
        object_dir_prefix=clean["object_dir_prefix"],
    )
    return cfg, warnings
