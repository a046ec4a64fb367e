from __future__ import annotations

"""
Base Definitions for Object-Directory Layout Strategies.

A layout is the single place that knows how the build system names its
object directories. Every path translation between the source tree and
the artifact tree goes through one, so a change of convention only needs
a new strategy.
"""

import os
from abc import ABC, abstractmethod
from typing import List

from depprune.domain.config import PruneConfig
from depprune.domain.errors import BuildEnvironmentError, LayoutError


class ObjectDirLayout(ABC):
    """
    Abstract base class for object-directory naming conventions.

    Attributes:
        project_root: Absolute path of the project root.
        suffix: Dependency artifact suffix (e.g. '.d').
    """

    name: str = ""

    def __init__(self, project_root: str, suffix: str) -> None:
        self.project_root = os.path.abspath(project_root)
        self.suffix = suffix

    @classmethod
    @abstractmethod
    def from_config(cls, cfg: PruneConfig) -> ObjectDirLayout:
        """Build the layout from the settings it reads in a run configuration."""

    @abstractmethod
    def object_root_for(self, base_dir: str, platform: str) -> str:
        """
        Compose the object directory holding artifacts for base_dir.

        Args:
            base_dir: Source directory.
            platform: Platform/options identifier.

        Returns:
            str: Absolute object root path (may not exist).

        Raises:
            BuildEnvironmentError: If the platform is unset or base_dir
                cannot be mapped.
        """

    @abstractmethod
    def implied_source_for(self, artifact_path: str) -> str:
        """
        Map an artifact back to the source it was generated from.

        Raises:
            LayoutError: If the path does not follow the convention.
        """

    @abstractmethod
    def sibling_roots_of(self, object_root: str) -> List[str]:
        """
        List existing object roots for the same subpath on every platform.

        Order follows directory listing and is not sorted.
        """

    def subtree_roots(self, base_dir: str, platform: str) -> List[str]:
        """
        List every existing object root, on any platform, holding artifacts
        for sources anywhere under base_dir.
        """
        return self.sibling_roots_of(self.object_root_for(base_dir, platform))

    def artifact_path_for(self, source_path: str, platform: str) -> str:
        """Compose the artifact path the build tool writes for source_path."""
        source_abs = os.path.abspath(source_path)
        root = self.object_root_for(os.path.dirname(source_abs), platform)
        return os.path.join(root, os.path.basename(source_abs) + self.suffix)

    # -------------------------------------------------------------------------
    # Shared helpers
    # -------------------------------------------------------------------------

    def _require_platform(self, platform: str) -> None:
        if not platform or not platform.strip():
            raise BuildEnvironmentError("Platform identifier is not set.")
        if os.sep in platform or (os.altsep and os.altsep in platform):
            raise BuildEnvironmentError(f"Invalid platform identifier '{platform}'.")

    def _relative_to_root(self, path: str) -> str:
        rel = os.path.relpath(os.path.abspath(path), self.project_root)
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            raise BuildEnvironmentError(
                f"'{path}' is outside the project root '{self.project_root}'."
            )
        return rel

    def _strip_suffix(self, artifact_path: str) -> str:
        name = os.path.basename(artifact_path)
        if not name.endswith(self.suffix) or len(name) == len(self.suffix):
            raise LayoutError(f"'{artifact_path}' is not a '{self.suffix}' artifact.")
        return artifact_path[: -len(self.suffix)]
