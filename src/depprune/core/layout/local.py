from __future__ import annotations

"""
Per-Directory Object Layout.

Each source directory carries its own object directories, one per
platform, named with a fixed prefix:

    <root>/src/foo.C  ->  <root>/src/O.<platform>/foo.C.d
"""

import os
from typing import List

from depprune.core.layout.base import ObjectDirLayout
from depprune.domain import constants as const
from depprune.domain.config import PruneConfig
from depprune.domain.errors import BuildEnvironmentError, LayoutError


class LocalObjectDirLayout(ObjectDirLayout):
    """Layout with '<source dir>/<prefix><platform>' object directories."""

    name = const.LAYOUT_LOCAL

    def __init__(
            self,
            project_root: str,
            suffix: str = const.DEFAULT_ARTIFACT_SUFFIX,
            prefix: str = const.DEFAULT_OBJECT_DIR_PREFIX,
    ) -> None:
        super().__init__(project_root, suffix)
        self.prefix = prefix

    @classmethod
    def from_config(cls, cfg: PruneConfig) -> LocalObjectDirLayout:
        return cls(cfg.project_root, cfg.artifact_suffix, cfg.object_dir_prefix)

    def object_root_for(self, base_dir: str, platform: str) -> str:
        self._require_platform(platform)
        rel = self._relative_to_root(base_dir)
        if any(p.startswith(self.prefix) for p in rel.split(os.sep)):
            raise BuildEnvironmentError(
                f"'{base_dir}' is inside an object directory, not a source directory."
            )
        return os.path.join(os.path.abspath(base_dir), self.prefix + platform)

    def implied_source_for(self, artifact_path: str) -> str:
        rel = os.path.relpath(os.path.abspath(artifact_path), self.project_root)
        parts = rel.split(os.sep)
        if parts[0] == os.pardir:
            raise LayoutError(f"'{artifact_path}' is outside '{self.project_root}'.")

        # Last prefixed segment that is a directory, never the file name
        obj_index = -1
        for i, part in enumerate(parts[:-1]):
            if part.startswith(self.prefix):
                obj_index = i
        if obj_index < 0:
            raise LayoutError(f"'{artifact_path}' is not inside a '{self.prefix}*' directory.")

        source_rel = self._strip_suffix(os.path.join(*(parts[:obj_index] + parts[obj_index + 1:])))
        return os.path.join(self.project_root, source_rel)

    def sibling_roots_of(self, object_root: str) -> List[str]:
        object_root = os.path.abspath(object_root)
        if not os.path.basename(object_root).startswith(self.prefix):
            raise LayoutError(f"'{object_root}' is not a '{self.prefix}*' object directory.")
        parent = os.path.dirname(object_root)

        try:
            entries = os.listdir(parent)
        except FileNotFoundError:
            return []

        return [
            os.path.join(parent, e)
            for e in entries
            if e.startswith(self.prefix) and os.path.isdir(os.path.join(parent, e))
        ]

    def subtree_roots(self, base_dir: str, platform: str) -> List[str]:
        # Object directories are scattered through the source tree
        self._require_platform(platform)
        roots: List[str] = []
        for dirpath, dirs, _ in os.walk(os.path.abspath(base_dir)):
            dirs.sort()
            for d in [d for d in dirs if d.startswith(self.prefix)]:
                roots.append(os.path.join(dirpath, d))
            dirs[:] = [d for d in dirs if not d.startswith(self.prefix)]
        return roots
