from __future__ import annotations

"""
Shared Object Tree Layout.

All object directories live under one tree at the project root, split
first by platform and then mirroring the source tree:

    <root>/src/a/foo.C  ->  <root>/obj/<platform>/src/a/foo.C.d
"""

import logging
import os
from typing import List

from depprune.core.layout.base import ObjectDirLayout
from depprune.domain import constants as const
from depprune.domain.config import PruneConfig
from depprune.domain.errors import BuildEnvironmentError, LayoutError

logger = logging.getLogger(__name__)


class SharedTreeLayout(ObjectDirLayout):
    """Layout with a single '<root>/<obj>/<platform>/<subpath>' hierarchy."""

    name = const.LAYOUT_SHARED

    def __init__(
            self,
            project_root: str,
            suffix: str = const.DEFAULT_ARTIFACT_SUFFIX,
            object_dir_name: str = const.DEFAULT_OBJECT_DIR_NAME,
    ) -> None:
        super().__init__(project_root, suffix)
        self.object_dir_name = object_dir_name
        self.object_base = os.path.join(self.project_root, object_dir_name)

    @classmethod
    def from_config(cls, cfg: PruneConfig) -> SharedTreeLayout:
        return cls(cfg.project_root, cfg.artifact_suffix, cfg.object_dir_name)

    def object_root_for(self, base_dir: str, platform: str) -> str:
        self._require_platform(platform)
        rel = self._relative_to_root(base_dir)
        if rel == os.curdir:
            return os.path.join(self.object_base, platform)

        if rel.split(os.sep)[0] == self.object_dir_name:
            raise BuildEnvironmentError(
                f"'{base_dir}' is inside the object tree, not a source directory."
            )
        return os.path.join(self.object_base, platform, rel)

    def implied_source_for(self, artifact_path: str) -> str:
        rel = os.path.relpath(os.path.abspath(artifact_path), self.object_base)
        parts = rel.split(os.sep)
        if parts[0] == os.pardir or len(parts) < 2:
            raise LayoutError(f"'{artifact_path}' is not under '{self.object_base}/<platform>'.")

        source_rel = self._strip_suffix(os.path.join(*parts[1:]))
        return os.path.join(self.project_root, source_rel)

    def sibling_roots_of(self, object_root: str) -> List[str]:
        rel = os.path.relpath(os.path.abspath(object_root), self.object_base)
        parts = rel.split(os.sep)
        if parts[0] in (os.pardir, os.curdir):
            raise LayoutError(f"'{object_root}' is not a platform root under '{self.object_base}'.")
        subpath = parts[1:]

        try:
            entries = os.listdir(self.object_base)
        except FileNotFoundError:
            logger.debug(f"Object tree '{self.object_base}' does not exist.")
            return []

        siblings: List[str] = []
        for entry in entries:
            candidate = os.path.join(self.object_base, entry, *subpath)
            if os.path.isdir(candidate):
                siblings.append(candidate)
        return siblings
