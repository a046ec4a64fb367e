from __future__ import annotations

"""
Dangling Link Sweep Orchestrator.

Project-wide cleanup after source files reached through symbolic links
disappear. The sweep runs in two phases:

1. Discover: collect every dangling link with a tracked source extension
   in the tracked trees. The list is complete before anything changes.
2. Reconcile and unlink: for each link, remove all artifacts (every
   platform, every tracked tree) mentioning the link's file name, then
   delete the link itself.

The link is unlinked last so that an aborted run leaves it in place for
the next attempt.
"""

import logging
import os
from typing import List

from depprune.core.layout import ObjectDirLayout
from depprune.core.services.reconciler import Reconciler
from depprune.core.services.scanner import find_dangling_links
from depprune.domain.config import PruneConfig
from depprune.domain.errors import PreconditionError
from depprune.domain.prune_models import PruneFailure, PruneReport
from depprune.infra.fs import safe_remove, same_directory

logger = logging.getLogger(__name__)


class LinkSweeper:
    """Orchestrates dangling-link discovery and cascading artifact removal."""

    def __init__(self, cfg: PruneConfig, layout: ObjectDirLayout, reconciler: Reconciler) -> None:
        self.cfg = cfg
        self.layout = layout
        self.reconciler = reconciler

    def check_precondition(self, cwd: str) -> None:
        """
        Raises:
            PreconditionError: If cwd is not the configured project root.
        """
        if not same_directory(cwd, self.cfg.project_root):
            raise PreconditionError(
                f"Link sweep must run from the project root '{self.cfg.project_root}' "
                f"(current directory: '{cwd}')."
            )

    def find_dangling_links(self) -> List[str]:
        links: List[str] = []
        for tree in self.cfg.tracked_tree_paths():
            found = find_dangling_links(tree, list(self.cfg.source_extensions))
            logger.debug(f"{len(found)} dangling link(s) under '{tree}'.")
            links.extend(found)
        return links

    def object_roots_for_tree(self, tree: str) -> List[str]:
        """All existing platform roots holding artifacts for a tracked tree."""
        return self.layout.subtree_roots(tree, self.cfg.platform)

    def run(self, cwd: str) -> PruneReport:
        """
        Execute both sweep phases.

        Args:
            cwd: Current working directory of the caller.

        Returns:
            PruneReport: Aggregated artifact removals and unlinked links.
        """
        self.check_precondition(cwd)

        report = PruneReport()
        links = self.find_dangling_links()
        if not links:
            self.reconciler.echo("No dangling links found.")
            return report

        # Map every tree before the first removal
        tree_roots = [(tree, self.object_roots_for_tree(tree)) for tree in self.cfg.tracked_tree_paths()]

        for link in links:
            name = os.path.basename(link)
            self.reconciler.echo(f"Dangling link {link}")

            for tree, roots in tree_roots:
                if not roots:
                    self.reconciler.echo(f"Skipping {tree}: no object directories")
                for root in roots:
                    report.merge(self.reconciler.prune_referencing(root, name))

            ok, err = safe_remove(link)
            if ok:
                self.reconciler.echo(f"Unlinked {link}")
                report.unlinked.append(link)
            else:
                logger.warning(f"Failed to unlink '{link}': {err}")
                self.reconciler.echo(f"Failed to unlink {link}: {err}")
                report.failures.append(PruneFailure(path=link, error=err or "unknown error"))

        return report
