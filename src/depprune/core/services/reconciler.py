from __future__ import annotations

"""
Artifact Reconciliation Service.

Applies the keep/remove policy to the artifacts yielded by the scanner.
Each artifact is mapped back to its implied source through the layout
before anything is deleted; artifacts the layout does not recognise are
never touched. Removal is best-effort: a failure on one artifact is
recorded and the batch continues.
"""

import logging
import os
from typing import Callable, Iterable, Optional

from depprune.core.layout import ObjectDirLayout
from depprune.core.services.scanner import find_artifacts, find_artifacts_referencing
from depprune.domain.errors import LayoutError
from depprune.domain.prune_models import PruneFailure, PruneRecord, PruneReport
from depprune.infra.fs import is_readable, safe_remove

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class Reconciler:
    """
    Removes dependency artifacts under object roots.

    Every action (root searched, artifact removed, artifact skipped,
    failure) is passed to `echo` as it happens, providing the audit trail
    printed by the CLI.
    """

    def __init__(self, layout: ObjectDirLayout, echo: Optional[Echo] = None) -> None:
        self.layout = layout
        self.suffix = layout.suffix
        self.echo: Echo = echo if echo is not None else _silent

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    def prune_all(self, root: str) -> PruneReport:
        """Remove every artifact under root."""
        report = PruneReport()
        if not self._enter(root, report):
            return report
        self._remove_each(find_artifacts(root, self.suffix), report)
        return report

    def prune_referencing(self, root: str, token: str) -> PruneReport:
        """Remove every artifact under root whose contents mention token."""
        report = PruneReport()
        if not self._enter(root, report, f" for '{token}'"):
            return report
        self._remove_each(find_artifacts_referencing(root, token, self.suffix), report)
        return report

    def prune_orphans(self, root: str) -> PruneReport:
        """Remove artifacts under root whose implied source is not readable."""
        report = PruneReport()
        if not self._enter(root, report, " for orphans"):
            return report

        for artifact in find_artifacts(root, self.suffix):
            source = self._implied_source(artifact, report)
            if source is None:
                continue
            if is_readable(source):
                report.kept += 1
                logger.debug(f"Keeping '{artifact}': source '{source}' present.")
                continue
            self._remove(artifact, source, report)

        return report

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _enter(self, root: str, report: PruneReport, purpose: str = "") -> bool:
        if not os.path.isdir(root):
            self.echo(f"Skipping {root}: no such directory")
            report.skipped_roots.append(root)
            return False
        self.echo(f"Searching {root}{purpose}")
        report.searched.append(root)
        return True

    def _remove_each(self, artifacts: Iterable[str], report: PruneReport) -> None:
        for artifact in artifacts:
            source = self._implied_source(artifact, report)
            if source is not None:
                self._remove(artifact, source, report)

    def _implied_source(self, artifact: str, report: PruneReport) -> Optional[str]:
        try:
            return self.layout.implied_source_for(artifact)
        except LayoutError as e:
            self.echo(f"Skipping {artifact}: not a recognised artifact")
            logger.debug(str(e))
            report.skipped_artifacts.append(artifact)
            return None

    def _remove(self, artifact: str, source: str, report: PruneReport) -> None:
        ok, err = safe_remove(artifact)
        if ok:
            self.echo(f"Removed {artifact} (source {source})")
            report.removed.append(PruneRecord(artifact=artifact, implied_source=source))
            return

        logger.warning(f"Failed to remove '{artifact}': {err}")
        self.echo(f"Failed to remove {artifact}: {err}")
        report.failures.append(PruneFailure(path=artifact, error=err or "unknown error"))


def _silent(_: str) -> None:
    return None
