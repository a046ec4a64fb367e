from __future__ import annotations

"""
Pruning Engine.

Entry point of the core: turns a selected mode plus its targets into
object roots and drives the reconciler (or the link sweep) over them.
Structural errors (unset platform, directory outside the project)
propagate before any artifact is touched.
"""

import logging
import os
from typing import List, Optional, Sequence

from depprune.core.layout import ObjectDirLayout, get_layout
from depprune.core.services.reconciler import Echo, Reconciler
from depprune.core.services.sweep import LinkSweeper
from depprune.domain.config import PruneConfig
from depprune.domain.prune_models import PruneMode, PruneReport
from depprune.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_prune(
        cfg: PruneConfig,
        mode: PruneMode,
        *,
        cwd: Optional[str] = None,
        targets: Sequence[str] = (),
        echo: Optional[Echo] = None,
) -> PruneReport:
    """
    Execute one pruning run.

    Args:
        cfg: Resolved run configuration.
        mode: Selection policy.
        cwd: Working directory the run is scoped to. Defaults to os.getcwd().
        targets: File-name filter (bulk modes, at most one) or source
                 directories (orphan mode).
        echo: Receiver of the per-action audit trail.

    Returns:
        PruneReport: What was searched, removed, skipped and failed.

    Raises:
        BuildEnvironmentError: If cwd or a target cannot be mapped to an
            object root.
        PreconditionError: If the link sweep runs outside the project root.
    """
    work_dir = os.path.abspath(cwd or os.getcwd())
    layout = get_layout(cfg)
    reconciler = Reconciler(layout, echo=echo)

    logger.debug(f"Mode '{mode.value}' on platform '{cfg.platform}' from '{work_dir}'.")

    if mode is PruneMode.LINK_SWEEP:
        return LinkSweeper(cfg, layout, reconciler).run(work_dir)

    if mode is PruneMode.ORPHANS:
        return prune_orphan_dirs(cfg, layout, reconciler, list(targets) or [work_dir], base_dir=work_dir)

    token = targets[0] if targets else None
    return prune_bulk(
        cfg, layout, reconciler, work_dir,
        token=token,
        all_platforms=mode is PruneMode.BULK_ALL_PLATFORMS,
    )


def prune_bulk(
        cfg: PruneConfig,
        layout: ObjectDirLayout,
        reconciler: Reconciler,
        base_dir: str,
        *,
        token: Optional[str] = None,
        all_platforms: bool = False,
) -> PruneReport:
    """
    Remove all (or token-filtered) artifacts for base_dir.

    With all_platforms, every sibling platform root sharing base_dir's
    subpath is processed in turn.
    """
    root = layout.object_root_for(base_dir, cfg.platform)
    roots: List[str] = layout.sibling_roots_of(root) if all_platforms else [root]

    report = PruneReport()
    if not roots:
        reconciler.echo(f"Skipping {root}: no object directories on any platform")
        report.skipped_roots.append(root)
        return report

    for r in roots:
        if token:
            report.merge(reconciler.prune_referencing(r, token))
        else:
            report.merge(reconciler.prune_all(r))
    return report


def prune_orphan_dirs(
        cfg: PruneConfig,
        layout: ObjectDirLayout,
        reconciler: Reconciler,
        source_dirs: Sequence[str],
        *,
        base_dir: Optional[str] = None,
) -> PruneReport:
    """
    Remove orphaned artifacts from the object root of each source directory.

    Relative directories are taken from base_dir (default: os.getcwd()).
    Every directory is mapped before the first artifact is removed, so an
    unmappable argument aborts the run with nothing deleted.
    """
    base = os.path.abspath(base_dir or os.getcwd())
    report = PruneReport()

    roots: List[str] = []
    for raw in source_dirs:
        source_dir = normalize_path(raw, fallback=base, base=base)
        if not os.path.isdir(source_dir):
            reconciler.echo(f"Skipping {source_dir}: no such directory")
            report.skipped_roots.append(source_dir)
            continue
        roots.append(layout.object_root_for(source_dir, cfg.platform))

    for root in roots:
        report.merge(reconciler.prune_orphans(root))
    return report
