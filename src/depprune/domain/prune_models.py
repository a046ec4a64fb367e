from __future__ import annotations

"""
Pruning Domain Data Models.

Defines the records exchanged between the reconciler, the link sweep
orchestrator and the interface layer to describe what a run did.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# RUN MODES
# -----------------------------------------------------------------------------

class PruneMode(Enum):
    """Selection policy applied by a run."""
    BULK = "bulk"
    BULK_ALL_PLATFORMS = "bulk-all-platforms"
    ORPHANS = "orphans"
    LINK_SWEEP = "link-sweep"

# -----------------------------------------------------------------------------
# ATOMIC RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PruneRecord:
    """
    A single removed dependency artifact.

    Attributes:
        artifact: Path of the deleted artifact.
        implied_source: Source path the artifact was derived from.
    """
    artifact: str
    implied_source: str


@dataclass(frozen=True)
class PruneFailure:
    """
    Encapsulates a removal that could not be carried out.

    Attributes:
        path: Artifact or link that survived.
        error: Descriptive exception message.
    """
    path: str
    error: str

# -----------------------------------------------------------------------------
# AGGREGATE REPORT
# -----------------------------------------------------------------------------

@dataclass
class PruneReport:
    """
    Running tally of a pruning session.

    Attributes:
        searched: Object roots that were walked.
        skipped_roots: Roots that did not exist.
        removed: Artifacts deleted, paired with their implied source.
        kept: Number of artifacts inspected and left in place.
        skipped_artifacts: Artifacts outside the layout convention.
        failures: Removals that raised.
        unlinked: Dangling symbolic links deleted by the link sweep.
    """
    searched: List[str] = field(default_factory=list)
    skipped_roots: List[str] = field(default_factory=list)
    removed: List[PruneRecord] = field(default_factory=list)
    kept: int = 0
    skipped_artifacts: List[str] = field(default_factory=list)
    failures: List[PruneFailure] = field(default_factory=list)
    unlinked: List[str] = field(default_factory=list)

    def merge(self, other: PruneReport) -> PruneReport:
        """Fold another report into this one and return self."""
        self.searched.extend(other.searched)
        self.skipped_roots.extend(other.skipped_roots)
        self.removed.extend(other.removed)
        self.kept += other.kept
        self.skipped_artifacts.extend(other.skipped_artifacts)
        self.failures.extend(other.failures)
        self.unlinked.extend(other.unlinked)
        return self

    @property
    def removed_paths(self) -> List[str]:
        return [r.artifact for r in self.removed]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["summary"] = {
            "searched": len(self.searched),
            "removed": len(self.removed),
            "kept": self.kept,
            "failed": len(self.failures),
            "unlinked": len(self.unlinked),
        }
        return data
