from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A throwaway project tree with source and object directories.
3. Logging teardown so queue listeners never outlive a test.
"""

import os
import sys
from pathlib import Path
from typing import Iterable, Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from depprune.core.layout import ObjectDirLayout, SharedTreeLayout  # noqa: E402
from depprune.domain import constants as const  # noqa: E402
from depprune.domain.config import PruneConfig  # noqa: E402
from depprune.infra.logging import shutdown_logging  # noqa: E402

PLATFORM = "linux-gcc"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def write_artifact(
        layout: ObjectDirLayout,
        source: Path,
        platform: str = PLATFORM,
        deps: Iterable[str] = (),
) -> Path:
    """
    Write the dependency file the build would produce for source.

    The content mimics a make-style rule: the object target, the source
    itself, then every listed include.
    """
    artifact = Path(layout.artifact_path_for(str(source), platform))
    artifact.parent.mkdir(parents=True, exist_ok=True)
    prerequisites = " ".join([str(source)] + list(deps))
    artifact.write_text(f"{source.stem}.o: {prerequisites}\n", encoding="utf-8")
    return artifact


def write_source(path: Path, text: str = "int x;\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Detach depprune handlers after every test."""
    yield
    shutdown_logging()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    Create an empty project root with both tracked trees.

    Structure:
    /project
      /src
      /test
    """
    root = tmp_path / "project"
    for tree in const.DEFAULT_TRACKED_TREES:
        (root / tree).mkdir(parents=True)
    return root


@pytest.fixture
def cfg(project: Path) -> PruneConfig:
    return PruneConfig(project_root=str(project), platform=PLATFORM)


@pytest.fixture
def layout(cfg: PruneConfig) -> SharedTreeLayout:
    return SharedTreeLayout(cfg.project_root, cfg.artifact_suffix, cfg.object_dir_name)
