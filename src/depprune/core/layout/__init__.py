from __future__ import annotations

from typing import Dict, Type

from depprune.domain.config import PruneConfig

from .base import ObjectDirLayout
from .local import LocalObjectDirLayout
from .shared import SharedTreeLayout

LAYOUTS: Dict[str, Type[ObjectDirLayout]] = {
    SharedTreeLayout.name: SharedTreeLayout,
    LocalObjectDirLayout.name: LocalObjectDirLayout,
}


def get_layout(cfg: PruneConfig) -> ObjectDirLayout:
    """Instantiate the layout strategy named in the configuration."""
    layout_cls = LAYOUTS.get(cfg.layout)
    if layout_cls is None:
        raise ValueError(f"Unknown layout '{cfg.layout}'. Known: {', '.join(sorted(LAYOUTS))}")
    return layout_cls.from_config(cfg)


__all__ = [
    "LAYOUTS",
    "ObjectDirLayout",
    "SharedTreeLayout",
    "LocalObjectDirLayout",
    "get_layout",
]
