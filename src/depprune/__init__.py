from __future__ import annotations

"""
depprune: stale dependency-artifact pruning for per-platform object trees.
"""

__version__ = "0.1.0"
