from __future__ import annotations

"""
Domain Constants.

Centralizes the build-system naming conventions the pruner relies on:
artifact suffix, tracked source extensions, tracked project trees and
the environment variables consulted by the configuration resolver.
"""

from typing import List

DEFAULT_ARTIFACT_SUFFIX = ".d"

# C/C++ sources plus lexer and parser generator inputs. Headers are not
# compiled on their own; add them in depprune.json to sweep header links.
DEFAULT_SOURCE_EXTENSIONS: List[str] = [
    ".C", ".c", ".cc", ".cpp", ".cxx",
    ".l", ".y", ".ll", ".yy",
]

DEFAULT_TRACKED_TREES: List[str] = ["src", "test"]

# -----------------------------------------------------------------------------
# OBJECT DIRECTORY LAYOUTS
# -----------------------------------------------------------------------------
LAYOUT_SHARED = "shared"
LAYOUT_LOCAL = "local"
DEFAULT_LAYOUT = LAYOUT_SHARED

DEFAULT_OBJECT_DIR_NAME = "obj"
DEFAULT_OBJECT_DIR_PREFIX = "O."

# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
ENV_PLATFORM = "DEPPRUNE_PLATFORM"
ENV_PROJECT_ROOT = "DEPPRUNE_ROOT"

PROJECT_CONFIG_FILE = "depprune.json"
