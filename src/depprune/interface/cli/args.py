from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
a pruning mode plus its validated targets. Parse errors are raised as
UsageError instead of exiting, so the application controls exit codes.
"""

import argparse
from typing import List, NoReturn

from depprune.domain import constants as const
from depprune.domain.errors import UsageError
from depprune.domain.prune_models import PruneMode

# -----------------------------------------------------------------------------
# PARSER
# -----------------------------------------------------------------------------

class CliParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as UsageError."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> CliParser:
    """
    Construct the argument parser for the depprune CLI.

    Returns:
        CliParser: Configured parser instance.
    """
    p = CliParser(
        prog="depprune",
        description=(
            "Remove stale dependency files (*.d) from the build's object "
            "directories. Without a mode flag, removes the dependency files "
            "of the current directory for the current platform, optionally "
            "only those mentioning FILE."
        ),
    )

    # --- Mode Selection ---
    modes = p.add_mutually_exclusive_group()
    modes.add_argument(
        "-a", "--all-platforms",
        dest="mode",
        action="store_const",
        const=PruneMode.BULK_ALL_PLATFORMS,
        help="Like the default mode, but for every platform's object directory.",
    )
    modes.add_argument(
        "-o", "--orphans",
        dest="mode",
        action="store_const",
        const=PruneMode.ORPHANS,
        help="Remove dependency files whose source no longer exists in DIR... "
             "(default: current directory).",
    )
    modes.add_argument(
        "-u", "--update-links",
        dest="mode",
        action="store_const",
        const=PruneMode.LINK_SWEEP,
        help="Find dangling source symlinks project-wide, remove every dependency "
             "file mentioning them, then remove the links. Run from the project root.",
    )
    p.set_defaults(mode=PruneMode.BULK)

    p.add_argument(
        "paths",
        nargs="*",
        metavar="FILE|DIR",
        help="Source file name filter (bulk modes) or source directories (--orphans).",
    )

    # --- Environment Overrides ---
    p.add_argument(
        "--platform",
        default=None,
        help=f"Platform/options identifier (default: ${const.ENV_PLATFORM}).",
    )
    p.add_argument(
        "--root",
        dest="project_root",
        default=None,
        help=f"Project root directory (default: ${const.ENV_PROJECT_ROOT}).",
    )

    # --- Output and Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the final report as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to a rotating log file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_targets(args: argparse.Namespace) -> List[str]:
    """
    Validate positional arguments against the selected mode.

    Args:
        args: Parsed command-line arguments.

    Returns:
        List[str]: Targets for the engine.

    Raises:
        UsageError: If the positional arguments do not fit the mode.
    """
    paths: List[str] = [p for p in args.paths if p.strip()]
    mode: PruneMode = args.mode

    if mode is PruneMode.LINK_SWEEP and paths:
        raise UsageError("--update-links takes no arguments.")

    if mode in (PruneMode.BULK, PruneMode.BULK_ALL_PLATFORMS):
        if len(paths) > 1:
            raise UsageError("at most one source file name may be given.")

    return paths
