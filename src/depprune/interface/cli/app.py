from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap,
configuration resolution, engine execution and result rendering. All
structural failures are turned into exit code 1 before anything is
deleted; per-artifact failures never change the exit code.
"""

import json
import os
import sys
from typing import List, Optional

from depprune.core.services.engine import run_prune
from depprune.domain.config import load_config
from depprune.domain.errors import BuildEnvironmentError, PreconditionError, UsageError
from depprune.domain.prune_models import PruneReport
from depprune.infra.logging import LoggingConfig, configure_logging, get_logger
from depprune.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, cwd: Optional[str] = None) -> int:
    """
    Execute the depprune CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        cwd: Working directory override. Defaults to os.getcwd().

    Returns:
        int: Process exit code (0 for success, 1 for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    try:
        args = parser.parse_args(argv)
        targets = cli_args.args_to_targets(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except SystemExit as e:
        # --help
        return int(e.code or 0)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    work_dir = os.path.abspath(cwd or os.getcwd())
    logger.debug(f"CLI execution initiated from '{work_dir}'.")

    # 3. Configuration resolution
    try:
        cfg, warnings = load_config(platform=args.platform, project_root=args.project_root)
    except BuildEnvironmentError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Engine execution phase (audit trail moves to stderr when stdout carries JSON)
    echo = _echo_stderr if args.json_output else print
    try:
        report = run_prune(cfg, args.mode, cwd=work_dir, targets=targets, echo=echo)
    except (BuildEnvironmentError, PreconditionError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("Interrupted. Re-run to finish pruning.", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.critical(f"Pruning failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(report)

    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _echo_stderr(message: str) -> None:
    print(message, file=sys.stderr)


def _print_human_summary(report: PruneReport) -> None:
    """Print the closing tally of a run."""
    if not report.searched and not report.unlinked:
        print("Nothing to do.")
        return

    line = f"{len(report.removed)} removed, {report.kept} kept"
    if report.failures:
        line += f", {len(report.failures)} failed"
    if report.unlinked:
        line += f", {len(report.unlinked)} dangling link(s) unlinked"
    print(line + ".")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
