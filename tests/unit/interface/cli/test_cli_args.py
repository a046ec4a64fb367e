from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mode selection and mutual exclusion.
2. Positional argument validation per mode.
3. Parse errors surface as UsageError rather than SystemExit.
"""

import pytest

from depprune.domain.errors import UsageError
from depprune.domain.prune_models import PruneMode
from depprune.interface.cli.args import args_to_targets, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


@pytest.mark.parametrize("argv, mode", [
    ([], PruneMode.BULK),
    (["-a"], PruneMode.BULK_ALL_PLATFORMS),
    (["--all-platforms"], PruneMode.BULK_ALL_PLATFORMS),
    (["-o"], PruneMode.ORPHANS),
    (["--orphans", "src"], PruneMode.ORPHANS),
    (["-u"], PruneMode.LINK_SWEEP),
    (["--update-links"], PruneMode.LINK_SWEEP),
])
def test_mode_selection(argv, mode):
    assert parse_args(argv).mode is mode


def test_modes_are_mutually_exclusive():
    with pytest.raises(UsageError):
        parse_args(["-a", "-o"])


def test_unknown_flag_raises_usage_error():
    with pytest.raises(UsageError):
        parse_args(["--frobnicate"])


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["-h"])
    assert exc.value.code == 0
    assert "usage: depprune" in capsys.readouterr().out


def test_environment_overrides_and_flags():
    args = parse_args(["--platform", "p1", "--root", "/proj", "--json", "--debug", "--log-file", "x.log"])
    assert args.platform == "p1"
    assert args.project_root == "/proj"
    assert args.json_output is True
    assert args.debug is True
    assert args.log_file == "x.log"


def test_bulk_accepts_single_filename():
    assert args_to_targets(parse_args(["foo.C"])) == ["foo.C"]
    assert args_to_targets(parse_args(["-a", "foo.C"])) == ["foo.C"]


def test_bulk_rejects_multiple_filenames():
    with pytest.raises(UsageError):
        args_to_targets(parse_args(["a.C", "b.C"]))


def test_orphans_accepts_many_dirs():
    assert args_to_targets(parse_args(["-o", "src", "test", "lib"])) == ["src", "test", "lib"]


def test_orphans_default_is_empty():
    assert args_to_targets(parse_args(["-o"])) == []


def test_link_sweep_rejects_arguments():
    with pytest.raises(UsageError):
        args_to_targets(parse_args(["-u", "src"]))
