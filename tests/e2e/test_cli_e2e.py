from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a separate process and validates exit
codes, stream output and filesystem side effects for each mode.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "depprune" / "main.py"

PLATFORM = "linux-gcc"


def run_cli(args: List[str], cwd: Path, env_extra: Optional[Dict[str, str]] = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding interpreter and script).
        cwd: Working directory for the subprocess.
        env_extra: Additional environment variables.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("DEPPRUNE_PLATFORM", None)
    env.pop("DEPPRUNE_ROOT", None)
    env.update(env_extra or {})

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Structure:
    /proj
      /src
        a.C
        foo.C -> (missing)
      /test
      /obj/linux-gcc/src
        a.C.d, b.C.d, foo.C.d
      /obj/win-msvc/src
        b.C.d
      /obj/linux-gcc/test
        t.C.d   (mentions foo.C)
    """
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "test").mkdir()
    (root / "src" / "a.C").write_text("int a;", encoding="utf-8")
    os.symlink(str(root / "vendor" / "foo.C"), str(root / "src" / "foo.C"))

    linux = root / "obj" / PLATFORM / "src"
    linux.mkdir(parents=True)
    (linux / "a.C.d").write_text("a.o: src/a.C\n", encoding="utf-8")
    (linux / "b.C.d").write_text("b.o: src/b.C\n", encoding="utf-8")
    (linux / "foo.C.d").write_text("foo.o: src/foo.C\n", encoding="utf-8")

    win = root / "obj" / "win-msvc" / "src"
    win.mkdir(parents=True)
    (win / "b.C.d").write_text("b.obj: src/b.C\n", encoding="utf-8")

    test_obj = root / "obj" / PLATFORM / "test"
    test_obj.mkdir(parents=True)
    (test_obj / "t.C.d").write_text("t.o: test/t.C src/foo.C\n", encoding="utf-8")
    return root


def _env(root: Path) -> Dict[str, str]:
    return {"DEPPRUNE_PLATFORM": PLATFORM, "DEPPRUNE_ROOT": str(root)}


def test_e2e_help() -> None:
    result = run_cli(["--help"], cwd=PROJECT_ROOT)
    assert result.returncode == 0
    assert "usage: depprune" in result.stdout


def test_e2e_unknown_flag(sample_project: Path) -> None:
    result = run_cli(["--nope"], cwd=sample_project, env_extra=_env(sample_project))
    assert result.returncode == 1
    assert "usage:" in result.stderr


def test_e2e_missing_environment(sample_project: Path) -> None:
    result = run_cli([], cwd=sample_project / "src")
    assert result.returncode == 1
    assert "DEPPRUNE_PLATFORM" in result.stderr
    assert (sample_project / "obj" / PLATFORM / "src" / "a.C.d").exists()


def test_e2e_orphans(sample_project: Path) -> None:
    result = run_cli(["-o"], cwd=sample_project / "src", env_extra=_env(sample_project))

    assert result.returncode == 0
    linux = sample_project / "obj" / PLATFORM / "src"
    assert (linux / "a.C.d").exists()
    assert not (linux / "b.C.d").exists()
    assert not (linux / "foo.C.d").exists()
    assert (sample_project / "obj" / "win-msvc" / "src" / "b.C.d").exists()
    assert "Removed" in result.stdout


def test_e2e_all_platforms_by_name(sample_project: Path) -> None:
    result = run_cli(["-a", "b.C"], cwd=sample_project / "src", env_extra=_env(sample_project))

    assert result.returncode == 0
    assert not (sample_project / "obj" / PLATFORM / "src" / "b.C.d").exists()
    assert not (sample_project / "obj" / "win-msvc" / "src" / "b.C.d").exists()
    assert (sample_project / "obj" / PLATFORM / "src" / "a.C.d").exists()


def test_e2e_link_sweep_requires_root(sample_project: Path) -> None:
    result = run_cli(["-u"], cwd=sample_project / "src", env_extra=_env(sample_project))

    assert result.returncode == 1
    assert os.path.islink(sample_project / "src" / "foo.C")
    assert (sample_project / "obj" / PLATFORM / "src" / "foo.C.d").exists()


def test_e2e_link_sweep(sample_project: Path) -> None:
    result = run_cli(["-u"], cwd=sample_project, env_extra=_env(sample_project))

    assert result.returncode == 0, result.stderr
    assert not os.path.lexists(sample_project / "src" / "foo.C")
    assert not (sample_project / "obj" / PLATFORM / "src" / "foo.C.d").exists()
    assert not (sample_project / "obj" / PLATFORM / "test" / "t.C.d").exists()
    assert (sample_project / "obj" / PLATFORM / "src" / "a.C.d").exists()
    assert "Unlinked" in result.stdout
