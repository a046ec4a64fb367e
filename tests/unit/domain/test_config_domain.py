from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies environment resolution, project file loading and the final
immutable configuration value.
"""

import dataclasses
import json
from pathlib import Path

import pytest

from depprune.domain import constants as const
from depprune.domain.config import (
    PruneConfig,
    get_default_config,
    load_config,
    load_project_settings,
    resolve_environment,
)
from depprune.domain.errors import BuildEnvironmentError


# -----------------------------------------------------------------------------
# ENVIRONMENT RESOLUTION
# -----------------------------------------------------------------------------

def test_resolve_from_environment(project: Path) -> None:
    env = {const.ENV_PLATFORM: "linux-gcc", const.ENV_PROJECT_ROOT: str(project)}
    assert resolve_environment(env) == ("linux-gcc", str(project))


def test_explicit_values_win(project: Path, tmp_path: Path) -> None:
    env = {const.ENV_PLATFORM: "linux-gcc", const.ENV_PROJECT_ROOT: str(tmp_path)}
    plat, root = resolve_environment(env, platform="macos", project_root=str(project))
    assert plat == "macos"
    assert root == str(project)


def test_missing_platform_raises(project: Path) -> None:
    with pytest.raises(BuildEnvironmentError, match=const.ENV_PLATFORM):
        resolve_environment({const.ENV_PROJECT_ROOT: str(project)})


def test_missing_root_raises() -> None:
    with pytest.raises(BuildEnvironmentError, match=const.ENV_PROJECT_ROOT):
        resolve_environment({const.ENV_PLATFORM: "p1"})


def test_root_must_be_directory(tmp_path: Path) -> None:
    f = tmp_path / "file"
    f.write_text("", encoding="utf-8")
    with pytest.raises(BuildEnvironmentError):
        resolve_environment({const.ENV_PLATFORM: "p1", const.ENV_PROJECT_ROOT: str(f)})


def test_reads_os_environ_by_default(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(const.ENV_PLATFORM, "from-env")
    monkeypatch.setenv(const.ENV_PROJECT_ROOT, str(project))
    assert resolve_environment() == ("from-env", str(project))


# -----------------------------------------------------------------------------
# PROJECT FILE
# -----------------------------------------------------------------------------

def test_project_file_absent(project: Path) -> None:
    assert load_project_settings(str(project)) == {}


def test_project_file_invalid_json(project: Path) -> None:
    (project / const.PROJECT_CONFIG_FILE).write_text("{not json", encoding="utf-8")
    with pytest.raises(BuildEnvironmentError):
        load_project_settings(str(project))


def test_project_file_must_be_object(project: Path) -> None:
    (project / const.PROJECT_CONFIG_FILE).write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(BuildEnvironmentError):
        load_project_settings(str(project))


# -----------------------------------------------------------------------------
# FULL LOAD
# -----------------------------------------------------------------------------

def test_load_config_defaults(project: Path) -> None:
    env = {const.ENV_PLATFORM: "p1", const.ENV_PROJECT_ROOT: str(project)}
    cfg, warnings = load_config(env)

    assert warnings == []
    assert cfg == PruneConfig(project_root=str(project), platform="p1")
    assert cfg.tracked_tree_paths() == [str(project / "src"), str(project / "test")]


def test_load_config_applies_project_file(project: Path) -> None:
    (project / const.PROJECT_CONFIG_FILE).write_text(json.dumps({
        "artifact_suffix": "dep",
        "tracked_trees": ["core", "tools"],
        "layout": "local",
        "unexpected": True,
    }), encoding="utf-8")
    env = {const.ENV_PLATFORM: "p1", const.ENV_PROJECT_ROOT: str(project)}

    cfg, warnings = load_config(env)

    assert cfg.artifact_suffix == ".dep"
    assert cfg.tracked_trees == ("core", "tools")
    assert cfg.layout == const.LAYOUT_LOCAL
    assert any("unexpected" in w for w in warnings)
    assert any("suffix" in w for w in warnings)


def test_config_is_immutable(cfg: PruneConfig) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.platform = "other"  # type: ignore[misc]


def test_default_config_lists_are_copies() -> None:
    first = get_default_config()
    first["source_extensions"].append(".zz")
    assert ".zz" not in get_default_config()["source_extensions"]
