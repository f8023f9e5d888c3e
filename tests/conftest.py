"""Shared test fixtures for idegen."""

from __future__ import annotations

from pathlib import Path

import pytest

from idegen import IdeModuleBuilder, JarDependency, RunConfigBuilder
from idegen.config import reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep IDEGEN_* variables from the host out of every test."""
    for key in ("IDEGEN_IDES", "IDEGEN_VERBOSITY", "IDEGEN_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def proj_dir(tmp_path) -> Path:
    """Project root with a single source directory."""
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def libs_dir(tmp_path) -> Path:
    libs = tmp_path / "libs"
    libs.mkdir()
    return libs


@pytest.fixture
def example_module_builder(proj_dir, libs_dir) -> IdeModuleBuilder:
    """The canonical example: one source dir, one jar, one run config."""
    return (
        IdeModuleBuilder()
        .name("example")
        .root(proj_dir)
        .source_path(proj_dir / "src")
        .dependencies([JarDependency(libs_dir / "foo-1.0.jar")])
        .run_configs(
            RunConfigBuilder()
            .name("run")
            .main_class("com.example.Main")
            .cwd(proj_dir)
        )
    )
