"""Resolved project view: what IDE backends actually consume.

``resolve_project`` forces every deferred value of a module once and
flattens the result into plain tuples, so backends never trigger dependency
resolution themselves and all backends see the same data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from idegen.core.fs import ensure_dir
from idegen.model import IdeModule, JarDependency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRunConfig:
    """A run config with its arguments and classpath evaluated."""

    name: str
    main_class: str
    cwd: Path
    vm_args: tuple[str, ...] = ()
    args: tuple[str, ...] = ()
    classpath: tuple[Path, ...] = ()
    resource_paths: tuple[Path, ...] = ()


@dataclass(frozen=True)
class ResolvedTestRunConfig:
    """A test run config with its arguments and classpath evaluated."""

    name: str
    test_package: str
    cwd: Path
    vm_args: tuple[str, ...] = ()
    classpath: tuple[Path, ...] = ()
    resource_paths: tuple[Path, ...] = ()


@dataclass(frozen=True)
class IdeProject:
    """Fully resolved view of one module."""

    name: str
    dependencies: tuple[JarDependency, ...] = ()
    run_configs: tuple[ResolvedRunConfig, ...] = ()
    test_run_configs: tuple[ResolvedTestRunConfig, ...] = ()
    source_paths: tuple[Path, ...] = ()
    resource_paths: tuple[Path, ...] = ()
    java_version: int = 8


def resolve_project(module: IdeModule) -> IdeProject:
    """Evaluate a module's deferred values into an ``IdeProject``.

    Run and test working directories are created if missing, since IDEs
    refuse to launch in a directory that does not exist.
    """
    dependencies = tuple(module.dependencies.get())
    logger.debug("Resolved %d dependencies for %s", len(dependencies), module.name)

    run_configs = []
    for rc in module.run_configs:
        ensure_dir(rc.cwd)
        run_configs.append(
            ResolvedRunConfig(
                name=rc.name,
                main_class=rc.main_class,
                cwd=rc.cwd,
                vm_args=tuple(rc.vm_args.get()),
                args=tuple(rc.args.get()),
                classpath=tuple(Path(p) for p in rc.classpath.get()),
                resource_paths=rc.resource_paths,
            )
        )

    test_run_configs = []
    for trc in module.test_run_configs:
        ensure_dir(trc.cwd)
        test_run_configs.append(
            ResolvedTestRunConfig(
                name=trc.name,
                test_package=trc.test_package,
                cwd=trc.cwd,
                vm_args=tuple(trc.vm_args.get()),
                classpath=tuple(Path(p) for p in trc.classpath.get()),
                resource_paths=trc.resource_paths,
            )
        )

    return IdeProject(
        name=module.name,
        dependencies=dependencies,
        run_configs=tuple(run_configs),
        test_run_configs=tuple(test_run_configs),
        source_paths=module.source_paths,
        resource_paths=module.resource_paths,
        java_version=module.java_version,
    )
