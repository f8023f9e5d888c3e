"""Fluent builders for the project model.

Usage::

    module = (
        IdeModuleBuilder()
        .name("example")
        .root(Path("/proj"))
        .source_path(Path("/proj/src"))
        .dependencies(resolve_dependencies)  # deferred until first read
        .run_configs(
            RunConfigBuilder()
            .name("run")
            .main_class("com.example.Main")
            .cwd(Path("/proj/run"))
        )
        .build()
    )

Every deferred setter takes either a concrete sequence or a zero-argument
callable. A builder can also start from an already-built descriptor
(``from_module`` and friends) to derive a variant without touching the
original.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar, Union

from idegen.core.lazy import Lazy
from idegen.model import IdeModule, JarDependency, RunConfig, TestRunConfig, require_fields

T = TypeVar("T")

Deferred = Union[Sequence[T], Callable[[], list[T]]]


def _empty() -> list:
    return []


def _supplier(value: Deferred[T]) -> Callable[[], list[T]]:
    """Normalize a sequence-or-callable argument into a supplier."""
    if callable(value):
        return value
    captured = list(value)
    return lambda: captured


def _optional_path(value: Path | str | None) -> Path | None:
    """Convert to ``Path``, keeping unset and empty values unset."""
    if value is None or value == "":
        return None
    return Path(value)


class IdeModuleBuilder:
    """Assembles an ``IdeModule``."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._root: Path | None = None
        self._dependencies: Callable[[], list[JarDependency]] = _empty
        self._dependency_modules: tuple[IdeModule, ...] = ()
        self._run_configs: list[RunConfigBuilder] = []
        self._test_run_configs: list[TestRunConfigBuilder] = []
        self._source_paths: tuple[Path, ...] = ()
        self._resource_paths: tuple[Path, ...] = ()
        self._java_version: int = 8

    @classmethod
    def from_module(cls, basis: IdeModule) -> IdeModuleBuilder:
        """Create a builder pre-filled from an existing module.

        Useful when another piece of code already built the module and you
        want to extend it, e.g. add a run config or change the Java version.
        The existing ``Lazy`` values are shared, so anything already resolved
        is not resolved again.
        """
        builder = cls()
        builder._name = basis.name
        builder._root = basis.root
        builder._dependencies = basis.dependencies
        builder._dependency_modules = basis.dependency_modules
        builder._run_configs = [RunConfigBuilder.from_run_config(rc) for rc in basis.run_configs]
        builder._test_run_configs = [
            TestRunConfigBuilder.from_test_run_config(rc) for rc in basis.test_run_configs
        ]
        builder._source_paths = basis.source_paths
        builder._resource_paths = basis.resource_paths
        builder._java_version = basis.java_version
        return builder

    def name(self, name: str) -> IdeModuleBuilder:
        self._name = name
        return self

    def root(self, root: Path) -> IdeModuleBuilder:
        self._root = _optional_path(root)
        return self

    def dependencies(self, dependencies: Deferred[JarDependency]) -> IdeModuleBuilder:
        self._dependencies = _supplier(dependencies)
        return self

    def dependency_modules(self, *modules: IdeModule) -> IdeModuleBuilder:
        self._dependency_modules = tuple(modules)
        return self

    def run_configs(self, *run_configs: RunConfigBuilder) -> IdeModuleBuilder:
        self._run_configs = list(run_configs)
        return self

    def add_run_config(self, run_config: RunConfigBuilder) -> IdeModuleBuilder:
        self._run_configs.append(run_config)
        return self

    def test_run_configs(self, *test_run_configs: TestRunConfigBuilder) -> IdeModuleBuilder:
        self._test_run_configs = list(test_run_configs)
        return self

    def add_test_run_config(self, test_run_config: TestRunConfigBuilder) -> IdeModuleBuilder:
        self._test_run_configs.append(test_run_config)
        return self

    def source_paths(self, *paths: Path) -> IdeModuleBuilder:
        self._source_paths = tuple(Path(p) for p in paths)
        return self

    def source_path(self, path: Path) -> IdeModuleBuilder:
        """Set a single source path, replacing any others."""
        self._source_paths = (Path(path),)
        return self

    def resource_paths(self, *paths: Path) -> IdeModuleBuilder:
        self._resource_paths = tuple(Path(p) for p in paths)
        return self

    def java_version(self, java_version: int) -> IdeModuleBuilder:
        self._java_version = java_version
        return self

    def build(self) -> IdeModule:
        """Validate and build the module along with its run configs.

        Raises:
            MissingFieldError: if ``name`` or ``root`` is unset, or any run
                config builder is missing a required field.
        """
        require_fields("IdeModule", name=self._name, root=self._root)
        return IdeModule(
            name=self._name,
            root=self._root,
            dependencies=Lazy(self._dependencies),
            dependency_modules=self._dependency_modules,
            run_config_builders=tuple(self._run_configs),
            test_run_config_builders=tuple(self._test_run_configs),
            source_paths=self._source_paths,
            resource_paths=self._resource_paths,
            java_version=self._java_version,
        )


class RunConfigBuilder:
    """Assembles a ``RunConfig``; built by its owning ``IdeModuleBuilder``."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._main_class: str | None = None
        self._cwd: Path | None = None
        self._vm_args: Callable[[], list[str]] = _empty
        self._args: Callable[[], list[str]] = _empty
        self._classpath: Callable[[], list[Path]] = _empty
        self._additional_modules_classpath: tuple[IdeModule, ...] = ()
        self._resource_paths: tuple[Path, ...] = ()

    @classmethod
    def from_run_config(cls, basis: RunConfig) -> RunConfigBuilder:
        builder = cls()
        builder._name = basis.name
        builder._main_class = basis.main_class
        builder._cwd = basis.cwd
        builder._vm_args = basis.vm_args
        builder._args = basis.args
        builder._classpath = basis.classpath
        builder._additional_modules_classpath = basis.additional_modules_classpath
        builder._resource_paths = basis.resource_paths
        return builder

    def name(self, name: str) -> RunConfigBuilder:
        self._name = name
        return self

    def main_class(self, main_class: str) -> RunConfigBuilder:
        self._main_class = main_class
        return self

    def cwd(self, cwd: Path) -> RunConfigBuilder:
        self._cwd = _optional_path(cwd)
        return self

    def vm_args(self, vm_args: Deferred[str]) -> RunConfigBuilder:
        self._vm_args = _supplier(vm_args)
        return self

    def args(self, args: Deferred[str]) -> RunConfigBuilder:
        self._args = _supplier(args)
        return self

    def classpath(self, classpath: Deferred[Path]) -> RunConfigBuilder:
        self._classpath = _supplier(classpath)
        return self

    def additional_modules_classpath(self, *modules: IdeModule) -> RunConfigBuilder:
        self._additional_modules_classpath = tuple(modules)
        return self

    def resource_paths(self, *paths: Path) -> RunConfigBuilder:
        self._resource_paths = tuple(Path(p) for p in paths)
        return self

    def build(self, module: IdeModule) -> RunConfig:
        require_fields("RunConfig", name=self._name, main_class=self._main_class, cwd=self._cwd)
        return RunConfig(
            module=module,
            name=self._name,
            main_class=self._main_class,
            cwd=self._cwd,
            vm_args=Lazy(self._vm_args),
            args=Lazy(self._args),
            classpath=Lazy(self._classpath),
            additional_modules_classpath=self._additional_modules_classpath,
            resource_paths=self._resource_paths,
        )


class TestRunConfigBuilder:
    """Assembles a ``TestRunConfig``; built by its owning ``IdeModuleBuilder``."""

    __test__ = False

    def __init__(self) -> None:
        self._name: str | None = None
        self._test_package: str | None = None
        self._cwd: Path | None = None
        self._vm_args: Callable[[], list[str]] = _empty
        self._classpath: Callable[[], list[Path]] = _empty
        self._additional_modules_classpath: tuple[IdeModule, ...] = ()
        self._resource_paths: tuple[Path, ...] = ()

    @classmethod
    def from_test_run_config(cls, basis: TestRunConfig) -> TestRunConfigBuilder:
        builder = cls()
        builder._name = basis.name
        builder._test_package = basis.test_package
        builder._cwd = basis.cwd
        builder._vm_args = basis.vm_args
        builder._classpath = basis.classpath
        builder._additional_modules_classpath = basis.additional_modules_classpath
        builder._resource_paths = basis.resource_paths
        return builder

    def name(self, name: str) -> TestRunConfigBuilder:
        self._name = name
        return self

    def test_package(self, test_package: str) -> TestRunConfigBuilder:
        self._test_package = test_package
        return self

    def cwd(self, cwd: Path) -> TestRunConfigBuilder:
        self._cwd = _optional_path(cwd)
        return self

    def vm_args(self, vm_args: Deferred[str]) -> TestRunConfigBuilder:
        self._vm_args = _supplier(vm_args)
        return self

    def classpath(self, classpath: Deferred[Path]) -> TestRunConfigBuilder:
        self._classpath = _supplier(classpath)
        return self

    def additional_modules_classpath(self, *modules: IdeModule) -> TestRunConfigBuilder:
        self._additional_modules_classpath = tuple(modules)
        return self

    def resource_paths(self, *paths: Path) -> TestRunConfigBuilder:
        self._resource_paths = tuple(Path(p) for p in paths)
        return self

    def build(self, module: IdeModule) -> TestRunConfig:
        require_fields(
            "TestRunConfig", name=self._name, test_package=self._test_package, cwd=self._cwd
        )
        return TestRunConfig(
            module=module,
            name=self._name,
            test_package=self._test_package,
            cwd=self._cwd,
            vm_args=Lazy(self._vm_args),
            classpath=Lazy(self._classpath),
            additional_modules_classpath=self._additional_modules_classpath,
            resource_paths=self._resource_paths,
        )
