"""Project model: immutable descriptors handed to IDE backends.

Descriptors are produced by the builders in ``idegen.builders`` and never
change afterwards: collections are tuples and expensive values (resolved
dependencies, classpaths, arguments) are ``Lazy`` so they are computed at
most once, after the whole build graph has been assembled.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import InitVar, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from idegen.core.errors import MissingFieldError
from idegen.core.lazy import Lazy

if TYPE_CHECKING:
    from idegen.builders import RunConfigBuilder, TestRunConfigBuilder


def require_fields(descriptor: str, **fields: object) -> None:
    """Raise ``MissingFieldError`` for the first field that is unset or empty."""
    for field_name, value in fields.items():
        if value is None or value == "":
            raise MissingFieldError(descriptor, field_name)


@dataclass(frozen=True)
class JarDependency:
    """A resolved jar on disk, optionally with its sources jar."""

    jar: Path
    sources_jar: Path | None = None


@dataclass(frozen=True, eq=False)
class IdeModule:
    """One buildable unit as seen by an IDE.

    Run and test-run configurations are built from the given builders while
    the module is constructed, each with this module as its owner.
    """

    name: str
    root: Path
    dependencies: Lazy[list[JarDependency]]
    dependency_modules: tuple[IdeModule, ...] = ()
    run_config_builders: InitVar[Sequence[RunConfigBuilder]] = ()
    test_run_config_builders: InitVar[Sequence[TestRunConfigBuilder]] = ()
    source_paths: tuple[Path, ...] = ()
    resource_paths: tuple[Path, ...] = ()
    java_version: int = 8
    run_configs: tuple[RunConfig, ...] = field(init=False, default=())
    test_run_configs: tuple[TestRunConfig, ...] = field(init=False, default=())

    def __post_init__(self, run_config_builders, test_run_config_builders) -> None:
        require_fields("IdeModule", name=self.name, root=self.root)
        object.__setattr__(
            self, "run_configs", tuple(b.build(self) for b in run_config_builders)
        )
        object.__setattr__(
            self, "test_run_configs", tuple(b.build(self) for b in test_run_config_builders)
        )


@dataclass(frozen=True, eq=False)
class RunConfig:
    """Launch configuration for a main class, owned by exactly one module."""

    module: IdeModule = field(repr=False)
    name: str
    main_class: str
    cwd: Path  # must exist when the IDE uses it; see resolve_project()
    vm_args: Lazy[list[str]]
    args: Lazy[list[str]]
    classpath: Lazy[list[Path]]
    additional_modules_classpath: tuple[IdeModule, ...] = ()
    resource_paths: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        require_fields("RunConfig", name=self.name, main_class=self.main_class, cwd=self.cwd)


@dataclass(frozen=True, eq=False)
class TestRunConfig:
    """Launch configuration for a test package, owned by exactly one module."""

    __test__ = False  # not a pytest test class

    module: IdeModule = field(repr=False)
    name: str
    test_package: str
    cwd: Path
    vm_args: Lazy[list[str]]
    classpath: Lazy[list[Path]]
    additional_modules_classpath: tuple[IdeModule, ...] = ()
    resource_paths: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        require_fields(
            "TestRunConfig", name=self.name, test_package=self.test_package, cwd=self.cwd
        )
