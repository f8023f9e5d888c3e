"""idegen - project IDE files from a declarative build description.

Usage:
    from idegen import IdeModuleBuilder, RunConfigBuilder, JarDependency, update_projects

    module = (
        IdeModuleBuilder()
        .name("example")
        .root(Path("/proj"))
        .source_path(Path("/proj/src"))
        .dependencies(lambda: [JarDependency(Path("/libs/foo-1.0.jar"))])
        .run_configs(
            RunConfigBuilder().name("run").main_class("com.example.Main").cwd(Path("/proj"))
        )
        .build()
    )
    update_projects(Path("/proj"), module)
"""

from idegen.builders import IdeModuleBuilder, RunConfigBuilder, TestRunConfigBuilder
from idegen.core.errors import IdegenError, MissingFieldError, UnsupportedConfigurationError
from idegen.core.lazy import Lazy
from idegen.ides import Ide, get_ide, get_ides, update_projects
from idegen.model import IdeModule, JarDependency, RunConfig, TestRunConfig
from idegen.project import IdeProject, resolve_project

__all__ = [
    "Ide",
    "IdeModule",
    "IdeModuleBuilder",
    "IdeProject",
    "IdegenError",
    "JarDependency",
    "Lazy",
    "MissingFieldError",
    "RunConfig",
    "RunConfigBuilder",
    "TestRunConfig",
    "TestRunConfigBuilder",
    "UnsupportedConfigurationError",
    "get_ide",
    "get_ides",
    "resolve_project",
    "update_projects",
]

__version__ = "0.1.0"
