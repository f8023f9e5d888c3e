"""Base class for IDE backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from idegen.core.logging import GenerationLogger
    from idegen.project import IdeProject


class Ide(ABC):
    """An IDE backend.

    Each backend owns ``<project_dir>/<ide_name()>/`` and lays it out however
    its IDE expects. Backends never touch each other's directories.
    """

    @abstractmethod
    def ide_name(self) -> str:
        """Stable identifier used for registry lookup and the output directory."""
        ...

    @abstractmethod
    def update_project(
        self,
        project_dir: Path,
        project: IdeProject,
        generation_logger: GenerationLogger | None = None,
    ) -> None:
        """Write (or overwrite) this backend's project files for ``project``.

        Args:
            project_dir: Directory the backend's own subdirectory goes under.
            project: Resolved project view.
            generation_logger: Optional structured logger for run events.
        """
        ...

    def output_dir(self, project_dir: Path, project: IdeProject) -> Path:
        """Directory ``update_project`` publishes ``project`` into."""
        return Path(project_dir) / self.ide_name() / project.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.ide_name()!r})"
