"""IDE registry: the fixed set of backends and generation across them.

Backends are plain singletons listed here; there is no plugin discovery.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

from idegen.config import Settings, get_settings
from idegen.core.logging import GenerationLogger, Verbosity
from idegen.ides.base import Ide
from idegen.ides.netbeans import NETBEANS
from idegen.model import IdeModule
from idegen.project import IdeProject, resolve_project

logger = logging.getLogger(__name__)

_IDES: tuple[Ide, ...] = (NETBEANS,)


def get_ides() -> tuple[Ide, ...]:
    """Return every registered backend, in generation order."""
    return _IDES


def get_ide(name: str) -> Ide:
    """Get a backend by its ``ide_name()``."""
    for ide in _IDES:
        if ide.ide_name() == name:
            return ide
    available = [ide.ide_name() for ide in _IDES]
    raise ValueError(f"Unknown IDE: {name}. Available: {available}")


def update_projects(
    project_dir: Path,
    module: IdeModule | IdeProject,
    ides: Sequence[str] | None = None,
    settings: Settings | None = None,
    generation_logger: GenerationLogger | None = None,
) -> GenerationLogger:
    """Resolve ``module`` once and write it out with each selected backend.

    Args:
        project_dir: Root that each backend's directory is created under.
        module: A built module (resolved here) or an already resolved project.
        ides: Backend names; defaults to ``settings.ides``.
        settings: Defaults to the cached environment settings.
        generation_logger: Defaults to one configured from ``settings``.

    Returns:
        The generation logger, with its run log finalized.

    Raises:
        ValueError: for an unknown backend name, before anything is written.
    """
    settings = settings or get_settings()
    selected = [get_ide(name) for name in (ides if ides is not None else settings.ides)]
    if generation_logger is None:
        generation_logger = GenerationLogger(
            verbosity=Verbosity(settings.verbosity),
            log_dir=settings.log_dir,
        )

    project_dir = Path(project_dir)
    start = time.time()
    generation_logger.generation_start(module.name, [ide.ide_name() for ide in selected])

    try:
        project = module if isinstance(module, IdeProject) else resolve_project(module)
        for ide in selected:
            generation_logger.backend_start(ide.ide_name())
            try:
                ide.update_project(project_dir, project, generation_logger)
            except Exception as e:
                logger.error("%s generation failed for %s: %s", ide.ide_name(), project.name, e)
                generation_logger.backend_failed(ide.ide_name(), e)
                raise
            output_dir = ide.output_dir(project_dir, project)
            files_written = sum(1 for p in output_dir.rglob("*") if p.is_file())
            generation_logger.backend_finish(ide.ide_name(), output_dir, files_written)
    finally:
        generation_logger.generation_finish(time.time() - start)

    return generation_logger
