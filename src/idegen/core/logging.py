"""Structured logging and verbosity levels for idegen project generation."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Nothing but failures
    VERBOSE = 1   # + per-backend progress
    DEBUG = 2     # + file reference details


@dataclass
class BackendLog:
    """Per-backend generation statistics."""

    name: str
    output_dir: str = ""
    files_written: int = 0
    collisions: list[str] = field(default_factory=list)
    time_seconds: float = 0.0
    failed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "output_dir": self.output_dir,
            "files_written": self.files_written,
            "collisions": list(self.collisions),
            "time_seconds": self.time_seconds,
            "failed": self.failed,
        }


@dataclass
class GenerationLog:
    """Structured log of one generation run across backends.

    The dict format is::

        {
            "run_id": "20240315T101500Z",
            "project": "example",
            "backends": {
                "netbeans": {
                    "output_dir": "/proj/netbeans/example",
                    "files_written": 6,
                    "collisions": [],
                    "time_seconds": 0.01,
                    "failed": False,
                },
            },
            "total_time": 0.02,
            "total_collisions": 0,
        }
    """

    run_id: str = ""
    project: str = ""
    backends: dict[str, BackendLog] = field(default_factory=dict)
    total_time: float = 0.0
    total_collisions: int = 0

    def get_or_create_backend(self, name: str) -> BackendLog:
        """Get existing backend log or create a new one."""
        if name not in self.backends:
            self.backends[name] = BackendLog(name=name)
        return self.backends[name]

    def finalize(self) -> None:
        self.total_collisions = sum(len(b.collisions) for b in self.backends.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "project": self.project,
            "backends": {name: b.to_dict() for name, b in self.backends.items()},
            "total_time": self.total_time,
            "total_collisions": self.total_collisions,
        }


class GenerationLogger:
    """Structured logger for project generation runs.

    Writes JSONL event files to ``log_dir`` (when given) and emits console
    output via Rich based on verbosity level.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self.console = console or Console(stderr=True)
        self.generation_log = GenerationLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._log_file = None
        self._log_path: Path | None = None
        self._current_backend: str | None = None
        self._backend_start: float = 0.0

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = log_dir / f"{self.generation_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            self.console.print(message)

    # -- Run lifecycle --

    def generation_start(self, project_name: str, ide_names: list[str]) -> None:
        """Log the start of a generation run."""
        self.generation_log.project = project_name
        self._write_event({
            "event": "generation_start",
            "project": project_name,
            "ides": list(ide_names),
        })
        self._console_print(
            f"[bold]Generating IDE projects for[/bold] {project_name} ({', '.join(ide_names)})",
            Verbosity.VERBOSE,
        )

    def generation_finish(self, total_time: float) -> None:
        """Log the end of a generation run and finalize stats."""
        self.generation_log.total_time = total_time
        self.generation_log.finalize()
        self._write_event({
            "event": "generation_finish",
            "total_time": round(total_time, 3),
            "total_collisions": self.generation_log.total_collisions,
        })
        self.close()

    # -- Backend events --

    def backend_start(self, ide_name: str) -> None:
        self._current_backend = ide_name
        self._backend_start = time.time()
        self.generation_log.get_or_create_backend(ide_name)
        self._write_event({"event": "backend_start", "ide": ide_name})
        self._console_print(f"  [bold]Writing[/bold] {ide_name} project", Verbosity.VERBOSE)

    def backend_finish(self, ide_name: str, output_dir: Path, files_written: int) -> None:
        elapsed = time.time() - self._backend_start
        backend = self.generation_log.get_or_create_backend(ide_name)
        backend.output_dir = str(output_dir)
        backend.files_written = files_written
        backend.time_seconds = elapsed
        self._write_event({
            "event": "backend_finish",
            "ide": ide_name,
            "output_dir": str(output_dir),
            "files_written": files_written,
            "time_seconds": round(elapsed, 3),
        })
        self._console_print(
            f"    [green]+[/green] {output_dir} ({files_written} files, {elapsed:.2f}s)",
            Verbosity.VERBOSE,
        )
        self._current_backend = None

    def backend_failed(self, ide_name: str, error: BaseException) -> None:
        backend = self.generation_log.get_or_create_backend(ide_name)
        backend.failed = True
        backend.time_seconds = time.time() - self._backend_start
        self._write_event({
            "event": "backend_failed",
            "ide": ide_name,
            "error": f"{type(error).__name__}: {error}",
        })
        self._console_print(
            f"    [red]x[/red] {ide_name}: {error}",
            Verbosity.DEFAULT,
        )
        self._current_backend = None

    def file_reference_collision(self, file_name: str, existing: str, path: str, key: str) -> None:
        """Log that two distinct jars share a file name."""
        backend = self.generation_log.get_or_create_backend(self._current_backend or "unknown")
        backend.collisions.append(key)
        self._write_event({
            "event": "file_reference_collision",
            "ide": backend.name,
            "file_name": file_name,
            "existing_path": existing,
            "path": path,
            "property": key,
        })
        self._console_print(
            f"      [yellow]![/yellow] duplicate jar name {file_name}: {path} -> {key}",
            Verbosity.DEBUG,
        )

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
