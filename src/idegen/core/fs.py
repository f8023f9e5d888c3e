"""Filesystem helpers: staged, all-or-nothing directory publication."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def delete_directory_children(path: Path, keep: Iterable[str] = ()) -> list[Path]:
    """Remove every entry of ``path`` except names in ``keep``.

    Returns the removed paths. A missing directory is a no-op.
    """
    if not path.is_dir():
        return []
    keep_names = set(keep)
    removed: list[Path] = []
    for child in sorted(path.iterdir()):
        if child.name in keep_names:
            continue
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
        removed.append(child)
    return removed


class AtomicDirectory:
    """Stage a directory's contents and publish them in a single rename.

    Usage::

        with AtomicDirectory(target) as d:
            (d.temp_path / "file.txt").write_text("...")
            d.commit()

    The staging directory lives next to ``target`` so the final rename stays
    on one filesystem. Leaving the block without ``commit()`` (normally or via
    an exception) deletes the staging directory and leaves ``target`` exactly
    as it was.
    """

    def __init__(self, target: Path):
        self.target = Path(target)
        self.temp_path: Path | None = None
        self.committed = False

    def __enter__(self) -> AtomicDirectory:
        parent = ensure_dir(self.target.parent)
        self.temp_path = Path(
            tempfile.mkdtemp(dir=parent, prefix=f".{self.target.name}.", suffix=".tmp")
        )
        # mkdtemp creates 0700; publish with the mode a plain mkdir would give
        if self.target.is_dir():
            mode = stat.S_IMODE(self.target.stat().st_mode)
        else:
            mode = 0o777 & ~_current_umask()
        os.chmod(self.temp_path, mode)
        return self

    def commit(self) -> None:
        """Replace ``target`` with the staged directory."""
        if self.temp_path is None:
            msg = "AtomicDirectory.commit() called outside of a with block"
            raise RuntimeError(msg)
        if self.committed:
            return

        backup: Path | None = None
        if self.target.exists() or self.target.is_symlink():
            backup = Path(
                tempfile.mkdtemp(
                    dir=self.target.parent, prefix=f".{self.target.name}.", suffix=".old"
                )
            )
            # mkdtemp reserves the name; rename needs it gone
            backup.rmdir()
            os.replace(self.target, backup)

        try:
            os.replace(self.temp_path, self.target)
        except BaseException:
            if backup is not None:
                os.replace(backup, self.target)
            raise

        self.committed = True
        if backup is not None:
            _remove(backup)

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.committed and self.temp_path is not None:
            _remove(self.temp_path)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove %s: %s", path, e)
