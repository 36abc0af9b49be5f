"""Creating new projects from a template directory."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from pathlib import Path

DEFAULT_TEMPLATE = "gin_postgres_htmx"


def _copy_tree(source: Path, destination: Path) -> None:
    mode = stat.S_IMODE(source.stat().st_mode)
    destination.mkdir(mode=mode, parents=True, exist_ok=True)
    with os.scandir(source) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        target = destination / entry.name
        if entry.is_dir(follow_symlinks=False):
            _copy_tree(Path(entry.path), target)
        else:
            shutil.copyfile(entry.path, target)


def copy_dir(src: str | os.PathLike, dst: str | os.PathLike) -> None:
    """Copy the tree under ``src`` into ``dst``, creating directories as needed."""
    source = Path(src)
    target = Path(dst)
    if not source.exists():
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(source))
    if not source.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, "Not a directory", str(source))
    _copy_tree(source, target)


def create_project(
    project_name: str,
    template_name: str = DEFAULT_TEMPLATE,
    repository: str | os.PathLike = ".",
) -> Path:
    """Create ``project_name`` from ``templates/<template_name>`` in ``repository``."""
    template_dir = Path(repository) / "templates" / template_name
    project_dir = Path(project_name)
    project_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    copy_dir(template_dir, project_dir)
    return project_dir