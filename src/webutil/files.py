"""File system helpers: copying, emptying, archiving and syncing directories."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
import tarfile
from collections.abc import Callable
from datetime import datetime

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o600
# Sortable timestamp for file names: 2006-01-02_15.04.05.000
FILE_TIME_FORMAT = "%Y-%m-%d_%H.%M.%S"

Exclude = Callable[[os.DirEntry], bool]


def timestamped_name(prefix: str, ext: str = "", when: datetime | None = None) -> str:
    """Return "<prefix><FILE_TIME_FORMAT with milliseconds><ext>"."""
    when = when or datetime.now()
    stamp = f"{when.strftime(FILE_TIME_FORMAT)}.{when.microsecond // 1000:03d}"
    return f"{prefix}{stamp}{ext}"


def sort_files_by_date(entries: list, asc: bool = True) -> None:
    """Sort entries in place by modification time.

    `asc=True` puts the most recently modified entry first. Entries may be
    `os.DirEntry` or `pathlib.Path` objects; the sort is stable.
    """
    entries.sort(key=lambda entry: entry.stat().st_mtime, reverse=asc)


def remove_dir_contents(path: str | os.PathLike) -> None:
    """Delete everything inside a directory but keep the directory itself."""
    with os.scandir(path) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                shutil.rmtree(entry.path)
            else:
                os.remove(entry.path)


def copy_file(source: str | os.PathLike, dest: str | os.PathLike) -> None:
    """Copy file contents, then give dest the permission bits of source."""
    shutil.copyfile(source, dest)
    os.chmod(dest, stat.S_IMODE(os.stat(source).st_mode))


def copy_dir(source: str | os.PathLike, dest: str | os.PathLike, *excludes: Exclude) -> None:
    """Recursively copy a directory tree to a destination that must not exist.

    An entry is skipped when any of the `excludes` predicates returns True
    for its `os.DirEntry`. A failure to copy one entry is logged and the rest
    of the tree is still copied.
    """
    info = os.stat(source)
    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(f"Source is not a directory: {source}")
    if os.path.lexists(dest):
        raise FileExistsError(f"Destination already exists: {dest}")

    os.makedirs(dest, mode=stat.S_IMODE(info.st_mode))

    with os.scandir(source) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        if any(exclude(entry) for exclude in excludes):
            continue
        target = os.path.join(dest, entry.name)
        try:
            if entry.is_dir():
                copy_dir(entry.path, target, *excludes)
            else:
                copy_file(entry.path, target)
        except OSError as exc:
            logger.error("Failed to copy %s to %s: %s", entry.path, target, exc)


def make_dir_if_not_exists(path: str | os.PathLike, mode: int = 0o700) -> None:
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        pass


def file_exists(path: str | os.PathLike) -> bool:
    return os.path.exists(path)


def _archive_name(path: str) -> str:
    # Archives are built from a "dest/" staging directory that should not
    # show up in member names.
    return path.replace("dest/", "", 1)


def tar_gz(out_path: str | os.PathLike, in_path: str | os.PathLike) -> None:
    """Write every regular file below in_path into a gzip compressed tarball."""
    in_path = os.fspath(in_path)
    try:
        with tarfile.open(out_path, "w:gz") as archive:
            for root, dirs, names in os.walk(in_path):
                dirs.sort()
                for name in sorted(names):
                    path = os.path.join(root, name)
                    if not os.path.isfile(path):
                        continue
                    archive.add(path, arcname=_archive_name(path), recursive=False)
    except (OSError, tarfile.TarError) as exc:
        logger.error("TarGz error writing %s from %s: %s", out_path, in_path, exc)
        raise


def rsync(target_dir: str, params: str, dest: str, delete: bool = False) -> None:
    """Run rsync with a raw parameter string.

    `params` is passed through the shell unchanged, so it must come from
    trusted configuration. Raises `subprocess.CalledProcessError` on failure.
    """
    command = f"rsync {params} {target_dir} {dest}"
    if delete:
        command += " --delete"
    logger.debug("Running %s", command)
    subprocess.run(["bash", "-c", command], check=True)
