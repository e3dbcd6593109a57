"""Helpers to take and produce on-disk snapshots of directory trees"""

from __future__ import annotations

import os
import os.path as op
import shutil

from . import get_logger
from .consts import DCONF_DB_MAGIC, EMPTY_DIR_MARKER
from .utils import AnyPath, has_header

lgr = get_logger("snapshot")


def _raise(exc: OSError) -> None:
    raise exc


def tree_content(root: AnyPath, ignore_header: bytes | None = None) -> dict[str, str]:
    """Build a recursive list of the entries of root along with their content

    Keys are paths relative to root, keeping the leading separator (root
    itself is ``""``).  Directories have an empty content.  Markers of empty
    directories are never listed.

    Parameters
    ----------
    root: str or Path
      Directory to snapshot
    ignore_header: bytes, optional
      Files starting with these bytes are left out of the snapshot

    Raises
    ------
    OSError
      If a directory cannot be listed or a file cannot be read
    """
    root = op.normpath(os.fspath(root))
    r: dict[str, str] = {}

    def add(path: str, content: str) -> None:
        r[path[len(root) :]] = content

    add(root, "")
    # directory symlinks are listed in dirnames but not descended into
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        for name in dirnames:
            if name == EMPTY_DIR_MARKER:
                continue
            add(op.join(dirpath, name), "")
        for name in filenames:
            if name == EMPTY_DIR_MARKER:
                continue
            path = op.join(dirpath, name)
            with open(path, "rb") as f:
                data = f.read()
            if ignore_header is not None and data.startswith(ignore_header):
                lgr.debug("Ignoring %s starting with %r", path, ignore_header)
                continue
            add(path, data.decode("utf-8", errors="surrogateescape"))
    return r


def ignore_dconf_db(src: str, names: list[str]) -> set[str]:
    """List compiled dconf databases among names, for `shutil.copytree`

    Files which cannot be read are not considered databases.
    """
    r = set()
    for name in names:
        path = op.join(src, name)
        if op.isdir(path):
            continue
        try:
            is_db = has_header(path, DCONF_DB_MAGIC)
        except OSError as exc:
            lgr.debug("Cannot read %s, copying it: %s", path, exc)
            continue
        if is_db:
            lgr.debug("Not copying compiled dconf database %s", path)
            r.add(name)
    return r


def copy_tree_filtered(src: AnyPath, dst: AnyPath) -> None:
    """Copy src to dst, keeping symlinks and skipping compiled dconf databases"""
    shutil.copytree(
        src, dst, symlinks=True, ignore=ignore_dconf_db, copy_function=shutil.copy
    )


def add_empty_markers(root: AnyPath) -> list[str]:
    """Create a marker file in every empty directory under root

    That allows git to commit them.  Returns the created marker paths.
    """
    created = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        if dirnames or filenames:
            continue
        marker = op.join(dirpath, EMPTY_DIR_MARKER)
        open(marker, "w").close()
        created.append(marker)
    if created:
        lgr.debug("Created %d empty directory markers under %s", len(created), root)
    return created
