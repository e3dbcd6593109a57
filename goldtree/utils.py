from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
import os
from pathlib import Path
import platform
import stat
from typing import Union

from . import get_logger
from .consts import TRUE_VALUES

AnyPath = Union[str, Path]


lgr = get_logger()

platform_system = platform.system().lower()
on_windows = platform_system == "windows"


def has_header(path: AnyPath, header: bytes) -> bool:
    """Return True if the content of the file at path starts with header"""
    with open(path, "rb") as f:
        return f.read(len(header)) == header


def env_flag(name: str, default: bool = False) -> bool:
    """Interpret environment variable `name` as a boolean switch"""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def make_read_only(path: AnyPath) -> Callable[[], None]:
    """Make path read only and return a callable restoring its permissions

    Only the given entry is changed, directories are not recursed into.
    """
    mode = stat.S_IMODE(os.stat(path).st_mode)
    os.chmod(path, 0o444)
    lgr.debug("Made %s read only (was %o)", path, mode)

    def restore() -> None:
        os.chmod(path, mode)

    return restore


@contextmanager
def read_only(path: AnyPath) -> Iterator[Path]:
    """Context manager keeping path read only for the duration of the block"""
    restore = make_read_only(path)
    try:
        yield Path(path)
    finally:
        restore()
