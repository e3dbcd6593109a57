from __future__ import annotations

import logging
import os
from pathlib import Path
import stat

import pytest

from .. import get_logger, set_logger_level
from ..utils import env_flag, has_header, make_read_only, on_windows, read_only


def mode_of(path: Path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def test_has_header(tmp_path: Path) -> None:
    f = tmp_path / "f"
    f.write_bytes(b"GVariant and more")
    assert has_header(f, b"GVariant")
    assert not has_header(f, b"Variant")
    f.write_bytes(b"")
    assert not has_header(f, b"GVariant")
    with pytest.raises(FileNotFoundError):
        has_header(tmp_path / "missing", b"GVariant")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", True),
        ("true", True),
        ("YES", True),
        (" on ", True),
        ("0", False),
        ("", False),
        ("nope", False),
    ],
)
def test_env_flag(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("GOLDTREE_TEST_FLAG", value)
    assert env_flag("GOLDTREE_TEST_FLAG") is expected


def test_env_flag_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOLDTREE_TEST_FLAG", raising=False)
    assert env_flag("GOLDTREE_TEST_FLAG") is False
    assert env_flag("GOLDTREE_TEST_FLAG", default=True) is True


@pytest.mark.skipif(on_windows, reason="POSIX permissions")
def test_make_read_only(tmp_path: Path) -> None:
    f = tmp_path / "f"
    f.touch()
    f.chmod(0o640)
    restore = make_read_only(f)
    assert mode_of(f) == 0o444
    restore()
    assert mode_of(f) == 0o640


@pytest.mark.skipif(on_windows, reason="POSIX permissions")
def test_make_read_only_not_recursive(tmp_path: Path) -> None:
    d = tmp_path / "d"
    d.mkdir()
    d.chmod(0o755)
    (d / "f").touch()
    (d / "f").chmod(0o600)
    restore = make_read_only(d)
    try:
        assert mode_of(d) == 0o444
    finally:
        restore()
    assert mode_of(d) == 0o755
    assert mode_of(d / "f") == 0o600


@pytest.mark.skipif(on_windows, reason="POSIX permissions")
def test_read_only_restores_on_error(tmp_path: Path) -> None:
    f = tmp_path / "f"
    f.touch()
    f.chmod(0o600)
    with pytest.raises(RuntimeError):
        with read_only(f) as p:
            assert p == f
            assert mode_of(f) == 0o444
            raise RuntimeError("boom")
    assert mode_of(f) == 0o600


def test_make_read_only_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        make_read_only(tmp_path / "missing")


def test_get_logger() -> None:
    assert get_logger().name == "goldtree"
    assert get_logger("compare").name == "goldtree.compare"


@pytest.mark.parametrize(
    "level,expected",
    [(logging.WARNING, logging.WARNING), ("10", 10), ("ERROR", logging.ERROR)],
)
def test_set_logger_level(level: int | str, expected: int) -> None:
    lgr = logging.getLogger("goldtree.test_level")
    set_logger_level(lgr, level)
    assert lgr.level == expected


def test_set_logger_level_unknown(caplog: pytest.LogCaptureFixture) -> None:
    lgr = logging.getLogger("goldtree.test_level_unknown")
    lgr.setLevel(logging.INFO)
    set_logger_level(lgr, "1.5")
    assert lgr.level == logging.INFO
    assert "Do not know how to treat loglevel 1.5" in caplog.text
