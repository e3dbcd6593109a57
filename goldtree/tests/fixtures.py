from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
import re

import pytest

from .. import get_logger
from ..compare import TreeComparison, compare_trees_with_filtering
from ..consts import GOLDEN_DIRNAME, UPDATE_ENV_VAR
from ..utils import AnyPath, env_flag
from ..utils import make_read_only as set_read_only

lgr = get_logger()


@pytest.fixture(autouse=True)
def capture_all_logs(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="goldtree")


@pytest.fixture(scope="session")
def update_golden(pytestconfig: pytest.Config) -> bool:
    """Whether golden trees should be regenerated"""
    return bool(pytestconfig.getoption("--update-golden", default=False)) or env_flag(
        UPDATE_ENV_VAR
    )


@pytest.fixture
def golden_path(request: pytest.FixtureRequest) -> Path:
    """Golden tree of the test: ``golden/<test name>`` next to its module"""
    # parametrized ids may contain path separators and other oddities
    name = re.sub(r"[^\w.-]+", "_", request.node.name)
    return request.path.parent / GOLDEN_DIRNAME / name


@pytest.fixture
def make_read_only(request: pytest.FixtureRequest) -> Callable[[AnyPath], None]:
    """Make a path read only until the end of the test"""

    def _make_read_only(path: AnyPath) -> None:
        request.addfinalizer(set_read_only(path))

    return _make_read_only


@pytest.fixture
def compare_golden_tree(
    update_golden: bool, golden_path: Path
) -> Callable[..., TreeComparison]:
    """Compare a generated tree to the test's golden tree

    Honors ``--update-golden``.
    """

    def compare(actual: AnyPath, golden: AnyPath | None = None) -> TreeComparison:
        if golden is None:
            golden = golden_path
        lgr.debug("Comparing %s to golden tree %s", actual, golden)
        return compare_trees_with_filtering(actual, golden, update=update_golden)

    return compare
