from __future__ import annotations

from typing import Any

from pytest import Config, Parser

from .compare import TreeComparison
from .consts import UPDATE_ENV_VAR
from .tests.fixtures import *  # noqa: F401, F403
from .utils import env_flag


def pytest_addoption(parser: Parser) -> None:
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help=(
            "Regenerate golden trees from generated content instead of only"
            f" comparing them (also enabled by setting {UPDATE_ENV_VAR}=1)"
        ),
    )


def pytest_configure(config: Config) -> None:
    config.addinivalue_line(
        "markers", "golden: test comparing a generated tree to a golden one"
    )


def pytest_report_header(config: Config) -> list[str]:
    """Warn in the pytest header when golden trees get rewritten"""
    if config.getoption("--update-golden", default=False) or env_flag(
        UPDATE_ENV_VAR
    ):
        return ["goldtree: updating golden trees"]
    return []


def pytest_assertrepr_compare(op: str, left: Any, right: Any) -> list[str] | None:
    """Explain an ``==`` between two tree comparisons by their failures"""
    if (
        isinstance(left, TreeComparison)
        and isinstance(right, TreeComparison)
        and op == "=="
    ):
        lines = [
            f"{left.actual} vs {left.golden} == {right.actual} vs {right.golden}"
        ]
        for side, comparison in (("Left", left), ("Right", right)):
            lines.append(f"{side}:")
            for failure in comparison.failures() or ["trees match"]:
                lines.extend("  " + line for line in failure.splitlines())
        return lines
    return None
