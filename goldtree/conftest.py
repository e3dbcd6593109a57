from __future__ import annotations

from .pytest_plugin import (  # noqa: F401
    pytest_addoption,
    pytest_assertrepr_compare,
    pytest_configure,
    pytest_report_header,
)
from .tests.fixtures import *  # noqa: F401, F403
