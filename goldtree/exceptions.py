from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .compare import TreeComparison


class GoldenTreeError(RuntimeError):
    """Failed to read, remove or regenerate a tree on disk

    Signals a problem with the environment rather than a difference between
    the trees, so it is raised right away.
    """

    pass


class TreeMismatchError(AssertionError):
    """Generated tree differs from its golden counterpart

    Raised once all checks ran, so that every discrepancy is reported.
    """

    def __init__(self, comparison: TreeComparison) -> None:
        self.comparison = comparison
        super().__init__(comparison.report())
