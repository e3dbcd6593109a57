"""Comparison of a generated directory tree against its golden counterpart"""

from __future__ import annotations

from dataclasses import dataclass, field
import difflib
from fnmatch import fnmatchcase
import os
import os.path as op
import shutil

from . import get_logger
from .consts import DCONF_DB_DIRNAME, DCONF_DB_MAGIC, DCONF_DB_SOURCE_SUFFIX
from .exceptions import GoldenTreeError, TreeMismatchError
from .snapshot import add_empty_markers, copy_tree_filtered, tree_content
from .utils import AnyPath

lgr = get_logger("compare")


def _display(key: str) -> str:
    # the root of a snapshot is keyed by the empty string
    return key or os.sep


@dataclass
class TreeComparison:
    """Outcome of comparing a generated tree to a golden one"""

    #: The generated tree
    actual: str

    #: The golden tree
    golden: str

    #: Snapshot of the generated tree, None if it does not exist
    got: dict[str, str] | None = None

    #: Snapshot of the golden tree, None if it does not exist
    expected: dict[str, str] | None = None

    #: Compiled dconf databases which should have been generated
    missing_compiled: list[str] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return self.got == self.expected

    @property
    def missing(self) -> list[str]:
        """Entries of the golden tree absent from the generated one"""
        return sorted(set(self.expected or ()) - set(self.got or ()))

    @property
    def extra(self) -> list[str]:
        """Entries of the generated tree absent from the golden one"""
        return sorted(set(self.got or ()) - set(self.expected or ()))

    @property
    def differing(self) -> list[str]:
        """Entries present in both trees but with different content"""
        if self.got is None or self.expected is None:
            return []
        return sorted(
            p for p in self.got.keys() & self.expected.keys()
            if self.got[p] != self.expected[p]
        )

    @property
    def ok(self) -> bool:
        return self.matches and not self.missing_compiled

    def failures(self) -> list[str]:
        """Describe each problem found, one item per kind of problem"""
        r = []
        if not self.matches:
            if self.got is None:
                r.append(f"{self.actual} does not exist but {self.golden} does")
            elif self.expected is None:
                r.append(f"{self.golden} does not exist but {self.actual} does")
            if self.missing:
                r.append(
                    "Missing from generated content: "
                    + ", ".join(map(_display, self.missing))
                )
            if self.extra:
                r.append(
                    "Unexpected generated content: "
                    + ", ".join(map(_display, self.extra))
                )
            got, expected = self.got or {}, self.expected or {}
            for p in self.differing:
                diff = difflib.unified_diff(
                    expected[p].splitlines(keepends=True),
                    got[p].splitlines(keepends=True),
                    fromfile="golden" + p,
                    tofile="got" + p,
                )
                r.append(
                    f"Content of {_display(p)} differs:\n"
                    + "".join(diff).rstrip("\n")
                )
        for db in self.missing_compiled:
            r.append(f"Binary version of dconf DB should exist: {db}")
        return r

    def report(self) -> str:
        failures = self.failures()
        if not failures:
            return f"{self.actual} matches {self.golden}"
        return (
            f"got and expected content differs ({self.actual} vs {self.golden}):\n"
            + "\n".join(f"- {f}" for f in failures)
        )


def update_golden_tree(actual: AnyPath, golden: AnyPath) -> None:
    """Regenerate golden from actual

    Compiled dconf databases are not copied and markers are added to empty
    directories.  If actual does not exist, golden is just removed.
    """
    lgr.info("updating golden tree %s", golden)
    try:
        if op.islink(golden) or (op.lexists(golden) and not op.isdir(golden)):
            os.unlink(golden)
        else:
            shutil.rmtree(golden)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise GoldenTreeError(
            f"Cannot remove target golden directory {golden}"
        ) from exc

    if not op.exists(actual):
        lgr.debug("%s does not exist, leaving %s absent", actual, golden)
        return

    try:
        copy_tree_filtered(actual, golden)
    except OSError as exc:
        raise GoldenTreeError(f"Can't update golden directory {golden}") from exc
    try:
        add_empty_markers(golden)
    except OSError as exc:
        raise GoldenTreeError(
            f"Cannot create empty file in empty directories of {golden}"
        ) from exc


def find_dconf_dir(root: AnyPath) -> str:
    """Return the parent of the last ``db`` directory found under root

    Directories are visited depth first in lexical order.  Falls back to root
    if there is no such directory.
    """
    root = op.normpath(os.fspath(root))
    dconf_dir = root

    def onerror(exc: OSError) -> None:
        raise GoldenTreeError("can't find dconf directory") from exc

    for dirpath, dirnames, _ in os.walk(root, onerror=onerror):
        dirnames.sort()
        if op.basename(dirpath) == DCONF_DB_DIRNAME:
            dconf_dir = op.dirname(dirpath)
    return dconf_dir


def missing_compiled_dbs(root: AnyPath) -> list[str]:
    """List compiled dconf databases expected under root but not found

    Each ``db/<name>.d`` keyfile directory of the dconf directory must have a
    ``db/<name>`` counterpart produced by ``dconf update``.
    """
    db_dir = op.join(find_dconf_dir(root), DCONF_DB_DIRNAME)
    try:
        names = sorted(os.listdir(db_dir))
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as exc:
        raise GoldenTreeError("Checking pattern for dconf db failed") from exc
    missing = []
    # hidden entries match too
    for name in names:
        if not fnmatchcase(name, "*" + DCONF_DB_SOURCE_SUFFIX):
            continue
        db = op.join(db_dir, name)
        compiled = db[: -len(DCONF_DB_SOURCE_SUFFIX)]
        if not op.exists(compiled):
            missing.append(compiled)
    return missing


def diff_trees(actual: AnyPath, golden: AnyPath) -> TreeComparison:
    """Compare actual to golden without raising on differences

    Compiled dconf databases of actual are left out of the comparison.
    """
    comparison = TreeComparison(actual=os.fspath(actual), golden=os.fspath(golden))

    actual_exists = op.exists(actual)
    if actual_exists:
        try:
            comparison.got = tree_content(actual, ignore_header=DCONF_DB_MAGIC)
        except OSError as exc:
            raise GoldenTreeError(f"No generated content: {exc}") from exc

    if op.exists(golden):
        try:
            comparison.expected = tree_content(golden)
        except OSError as exc:
            raise GoldenTreeError(f"No golden directory found: {exc}") from exc

    # No more verification on actual if it doesn't exist
    if actual_exists:
        comparison.missing_compiled = missing_compiled_dbs(actual)
    return comparison


def compare_trees_with_filtering(
    actual: AnyPath, golden: AnyPath, update: bool = False
) -> TreeComparison:
    """Assert that the tree at actual matches the golden tree

    Parameters
    ----------
    actual: str or Path
      Generated tree.  It may not exist, meaning that nothing was generated.
    golden: str or Path
      Golden tree.  It may not exist, matching only an absent actual.
    update: bool, optional
      Regenerate golden from actual first

    Raises
    ------
    GoldenTreeError
      On a failure to read or regenerate one of the trees
    TreeMismatchError
      Once every check ran, if any of them failed
    """
    if update:
        update_golden_tree(actual, golden)

    comparison = diff_trees(actual, golden)
    if not comparison.ok:
        raise TreeMismatchError(comparison)
    return comparison
