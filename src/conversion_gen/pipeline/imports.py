"""Import aggregation: deduplicate and group `use` paths.

Sibling imports from the same namespace are merged into one grouped
statement when both halves of a known pair are present. Output is sorted so
regenerating an unchanged catalog never churns the generated files.
"""

from __future__ import annotations

import typing

# (namespace, first, second) pairs merged into `namespace::{first, second}`
COMBINABLE_IMPORTS: tuple[tuple[str, str, str], ...] = (
    ("std::ffi", "CStr", "CString"),
    ("std::ffi", "OsStr", "OsString"),
    ("std::os::unix::ffi", "OsStrExt", "OsStringExt"),
    ("std::path", "Path", "PathBuf"),
)


def combine_imports(
    paths: typing.Iterable[str],
    combos: typing.Iterable[tuple[str, str, str]] = COMBINABLE_IMPORTS,
) -> tuple[str, ...]:
    """Return `paths` deduplicated, grouped and sorted."""
    uses = set(paths)
    for namespace, first, second in combos:
        full_first = f"{namespace}::{first}"
        full_second = f"{namespace}::{second}"
        if full_first in uses and full_second in uses:
            uses.remove(full_first)
            uses.remove(full_second)
            uses.add(f"{namespace}::{{{first}, {second}}}")
    return tuple(sorted(uses))


class ImportAggregator:
    """Collects every import touched during a pass."""

    def __init__(
        self, combos: typing.Iterable[tuple[str, str, str]] = COMBINABLE_IMPORTS
    ) -> None:
        self._combos = tuple(combos)
        self._uses: set[str] = set()

    def add(self, paths: typing.Iterable[str]) -> None:
        self._uses.update(paths)

    @property
    def raw(self) -> frozenset[str]:
        """Every import added so far, ungrouped."""
        return frozenset(self._uses)

    def combined(self) -> tuple[str, ...]:
        return combine_imports(self._uses, self._combos)

    def render(self) -> str:
        """Render the grouped imports as `use` lines."""
        return "\n".join(f"use {path};" for path in self.combined())
