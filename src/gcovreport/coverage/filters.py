"""Inclusion predicates for files and classes.

The parser accepts any ``Callable[[str], bool]``. ElementFilter is the
pattern-based implementation used when filters come from configuration.

Pattern syntax:
- Standard glob patterns (fnmatch), matched case-insensitively
- "+pattern" or "pattern" includes, "-pattern" excludes
- Excludes win; with no include patterns everything not excluded is kept
"""

from __future__ import annotations

import fnmatch
from collections.abc import Callable, Iterable

ElementPredicate = Callable[[str], bool]

__all__ = [
    "ElementFilter",
    "ElementPredicate",
    "include_all",
]


def include_all(name: str) -> bool:  # noqa: ARG001
    return True


def _normalize(text: str) -> str:
    return text.replace("\\", "/").lower()


class ElementFilter:
    """Include/exclude glob filter over element names (paths or class names)."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._includes: list[str] = []
        self._excludes: list[str] = []
        for raw in patterns:
            if raw.startswith("-"):
                self._excludes.append(_normalize(raw[1:]))
            elif raw.startswith("+"):
                self._includes.append(_normalize(raw[1:]))
            else:
                self._includes.append(_normalize(raw))

    def __repr__(self) -> str:
        return f"ElementFilter(includes={self._includes!r}, excludes={self._excludes!r})"

    @property
    def has_patterns(self) -> bool:
        return bool(self._includes or self._excludes)

    def is_included(self, name: str) -> bool:
        candidate = _normalize(name)

        for pattern in self._excludes:
            if fnmatch.fnmatchcase(candidate, pattern):
                return False

        if not self._includes:
            return True
        return any(fnmatch.fnmatchcase(candidate, pattern) for pattern in self._includes)

    __call__ = is_included
