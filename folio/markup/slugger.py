"""Heading anchor ids."""

from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[\W_]+", re.UNICODE)


def slugify(value: str) -> str:
    """Lowercase ``value`` and collapse runs of whitespace/punctuation to ``-``."""
    return _SEPARATORS_RE.sub("-", value.strip().lower()).strip("-")


class Slugger:
    """Hands out unique slugs within one document: ``foo``, ``foo-1``, ``foo-2``."""

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, value: str) -> str:
        original = slugify(value) or "section"
        result = original
        while result in self._occurrences:
            self._occurrences[original] += 1
            result = f"{original}-{self._occurrences[original]}"
        self._occurrences[result] = 0
        return result
