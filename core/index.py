"""Prefix-searchable index over qualified IAM action names."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterable, Iterator

_MAX_CODEPOINT = 0x10FFFF


def _prefix_upper_bound(prefix: str) -> str | None:
    """Return the smallest string greater than every string starting with ``prefix``.

    ``None`` means the range is unbounded above.
    """
    chars = list(prefix)
    while chars:
        last = ord(chars.pop())
        if last < _MAX_CODEPOINT:
            chars.append(chr(last + 1))
            return "".join(chars)
    return None


@dataclass(frozen=True, slots=True)
class PrefixIndex:
    """Immutable sorted snapshot of the action corpus.

    Entries keep their corpus multiplicity. A prefix query locates the matching
    range with two binary searches, so its cost grows with the query length and
    the size of the result rather than with the corpus.
    """

    entries: tuple[str, ...] = ()
    namespaces: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, corpus: Iterable[str]) -> "PrefixIndex":
        entries = tuple(sorted(corpus))
        namespaces = frozenset(entry.split(":", 1)[0] for entry in entries if ":" in entry)
        return cls(entries=entries, namespaces=namespaces)

    def search_prefix(self, query: str) -> list[str]:
        """Return every corpus entry that starts with ``query``, in sorted order."""
        if not query:
            return list(self.entries)
        start = bisect_left(self.entries, query)
        upper = _prefix_upper_bound(query)
        stop = len(self.entries) if upper is None else bisect_left(self.entries, upper, lo=start)
        return list(self.entries[start:stop])

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        position = bisect_left(self.entries, name)
        return position < len(self.entries) and self.entries[position] == name

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


def build_index(corpus: Iterable[str]) -> PrefixIndex:
    return PrefixIndex.build(corpus)


__all__ = ["PrefixIndex", "build_index"]
