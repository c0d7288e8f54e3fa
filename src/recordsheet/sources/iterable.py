"""
Record source over an in-memory collection or a one-shot iterator.
"""

import itertools
from collections.abc import Mapping, Sized
from typing import Any, Iterable, Iterator, List, Optional

from recordsheet.core.paths import escape_segment, resolve_path
from recordsheet.sources.base import RecordSource


def matches(record: Any, criteria: dict) -> bool:
    """Check that every criterion path on *record* equals (or is in) the expected value."""
    for path, expected in criteria.items():
        value = resolve_path(record, path)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class IterableSource(RecordSource):
    """
    Wraps a list, tuple or any iterable of records.

    One-shot iterators (generators) are supported: the emptiness check peeks
    at the first record and keeps it for the following iteration.

    Example:
        >>> source = IterableSource([{"id": 1, "active": 0}, {"id": 2, "active": 1}])
        >>> [r["id"] for r in source.where(active=1)]
        [2]
    """

    def __init__(self, records: Iterable[Any]):
        self._records = records
        self._peeked: List[Any] = []

    def _one_shot(self) -> bool:
        return iter(self._records) is self._records

    def _peek(self) -> List[Any]:
        if not self._one_shot():
            return list(itertools.islice(self._records, 1))
        if not self._peeked:
            self._peeked.extend(itertools.islice(self._records, 1))
        return self._peeked

    def __iter__(self) -> Iterator[Any]:
        if self._one_shot():
            peeked, self._peeked = self._peeked, []
            return itertools.chain(peeked, self._records)
        return iter(self._records)

    def where(self, **criteria: Any) -> "IterableSource":
        if not criteria:
            return self
        return IterableSource(record for record in self if matches(record, criteria))

    def is_empty(self) -> bool:
        if isinstance(self._records, Sized):
            return len(self._records) == 0
        return not self._peek()

    def natural_columns(self) -> Optional[List[str]]:
        first = self._peek()
        if not first:
            return None
        if isinstance(first[0], Mapping):
            return [escape_segment(key) for key in first[0].keys()]

        from recordsheet.registry import describe_columns

        return describe_columns(type(first[0]))
