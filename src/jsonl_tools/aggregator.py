from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Set, Tuple, Union

from .errors import LineParseError

KeySet = Tuple[str, ...]


def key_set(record: Mapping[str, Any]) -> KeySet:
    """Canonical KeySet: sorted, deduplicated top-level key names."""
    return tuple(sorted(set(record.keys())))


@dataclass(frozen=True)
class ParseFailure:
    row: int
    line_no: int
    kind: str
    message: str


class KeyAggregator:
    """Accumulates key statistics one row at a time.

    Feed successfully parsed rows to update() and failed ones to fail(), in
    ascending row order. Counts and the key union do not depend on order;
    only the row -> KeySet mapping keeps it.
    """
    def __init__(self):
        self.rows_seen = 0
        self._all_keys: Set[str] = set()
        self.key_counts: Dict[str, int] = {}
        self.row_keys: Dict[int, KeySet] = {}
        self.failures: List[ParseFailure] = []

    def update(self, index: int, record: Mapping[str, Any]) -> KeySet:
        keys = key_set(record)
        self.rows_seen += 1
        for k in keys:
            self._all_keys.add(k)
            self.key_counts[k] = self.key_counts.get(k, 0) + 1
        self.row_keys[index] = keys
        return keys

    def fail(self, index: int, error: LineParseError) -> ParseFailure:
        self.rows_seen += 1
        f = ParseFailure(
            row=index,
            line_no=error.line_no if error.line_no is not None else index + 1,
            kind=error.kind,
            message=error.message,
        )
        self.failures.append(f)
        return f

    def consume(self, pairs: Iterable[Tuple[int, Union[Mapping[str, Any], LineParseError]]]) -> "KeyAggregator":
        for index, item in pairs:
            if isinstance(item, LineParseError):
                self.fail(index, item)
            else:
                self.update(index, item)
        return self

    @property
    def rows_parsed(self) -> int:
        return len(self.row_keys)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def all_keys(self) -> FrozenSet[str]:
        return frozenset(self._all_keys)

    @property
    def key_count(self) -> int:
        return len(self._all_keys)
