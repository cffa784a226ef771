from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Mapping

from .aggregator import KeyAggregator, KeySet, ParseFailure

DEFAULT_TOP_N = 5


@dataclass(frozen=True)
class KeyCombination:
    keys: KeySet
    count: int


def rows_with_missing_keys(all_keys: AbstractSet[str], row_keys: Mapping[int, KeySet]) -> List[int]:
    """Row indices, ascending, whose key set is not the full key set."""
    full = frozenset(all_keys)
    return sorted(i for i, keys in row_keys.items() if frozenset(keys) != full)


def missing_keys(all_keys: AbstractSet[str], keys: KeySet) -> List[str]:
    return sorted(set(all_keys) - set(keys))


def rank_key_combinations(row_keys: Mapping[int, KeySet]) -> List[KeyCombination]:
    """Full ranking of distinct key sets, most frequent first.

    Equal counts are ordered by the sorted key tuple, ascending. Callers
    slice the result for display.
    """
    freqs: Counter = Counter(row_keys.values())
    ranked = sorted(freqs.items(), key=lambda kv: (-kv[1], kv[0]))
    return [KeyCombination(keys=k, count=c) for k, c in ranked]


@dataclass(frozen=True)
class KeySummary:
    """Everything a report needs, derived once after the parse pass."""
    source: str
    rows_seen: int
    rows_parsed: int
    failed: int
    all_keys: AbstractSet[str]
    key_counts: Dict[str, int]
    missing_rows: List[int]
    combinations: List[KeyCombination]
    row_keys: Mapping[int, KeySet]
    failures: List[ParseFailure]


def summarize(source: str, agg: KeyAggregator) -> KeySummary:
    return KeySummary(
        source=source,
        rows_seen=agg.rows_seen,
        rows_parsed=agg.rows_parsed,
        failed=agg.failed,
        all_keys=agg.all_keys,
        key_counts=dict(agg.key_counts),
        missing_rows=rows_with_missing_keys(agg.all_keys, agg.row_keys),
        combinations=rank_key_combinations(agg.row_keys),
        row_keys=dict(agg.row_keys),
        failures=list(agg.failures),
    )
