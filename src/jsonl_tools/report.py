from __future__ import annotations
import json
from typing import Any, List, Mapping, Optional

from .analysis import KeySummary, missing_keys

RULE = "=" * 31


def fmt_count(n: int, thousands_sep: bool = True) -> str:
    return f"{n:,}" if thousands_sep else str(n)


def occurrences(n: int, thousands_sep: bool = True) -> str:
    word = "occurrence" if n == 1 else "occurrences"
    return f"{fmt_count(n, thousands_sep)} {word}"


def format_keys_found(s: KeySummary, thousands_sep: bool = True) -> List[str]:
    out = [
        RULE,
        f"Found {fmt_count(len(s.all_keys), thousands_sep)} unique JSON keys in file {s.source}",
        f"Rows analyzed: {fmt_count(s.rows_parsed, thousands_sep)}",
    ]
    if s.failed:
        out.append(f"Lines failed to parse: {fmt_count(s.failed, thousands_sep)}")
    if s.rows_seen == 0:
        out.append("No rows processed.")
    return out


def format_key_counts(s: KeySummary, thousands_sep: bool = True) -> List[str]:
    width = max([len(k) for k in s.key_counts] + [20])
    out = [
        RULE,
        f"{'Key':<{width}} {'Count':>12}",
        "-" * (width + 13),
    ]
    for k in sorted(s.key_counts):
        out.append(f"{k:<{width}} {fmt_count(s.key_counts[k], thousands_sep):>12}")
    out.append("")
    out.append(f"Rows with missing keys: {s.missing_rows}")
    return out


def format_combinations(s: KeySummary, top_n: int, thousands_sep: bool = True) -> List[str]:
    out = [
        RULE,
        f"Top {top_n} most frequent JSON key combinations in {s.source}",
    ]
    if not s.combinations:
        out.append("No JSON key combinations found.")
        return out
    for rank, c in enumerate(s.combinations[:top_n], start=1):
        out.append(f"{rank}. ({', '.join(c.keys)}) - {occurrences(c.count, thousands_sep)}")
    return out


def format_report(s: KeySummary, top_n: int, thousands_sep: bool = True) -> str:
    lines = (
        format_keys_found(s, thousands_sep)
        + format_key_counts(s, thousands_sep)
        + format_combinations(s, top_n, thousands_sep)
    )
    return "\n".join(lines) + "\n"


def format_record(s: KeySummary, index: int, record: Optional[Mapping[str, Any]]) -> str:
    """Pretty-print one row and list the keys it lacks."""
    if record is None or index not in s.row_keys:
        return f"Record {index} not found\n"
    out = [
        f"Analysis of Record {index}: {json.dumps(record, indent=2, ensure_ascii=False)}",
    ]
    missing = missing_keys(s.all_keys, s.row_keys[index])
    if missing:
        out.append(f"Missing keys in this record: {missing}")
    else:
        out.append("This record contains all keys found in the dataset.")
    return "\n".join(out) + "\n"
