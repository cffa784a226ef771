from __future__ import annotations
import pathlib
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .aggregator import KeyAggregator
from .analysis import KeySummary, summarize
from .errors import LineParseError
from .parser import parse_lines
from .reader import read_lines


def analyze_lines(
    lines: Iterable[str],
    source: str = "<memory>",
    record_index: Optional[int] = None,
) -> Tuple[KeySummary, Optional[Dict[str, Any]]]:
    """Run parse -> aggregate -> analyze over in-memory lines.

    When record_index is given, the parsed object at that row is returned
    alongside the summary (None if the row is absent or failed to parse).
    """
    parsed = list(parse_lines(lines))
    agg = KeyAggregator().consume(parsed)
    record = None
    # row indices are dense, so the index is the list position
    if record_index is not None and 0 <= record_index < len(parsed):
        item = parsed[record_index][1]
        if not isinstance(item, LineParseError):
            record = item
    return summarize(source, agg), record


def analyze_file(
    path: Union[str, pathlib.Path],
    record_index: Optional[int] = None,
) -> Tuple[KeySummary, Optional[Dict[str, Any]]]:
    # Reads the whole file first so access errors surface before aggregation
    lines = read_lines(path)
    return analyze_lines(lines, source=pathlib.Path(path).name, record_index=record_index)
