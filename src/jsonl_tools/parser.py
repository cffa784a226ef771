from __future__ import annotations
import json
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from .errors import LineParseError


def parse_line(line: str) -> Optional[Dict[str, Any]]:
    """Parse one JSONL line into its top-level object.

    Blank lines give None. Raises LineParseError for invalid JSON and for
    JSON whose top level is not an object.
    """
    text = line.strip()
    if not text:
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise LineParseError(LineParseError.SYNTAX, f"invalid JSON: {e}") from e
    if not isinstance(value, dict):
        raise LineParseError(
            LineParseError.NOT_OBJECT,
            f"expected a JSON object, got {type(value).__name__}",
        )
    return value


def parse_lines(lines: Iterable[str]) -> Iterator[Tuple[int, Union[Dict[str, Any], LineParseError]]]:
    """Yield (row_index, record_or_error) for every non-blank line.

    Row indices count non-blank lines from zero; line_no on errors is the
    1-based physical line number.
    """
    row = 0
    for line_no, line in enumerate(lines, start=1):
        try:
            rec = parse_line(line)
        except LineParseError as e:
            e.line_no = line_no
            yield row, e
            row += 1
            continue
        if rec is None:
            continue
        yield row, rec
        row += 1
