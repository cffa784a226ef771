from __future__ import annotations
from typing import Optional


class JsonlToolsError(Exception):
    """Base class for errors raised by jsonl_tools."""


class FileAccessError(JsonlToolsError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class LineParseError(JsonlToolsError):
    """A single line is not valid JSON, or is valid JSON but not an object.

    kind is "syntax" or "not_object".
    """

    SYNTAX = "syntax"
    NOT_OBJECT = "not_object"

    def __init__(self, kind: str, message: str, line_no: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.line_no = line_no


class ConfigError(JsonlToolsError):
    pass
