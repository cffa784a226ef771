from __future__ import annotations
import pathlib
from typing import List, Union

from .errors import FileAccessError


def read_lines(path: Union[str, pathlib.Path]) -> List[str]:
    """Read a whole UTF-8 file into lines.

    Any open/read/decode problem is raised as FileAccessError before any
    line is handed to the parser.
    """
    p = pathlib.Path(path)
    try:
        with p.open("r", encoding="utf-8", newline="\n") as f:
            return [line.rstrip("\n") for line in f]
    except FileNotFoundError:
        raise FileAccessError(str(p), "no such file")
    except IsADirectoryError:
        raise FileAccessError(str(p), "is a directory")
    except PermissionError:
        raise FileAccessError(str(p), "permission denied")
    except UnicodeDecodeError as e:
        raise FileAccessError(str(p), f"not valid UTF-8 ({e.reason})")
    except OSError as e:
        raise FileAccessError(str(p), e.strerror or str(e))
