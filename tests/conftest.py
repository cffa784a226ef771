import json
import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory (where the package lives) is importable
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def write_jsonl(tmp_path):
    """Write lines (raw strings or dicts) to a .jsonl file and return its path."""
    def _write(lines, name="data.jsonl"):
        p = tmp_path / name
        text = "\n".join(l if isinstance(l, str) else json.dumps(l) for l in lines)
        p.write_text(text + ("\n" if lines else ""), encoding="utf-8")
        return p
    return _write
