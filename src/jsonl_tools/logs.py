from __future__ import annotations
import os, json, time, pathlib, uuid, logging, sys
from typing import Optional, IO

LOG_FORMAT = "[%(asctime)s.%(msecs)03d] %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

def setup_logging(level: str = "INFO") -> None:
    """Console logging on stderr so the report on stdout stays clean."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
        force=True,
    )

class NdjsonLogger:
    """Appends structured records to a time-coded NDJSON file."""
    def __init__(self, directory: str, file_prefix: str):
        self.dir = pathlib.Path(directory)
        self.dir.mkdir(parents=True, exist_ok=True)
        self.prefix = file_prefix
        self.seq = 0
        self._fh: Optional[IO[str]] = None
        self._rot_day: Optional[str] = None
        self._path: Optional[pathlib.Path] = None
        # Observability: per-run identifiers
        self.session_id: str = os.getenv("SESSION_ID") or uuid.uuid4().hex[:12]
        self.pid: int = os.getpid()
        self.rotate()

    @property
    def path(self) -> Optional[pathlib.Path]:
        return self._path

    def rotate(self):
        self.close()
        # e.g. jsonl_tools_YYYYMMDD_HHMMSS.ndjson
        stamp = time.strftime("%Y%m%d_%H%M%S", time.localtime())
        path = self.dir / f"{self.prefix}_{stamp}.ndjson"
        self._fh = open(path, "a", buffering=1, encoding="utf-8")
        self._path = path
        self._rot_day = stamp[:8]

    def write(self, obj: dict):
        self.seq += 1
        now = time.time()
        msec = int((now % 1.0) * 1000)
        obj.setdefault("hms", time.strftime("%H:%M:%S", time.localtime(now)) + f".{msec:03d}")
        obj.setdefault("seq", self.seq)
        obj.setdefault("schema", "v1")
        obj.setdefault("session_id", self.session_id)
        obj.setdefault("pid", self.pid)
        if time.strftime("%Y%m%d") != self._rot_day:
            self.rotate()
        self._fh.write(json.dumps(obj, ensure_ascii=False) + "\n")

    def close(self):
        if self._fh:
            self._fh.close()
            self._fh = None
