from __future__ import annotations
import dataclasses, yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .analysis import DEFAULT_TOP_N
from .errors import ConfigError

@dataclass
class ReportCfg:
    # how many key combinations the report lists
    top_n: int = DEFAULT_TOP_N
    # render counts as 1,234 rather than 1234
    thousands_sep: bool = True

@dataclass
class LoggingCfg:
    level: str = "INFO"
    # When set, each run appends a summary record to an NDJSON log in this
    # directory. None disables it.
    ndjson_dir: Optional[str] = None
    file_prefix: str = "jsonl_tools"

@dataclass
class AppCfg:
    report: ReportCfg = field(default_factory=ReportCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)

def _section(raw: Dict[str, Any], name: str, cls) -> Dict[str, Any]:
    sec = raw.get(name) or {}
    if not isinstance(sec, dict):
        raise ConfigError(f"section '{name}' must be a mapping")
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(sec) - known)
    if unknown:
        raise ConfigError(f"unknown key(s) in '{name}': {', '.join(unknown)}")
    return dict(sec)

def load_config(path: str) -> AppCfg:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping")

    # Coerce numeric fields so quoted YAML values still work
    rep_raw = _section(raw, "report", ReportCfg)
    def _as_int(d, key, default):
        v = d.get(key, default)
        try:
            return int(v)
        except (TypeError, ValueError):
            return default
    def _as_bool(d, key, default):
        v = d.get(key, default)
        if isinstance(v, str):
            s = v.strip().lower()
            if s in ("true", "yes", "on", "1"):
                return True
            if s in ("false", "no", "off", "0"):
                return False
            return default
        return bool(v)

    rep = ReportCfg(
        top_n=_as_int(rep_raw, "top_n", ReportCfg.top_n),
        thousands_sep=_as_bool(rep_raw, "thousands_sep", ReportCfg.thousands_sep),
    )
    if rep.top_n < 1:
        raise ConfigError(f"report.top_n must be at least 1, got {rep.top_n}")
    log = LoggingCfg(**_section(raw, "logging", LoggingCfg))
    log.level = str(log.level).upper()
    return AppCfg(report=rep, logging=log)
