from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional

from . import __version__
from .config import AppCfg, load_config
from .errors import ConfigError, FileAccessError
from .logs import NdjsonLogger, setup_logging
from .pipeline import analyze_file
from .report import format_record, format_report

logger = logging.getLogger(__name__)

def positive_int(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="jsonl-tools", description="Summarize the key structure of a JSON Lines file")
    ap.add_argument("--filename", required=True, help="Path to the .jsonl file to analyze")
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument("--top", type=positive_int, default=None, help="How many key combinations to list")
    ap.add_argument("--record", type=int, default=None, help="Also show this row (0-based) and its missing keys")
    ap.add_argument("--log-level", dest="log_level", default=None, help="Console log level (default INFO)")
    ap.add_argument("--ndjson-log", dest="ndjson_log", default=None, help="Directory for an NDJSON run-summary log")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else AppCfg()
    except ConfigError as e:
        setup_logging("INFO")
        logger.error("%s", e)
        return 1
    if args.top is not None:
        cfg.report.top_n = args.top
    if args.log_level:
        cfg.logging.level = args.log_level.upper()
    if args.ndjson_log:
        cfg.logging.ndjson_dir = args.ndjson_log

    setup_logging(cfg.logging.level)
    logger.info("Welcome to jsonl-tools (Version %s)!", __version__)
    logger.info("Processing %s", args.filename)

    try:
        summary, record = analyze_file(args.filename, record_index=args.record)
    except FileAccessError as e:
        logger.error("%s", e)
        return 1

    for f in summary.failures:
        logger.debug("line %d failed to parse (%s): %s", f.line_no, f.kind, f.message)
    if summary.failed:
        logger.warning("%d line(s) failed to parse and were skipped", summary.failed)

    sys.stdout.write(format_report(summary, cfg.report.top_n, cfg.report.thousands_sep))
    if args.record is not None:
        sys.stdout.write(format_record(summary, args.record, record))

    if cfg.logging.ndjson_dir:
        nd = NdjsonLogger(cfg.logging.ndjson_dir, cfg.logging.file_prefix)
        try:
            nd.write({
                "type": "summary",
                "msg": "analysis",
                "data": {
                    "file": summary.source,
                    "rows_parsed": summary.rows_parsed,
                    "rows_failed": summary.failed,
                    "unique_keys": len(summary.all_keys),
                    "rows_with_missing_keys": len(summary.missing_rows),
                    "combinations": len(summary.combinations),
                },
            })
        finally:
            nd.close()
        logger.info("Summary appended to %s", nd.path)
    return 0
