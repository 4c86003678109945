# flowcomp/cli.py
"""
Small area flow compensation for slicer gcode.

Usage:
    flowcomp -i input.gcode -o output.gcode [-l flowcomp.log] [--loglevel debug]

Reads stdin / writes stdout when no files are given. Log output goes to
stderr unless --log-file is set. Fatal errors end the process with a
distinct exit status (see flowcomp.errors).
"""
from __future__ import annotations
import argparse
import logging
import sys
from contextlib import ExitStack
from typing import List, Optional

from .calibration import load_calibration
from .config import RunConfig
from .errors import FlowCompError, StreamOpenError, UNKNOWN_ERROR_EXIT_CODE
from .flow_model import FlowModel
from .logger import AdjustmentLog, LogLevel, configure_logging
from .processor import FlowCompProcessor

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="flowcomp", description="Small Area Flow Compensation")
    files = ap.add_argument_group("Input/Output")
    files.add_argument("-i", "--input-file", help="Input G-code, defaults to STDIN")
    files.add_argument("-o", "--output-file", help="Output G-code, defaults to STDOUT")
    files.add_argument("-l", "--log-file", help="Log file, defaults to STDERR")
    adv = ap.add_argument_group("Advanced")
    adv.add_argument("--loglevel", type=LogLevel.parse, default=LogLevel.INFORMATION,
                     help="Allowed log level (none, fatal, error, warning, information, debug)")
    adv.add_argument("-m", "--model-file", help="Calibration table, defaults to ./model.txt")
    adv.add_argument("--csv", help="Write one CSV row per adjusted line")
    adv.add_argument("--show-model", action="store_true",
                     help="Print the calibration points and exit")
    return ap


def _open(stack: ExitStack, path: Optional[str], mode: str, fallback):
    # surrogateescape lets bytes that are not UTF-8 pass through unchanged
    if not path:
        if hasattr(fallback, "reconfigure"):
            fallback.reconfigure(errors="surrogateescape")
        return fallback
    try:
        return stack.enter_context(
            open(path, mode, encoding="utf-8", errors="surrogateescape", newline=""))
    except OSError as e:
        raise StreamOpenError(f"Unable to open {path}: {e}") from e


def run(cfg: RunConfig) -> None:
    model = FlowModel(load_calibration(cfg.model_file))
    if cfg.show_model:
        for line in model.comment_lines():
            print(line)
        return

    with ExitStack() as stack:
        src = _open(stack, cfg.input_file, "r", sys.stdin)
        dst = _open(stack, cfg.output_file, "w", sys.stdout)
        adjustments = None
        if cfg.csv_file:
            try:
                adjustments = stack.enter_context(AdjustmentLog(cfg.csv_file))
            except OSError as e:
                raise StreamOpenError(f"Unable to open {cfg.csv_file}: {e}") from e
        FlowCompProcessor(model, adjustments).run(src, dst)
        dst.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = RunConfig.from_args(args)
    try:
        configure_logging(cfg.log_file, cfg.log_level)
    except OSError as e:
        print(f"ERROR: Unable to open log file {cfg.log_file}: {e}", file=sys.stderr)
        return StreamOpenError.exit_code

    try:
        run(cfg)
    except FlowCompError as e:
        log.critical("%s", e)
        return e.exit_code
    except Exception as e:
        log.critical("An error occurred: %s", e)
        return UNKNOWN_ERROR_EXIT_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())
