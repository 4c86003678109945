# flowcomp/config.py
from __future__ import annotations
import argparse
import os
from dataclasses import dataclass
from typing import Optional

from .logger import LogLevel

DEFAULT_MODEL_FILE = "model.txt"


@dataclass
class RunConfig:
    input_file: Optional[str] = None    # None -> stdin
    output_file: Optional[str] = None   # None -> stdout
    log_file: Optional[str] = None      # None -> stderr
    log_level: LogLevel = LogLevel.INFORMATION
    model_file: str = DEFAULT_MODEL_FILE
    csv_file: Optional[str] = None
    show_model: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            input_file=args.input_file or None,
            output_file=args.output_file or None,
            log_file=args.log_file or None,
            log_level=args.loglevel,
            model_file=args.model_file or os.path.join(os.getcwd(), DEFAULT_MODEL_FILE),
            csv_file=args.csv or None,
            show_model=args.show_model,
        )
