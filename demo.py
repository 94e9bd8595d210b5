"""Demonstration: compute a large arrangement count while watching progress.

The main thread computes ``base ** exponent`` (arrangements with
repetition) and writes its decimal text to a file; an observer thread
polls the shared progress value and prints it until the computation
completes.

Run with:
    python demo.py --base 999 --exponent 2000 --output number1.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from bigint import BigInt
from combinatorics import PreconditionError, arrangement_with_repeat_count
from logging_config import setup_logging
from progress import Progress, poll

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoConfig:
    base: int = 999
    exponent: int = 2000
    output: Path = Path("number1.txt")
    interval: float = 0.1
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")


def parse_args(argv: list[str] | None = None) -> DemoConfig:
    parser = argparse.ArgumentParser(
        description="Compute base**exponent with the decimal BigInt engine "
        "and write it to a file while printing progress."
    )
    parser.add_argument("--base", type=int, default=DemoConfig.base,
                        help="Number of items to choose from (k).")
    parser.add_argument("--exponent", type=int, default=DemoConfig.exponent,
                        help="Length of the arrangement (n).")
    parser.add_argument("--output", type=Path, default=DemoConfig.output,
                        help="File that receives the decimal result.")
    parser.add_argument("--interval", type=float, default=DemoConfig.interval,
                        help="Seconds between progress polls.")
    parser.add_argument("--log-level", default=DemoConfig.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity.")
    args = parser.parse_args(argv)
    for name in ("base", "exponent"):
        if getattr(args, name) < 0:
            parser.error(f"--{name} must be >= 0, got {getattr(args, name)}")
    if args.interval <= 0:
        parser.error(f"--interval must be positive, got {args.interval}")
    return DemoConfig(
        base=args.base,
        exponent=args.exponent,
        output=args.output,
        interval=args.interval,
        log_level=args.log_level,
    )


def run(config: DemoConfig, out: TextIO | None = None) -> BigInt:
    """Compute, persist and report; returns the computed value.

    Progress lines go to ``out`` (stdout when omitted).
    """
    if out is None:
        out = sys.stdout
    progress = Progress()

    def render(value: float) -> None:
        print(f"progress: {value:.2%}", file=out, flush=True)

    observer = threading.Thread(
        target=poll,
        args=(progress, render, config.interval),
        name="progress-observer",
        daemon=True,
    )

    logger.info("Computing %d ** %d", config.base, config.exponent)
    started = time.perf_counter()
    observer.start()
    try:
        value = arrangement_with_repeat_count(config.base, config.exponent, progress=progress)
    finally:
        progress.finish()
        observer.join()

    config.output.write_text(f"{value}\n", encoding="utf-8")
    logger.info(
        "Wrote %d digits to %s in %.2fs",
        value.size, config.output, time.perf_counter() - started,
    )
    return value


def main(argv: list[str] | None = None) -> int:
    config = parse_args(argv)
    setup_logging(config.log_level)
    try:
        run(config)
    except PreconditionError as e:
        logger.error("Cannot compute %d ** %d: %s", config.base, config.exponent, e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
