from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from pm2_recover.application.recovery import RecoveryService
from pm2_recover.config import LOG_LEVELS, Settings, get_settings
from pm2_recover.domain.errors import ReconstructionError, SnapshotError
from pm2_recover.domain.patterns.registry import PatternRegistry
from pm2_recover.infra.logging.context import bind_log_context
from pm2_recover.infra.logging.setup import configure_logging, shutdown_logging
from pm2_recover.infra.output.writer import write_plans
from pm2_recover.infra.snapshot.loader import SnapshotLoader

logger = logging.getLogger("pm2_recover")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pm2-recover",
        description="Rebuild pm2 start/stop commands from a pm2 dump file.",
    )
    parser.add_argument("-f", "--file", type=Path, help="Dump file path (default: $PM2_HOME/dump.pm2)")
    parser.add_argument("-o", "--output", type=Path, help="Write commands to this file instead of stdout")
    parser.add_argument(
        "--on-error",
        choices=["abort", "skip"],
        help="What to do when a single process cannot be rebuilt",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Diagnostic log level")
    parser.add_argument("--log-format", choices=["text", "json"], help="Diagnostic output format on stderr")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """CLI flags take precedence over environment settings."""
    overrides: dict[str, Any] = {
        "dump_file": args.file,
        "on_error": args.on_error,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    return settings.model_copy(update={key: value for key, value in overrides.items() if value is not None})


def recover(settings: Settings, output: Path | None = None) -> int:
    dump_path = settings.dump_path()
    with bind_log_context(dump_file=str(dump_path)):
        try:
            descriptors = SnapshotLoader().load(dump_path)
        except SnapshotError as exc:
            logger.error(str(exc), extra={"event": "snapshot.failed", "error_type": type(exc).__name__})
            return 1

        if not descriptors:
            logger.warning("Dump file contains no processes", extra={"event": "snapshot.empty"})

        service = RecoveryService(PatternRegistry(settings.runtime_path_markers_list()))
        try:
            result = service.build_plans(descriptors, on_error=settings.on_error)
        except ReconstructionError as exc:
            logger.error(
                str(exc),
                extra={
                    "event": "process.failed",
                    "process_name": exc.process_name,
                    "error_type": type(exc).__name__,
                },
            )
            return 1

        write_plans(result.plans, output_path=output)
        logger.info(
            "Rebuilt %s of %s processes",
            len(result.plans),
            len(descriptors),
            extra={"event": "recovery.completed"},
        )
        return 0 if result.ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    configure_logging(settings)
    try:
        return recover(settings, output=args.output)
    finally:
        shutdown_logging()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
