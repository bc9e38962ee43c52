"""Command line entry point: ``python -m rallymarshal``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter

from rallymarshal._logging import configure_logging, get_logger
from rallymarshal.events import DiagnosticEvent, DiagnosticSink, EventKind, LoggingSink
from rallymarshal.exceptions import RallyDataError
from rallymarshal.models.result import CarResult
from rallymarshal.pipeline import run_pipeline
from rallymarshal.settings import Settings
from rallymarshal.storage import FileStore

logger = get_logger(__name__)

_RESULTS_ADAPTER = TypeAdapter(list[CarResult])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rallymarshal",
        description="Validate marshal point scan data and compile per-car results.",
    )
    parser.add_argument("--config", help="Rally configuration JSON file")
    parser.add_argument("--data", help="Marshal data CSV file")
    parser.add_argument("--output", help="Write results JSON here instead of stdout")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    store: FileStore | None = None,
    sink: DiagnosticSink | None = None,
) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in {
            "config_path": args.config,
            "marshal_data_path": args.data,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    settings = Settings(**overrides)
    configure_logging(settings.log_level, settings.log_file)
    sink = sink or LoggingSink(logger)

    try:
        results = run_pipeline(settings, store=store, sink=sink)
    except RallyDataError as exc:
        logger.error("Run failed: %s", exc)
        return 1
    except Exception as exc:
        sink.emit(DiagnosticEvent.of(EventKind.UNHANDLED_EXCEPTION, message=str(exc)))
        logger.debug("Unhandled exception", exc_info=True)
        return 1

    payload = _RESULTS_ADAPTER.dump_json(results, indent=2)
    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(payload)
        logger.info("Wrote %d results to %s", len(results), output)
    else:
        sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
