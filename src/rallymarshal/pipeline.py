"""End-to-end run: load configuration, read marshal data, compile results."""

from __future__ import annotations

from rallymarshal._logging import get_logger
from rallymarshal.compiler import ResultCompiler
from rallymarshal.config import load_rally_config
from rallymarshal.events import DiagnosticEvent, DiagnosticSink, EventKind, LoggingSink
from rallymarshal.models.result import CarResult
from rallymarshal.reader import MarshalDataReader
from rallymarshal.settings import Settings
from rallymarshal.storage import FileStore, LocalFileStore

logger = get_logger(__name__)


def run_pipeline(
    settings: Settings,
    *,
    store: FileStore | None = None,
    sink: DiagnosticSink | None = None,
) -> list[CarResult]:
    """Run the full pipeline and return one result per car.

    Raises:
        RallyDataError: On the first configuration or data error. No results
            are produced in that case.
    """
    store = store or LocalFileStore()
    sink = sink or LoggingSink(logger)

    sink.emit(DiagnosticEvent.of(EventKind.APP_STARTING, app_name=settings.app_name))
    try:
        config = load_rally_config(store, settings.config_path, sink)

        reader = MarshalDataReader(sink, car_code_prefix=settings.car_code_prefix)
        records = reader.read_file(store, settings.marshal_data_path, config.checkpoints).unwrap()

        return ResultCompiler(sink).compile(config, records)
    finally:
        sink.emit(DiagnosticEvent.of(EventKind.APP_SHUTTING_DOWN))
