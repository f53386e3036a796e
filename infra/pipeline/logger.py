import json
import logging
from datetime import datetime
from pathlib import Path


CONTEXT_FIELDS = (
    'project_id',
    'stage',
    'page',
    'progress',
    'units',
    'tool_args',
    'returncode',
    'duration_seconds',
    'error',
)


class FlushingFileHandler(logging.FileHandler):
    """FileHandler that flushes after every emit for real-time log visibility."""
    def emit(self, record):
        super().emit(record)
        self.flush()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now().astimezone().isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


class PipelineLogger:
    """Logger that writes to a single append-only JSONL file per stage.

    File handlers are created lazily on first log message to avoid
    creating empty log files when nothing is logged.
    """
    def __init__(
        self,
        project_id: str,
        stage: str,
        log_dir: Path,
        level: str = "INFO"
    ):
        self.project_id = project_id
        self.stage = stage
        self.log_dir = Path(log_dir)
        self.level = level

        # Lazy initialization - handlers created on first log
        self._logger = None
        self._initialized = False
        self.log_file = None

    def _ensure_initialized(self):
        """Initialize logger and handlers on first use."""
        if self._initialized:
            return

        logger_name = f"linerec.{self.project_id}.{self.stage}.{id(self)}"
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(getattr(logging, self.level.upper()))
        self._logger.propagate = False

        # Create log directory only when we actually need to write
        self.log_dir.mkdir(parents=True, exist_ok=True)
        json_file = self.log_dir / f"{self.stage}.jsonl"
        json_handler = FlushingFileHandler(json_file, mode='a')
        json_handler.setFormatter(JSONFormatter())
        self._logger.addHandler(json_handler)
        self.log_file = json_file

        self._initialized = True

    @property
    def logger(self):
        """Get the underlying logger, initializing if needed."""
        self._ensure_initialized()
        return self._logger

    def _log(self, level: str, message: str, exc_info=False, **kwargs):
        # Keyword arguments become record attributes; JSONFormatter picks up CONTEXT_FIELDS
        extra = {
            'project_id': self.project_id,
            'stage': self.stage,
            **kwargs
        }
        self.logger.log(getattr(logging, level.upper()), message, extra=extra, exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        self._log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log('ERROR', message, **kwargs)

    def close(self):
        # Only close if we actually initialized handlers
        if self._initialized and self._logger:
            for handler in self._logger.handlers[:]:
                handler.close()
                self._logger.removeHandler(handler)
            self._initialized = False

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass


def create_logger(project_id: str, stage: str, log_dir: Path, level: str = "INFO") -> PipelineLogger:
    return PipelineLogger(project_id, stage, log_dir=log_dir, level=level)
