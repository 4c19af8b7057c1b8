"""
Structured JSON logging shared by the classifier, the model client and web retrieval.

Records go to rotating files under LOG_DIR:
- app.log    INFO and above
- error.log  ERROR and above
- debug.log  everything, only when LOG_LEVEL=DEBUG

Structured fields ride along via extra={"extra_fields": {...}}. Queries, page
URLs and model answers can be long, so string fields are clipped to
MAX_FIELD_CHARS before they are written.
"""

import json
import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

MAX_FIELD_CHARS = 200

# Top-level package -> component tag on every record
_COMPONENTS = {
    "orchestrator": "classifier",
    "api": "model",
    "tools": "web",
    "config": "config",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _clip(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
        return value[:MAX_FIELD_CHARS] + "..."
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "component": _COMPONENTS.get(record.name.split(".", 1)[0], "app"),
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        fields = getattr(record, "extra_fields", None)
        if isinstance(fields, dict):
            entry.update({key: _clip(value) for key, value in fields.items()})

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


@dataclass(frozen=True)
class LogSettings:
    """Logging knobs, read from LOG_DIR, LOG_LEVEL, LOG_TO_FILE and LOG_TO_CONSOLE."""

    log_dir: Path = Path("logs")
    level: str = "INFO"
    to_file: bool = True
    to_console: bool = False
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            to_file=_env_flag("LOG_TO_FILE", "true"),
            to_console=_env_flag("LOG_TO_CONSOLE", "false"),
        )


class LoggerConfig:
    """Installs handlers on the root logger once per process."""

    settings: LogSettings | None = None
    _handlers: list[logging.Handler] = []

    @classmethod
    def _rotating(cls, filename: str, level: int) -> logging.Handler:
        settings = cls.settings
        handler = logging.handlers.RotatingFileHandler(
            settings.log_dir / filename,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(JsonFormatter())
        return handler

    @classmethod
    def setup_logging(cls, settings: LogSettings | None = None, force: bool = False) -> None:
        """
        Configure the root logger.

        Args:
            settings: Explicit settings; read from the environment when omitted
            force: Reconfigure even if logging was already set up
        """
        if cls.settings is not None and not force:
            return

        cls.settings = settings or LogSettings.from_env()
        level = getattr(logging, cls.settings.level, logging.INFO)

        root = logging.getLogger()
        root.setLevel(level)
        # only remove what was installed here
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()
        cls._handlers = []

        if cls.settings.to_file:
            cls.settings.log_dir.mkdir(parents=True, exist_ok=True)
            cls._handlers.append(cls._rotating("app.log", logging.INFO))
            cls._handlers.append(cls._rotating("error.log", logging.ERROR))
            if level == logging.DEBUG:
                cls._handlers.append(cls._rotating("debug.log", logging.DEBUG))

        if cls.settings.to_console:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(logging.ERROR)
            console.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
            cls._handlers.append(console)

        for handler in cls._handlers:
            root.addHandler(handler)

        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger, configuring logging on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Using snippet", extra={"extra_fields": {"url": "https://example.com"}})
    """
    LoggerConfig.setup_logging()
    return logging.getLogger(name)
