import logging
import json
import os
from pathlib import Path
import threading

from flask import has_request_context, request


ROOT_LOGGER_NAME = "warehouse_admin"


class SingletonLogger:
    """
    Singleton logger that configures the application's root logger once per process.
    Named loggers handed out by get_logger() are children of it and share its handlers.
    """
    _instance = None
    _lock = threading.Lock()
    _logger = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SingletonLogger, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            with self._lock:
                if not self._initialized:
                    self._logger = None
                    self._initialized = True

    def get_logger(self, name: str = ROOT_LOGGER_NAME) -> logging.Logger:
        """
        Get a logger attached to the configured application root logger.

        Args:
            name (str): Dotted logger name. Names outside the "warehouse_admin"
                namespace are nested under it.

        Returns:
            logging.Logger: The named logger
        """
        if self._logger is None:
            with self._lock:
                if self._logger is None:
                    self._logger = self._create_logger()

        if not name or name == ROOT_LOGGER_NAME:
            return self._logger
        if not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        return logging.getLogger(name)

    def _create_logger(self) -> logging.Logger:
        """
        Create the root application logger with file and console handlers.

        Returns:
            logging.Logger: Configured logger instance
        """
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # Clear any existing handlers
        logger.handlers.clear()

        formatter = JsonFormatter()

        logs_dir = Path(os.environ.get("LOG_DIR", "logs"))
        logs_dir.mkdir(parents=True, exist_ok=True)

        # Fixed filenames, cleared on each run
        file_handler = logging.FileHandler(logs_dir / "warehouse_admin.log", mode='w', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        error_file_handler = logging.FileHandler(logs_dir / "errors.log", mode='w', encoding='utf-8')
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(formatter)
        logger.addHandler(error_file_handler)

        console_level = os.environ.get("LOG_LEVEL", "DEBUG").upper()
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level, logging.DEBUG))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        return logger


class JsonFormatter(logging.Formatter):
    """
    One JSON object per log record.

    `fields` maps output keys to LogRecord attributes. Records logged while a
    Flask request is active also carry "request" ("GET /dashboard/imports"),
    so gate and dashboard entries can be traced back to the page.
    """

    DEFAULT_FIELDS = {
        "timestamp": "asctime",
        "level": "levelname",
        "logger": "name",
        "function": "funcName",
        "line": "lineno",
        "message": "message",
    }

    def __init__(self, fields: dict = None):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")
        self.fields = dict(fields) if fields is not None else dict(self.DEFAULT_FIELDS)

    def format(self, record) -> str:
        record.message = record.getMessage()
        if "asctime" in self.fields.values():
            record.asctime = self.formatTime(record, self.datefmt)

        payload = {key: getattr(record, attr) for key, attr in self.fields.items()}

        if has_request_context():
            payload["request"] = f"{request.method} {request.path}"
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger from the singleton logging setup.

    Args:
        name (str): Logger name, e.g. "warehouse_admin.auth"

    Returns:
        logging.Logger: Logger sharing the application handlers
    """
    return SingletonLogger().get_logger(name)
