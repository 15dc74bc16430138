"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Logging setup
- Console output formatting
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from constants import LoggingConfig
from core.validators import InputValidator

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "process", "processName", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Extra fields supplied via `extra=`
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []
_LOGGING_SIGNATURE: Optional[Tuple[Any, ...]] = None
_LAST_LOG_FILE: Optional[str] = None


def get_default_config_path() -> str:
    """Return config.json in the project root (src/app/cli/helpers.py -> project root)."""
    project_root = Path(__file__).parent.parent.parent.parent
    return str(project_root / "config.json")


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _coerce_positive_int(value: Any, default: int) -> int:
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _create_file_handler(path: str, rotation_enabled: bool, max_bytes: int, backup_count: int) -> Handler:
    if rotation_enabled and max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=max(backup_count, 1),
            encoding='utf-8'
        )
    return logging.FileHandler(path, encoding='utf-8')


def _open_log_file(file_path: str, formatter: logging.Formatter, **handler_options: Any) -> Tuple[Optional[Handler], Optional[str]]:
    """
    Open a log file handler, falling back to the temp dir and then the home dir.

    Returns:
        (handler, path) or (None, None) if no location is writable.
    """
    log_filename = os.path.basename(file_path) or LoggingConfig.DEFAULT_LOG_FILENAME
    fallback_locations = [
        file_path,
        os.path.join(tempfile.gettempdir(), log_filename),
        os.path.join(Path.home(), log_filename),
    ]
    for fallback_path in fallback_locations:
        try:
            log_dir = os.path.dirname(fallback_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handler = _create_file_handler(fallback_path, **handler_options)
        except OSError as exc:
            print(f"  Could not create log at {fallback_path}: {exc}", file=sys.stderr)
            continue
        handler.setFormatter(formatter)
        if fallback_path != file_path:
            print(f"Note: Using fallback log file: {fallback_path}", file=sys.stderr)
        return handler, fallback_path

    print("Warning: Could not write log file to any location; logging to console only", file=sys.stderr)
    return None, None


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    Console output goes to stderr so that commands can write results to
    stdout. Explicit `level` and `log_file` arguments win over the "logging"
    section of the configuration.

    Args:
        level: Log level.
        log_file: Log file path; None for console only unless configured.
        config: Optional logging configuration dictionary.
        include_console: If False, skip adding a console handler.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    global _LOGGING_SIGNATURE, _LAST_LOG_FILE

    config_dict = dict(config or {})

    resolved_level = str(level or config_dict.get('level') or LoggingConfig.DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt=config_dict.get('pattern') or LoggingConfig.LOG_FORMAT,
            datefmt=config_dict.get('date_format', LoggingConfig.DATE_FORMAT),
        )

    rotation_cfg = config_dict.get('rotation') if isinstance(config_dict.get('rotation'), dict) else {}
    rotation_enabled = rotation_cfg.get('enabled')
    if rotation_enabled is None:
        rotation_enabled = bool(file_path) and LoggingConfig.ROTATION_ENABLED
    max_bytes = _coerce_positive_int(
        rotation_cfg.get('max_mb', LoggingConfig.MAX_LOG_FILE_MB), LoggingConfig.MAX_LOG_FILE_MB
    ) * 1024 * 1024
    backup_count = _coerce_positive_int(
        rotation_cfg.get('backup_count', LoggingConfig.LOG_BACKUP_COUNT), LoggingConfig.LOG_BACKUP_COUNT
    )

    signature = (log_level, file_path, format_style, include_console, rotation_enabled, max_bytes, backup_count)
    if _LOGGING_SIGNATURE == signature and _MANAGED_HANDLERS:
        return _LAST_LOG_FILE

    handlers: List[Handler] = []
    actual_log_file = None

    if file_path:
        file_handler, actual_log_file = _open_log_file(
            file_path,
            formatter,
            rotation_enabled=bool(rotation_enabled),
            max_bytes=max_bytes,
            backup_count=backup_count,
        )
        if file_handler:
            handlers.append(file_handler)

    if include_console or not handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)

    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    _LOGGING_SIGNATURE = signature
    _LAST_LOG_FILE = actual_log_file

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")

    return actual_log_file


def load_config(config_path: str, strict_security: bool = False) -> Dict[str, Any]:
    """
    Load configuration from a JSON file with security validation.

    Args:
        config_path: Path to the configuration file.
        strict_security: If True, the file must live inside the working directory.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty or file contains invalid JSON.
        FileNotFoundError: If the configuration file doesn't exist.
        PermissionError: If the file cannot be read.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    try:
        validated_path = InputValidator.validate_config_file_path(
            config_path,
            restrict_to_cwd=strict_security,
        )
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a config.json file or specify one with --config"
        )

    try:
        with open(validated_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {validated_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {validated_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config)}")

    return config


def print_header(title: str, width: int = 60) -> None:
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")


def format_count_summary(items: Dict[str, int], prefix: str = "  ") -> str:
    """Format a dictionary of counts for display, largest first."""
    lines = []
    for name, count in sorted(items.items(), key=lambda x: -x[1]):
        lines.append(f"{prefix}{name}: {count}")
    return "\n".join(lines)
