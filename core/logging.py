# infergate/core/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager, get_config_manager

DEFAULT_FORMAT = "%(levelname)s - %(asctime)s - %(name)s - %(module)s:%(lineno)d - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ACCESS_LOGGER_NAME = "infergate.access"

access_logger = logging.getLogger(ACCESS_LOGGER_NAME)


def _build_handlers(config: ConfigManager, formatter: logging.Formatter) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    file_path = config.get_config("logging.file.path")
    if file_path:
        log_file = Path(file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=config.get_config("logging.file.max_bytes", 5 * 1024 * 1024),
            backupCount=config.get_config("logging.file.backup_count", 5),
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Optional[ConfigManager] = None):
    """
    Configures the ``infergate`` logger tree from the ``server.log_level`` and
    ``logging`` sections. Calling it again replaces the previous handlers.

    Request outcomes go to ``infergate.access``; ``logging.access_level`` sets
    its level independently (defaults to the application level).
    """
    config = config or get_config_manager()
    level_name = str(config.get_config("server.log_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(
        config.get_config("logging.format", DEFAULT_FORMAT),
        datefmt=config.get_config("logging.date_format", DEFAULT_DATE_FORMAT),
    )

    app_logger = logging.getLogger("infergate")
    app_logger.setLevel(level)
    app_logger.handlers = _build_handlers(config, formatter)

    access_level_name = str(config.get_config("logging.access_level", level_name)).upper()
    access_logger.setLevel(getattr(logging, access_level_name, level))

    # Uvicorn's own access log duplicates infergate.access
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    app_logger.info(f"Logging configured: level={level_name}, handlers={len(app_logger.handlers)}.")


def log_request_outcome(method: str,
                        path: str,
                        status_code: int,
                        code: Optional[str] = None,
                        task: Optional[str] = None,
                        model: Optional[str] = None) -> None:
    """One line per answered request; errors at WARNING from 500 up, the rest at INFO."""
    fields = [f"method={method}", f"path={path}", f"status={status_code}"]
    if code:
        fields.append(f"code={code}")
    if task:
        fields.append(f"task={task}")
    if model:
        fields.append(f"model={model}")
    level = logging.WARNING if status_code >= 500 else logging.INFO
    access_logger.log(level, " ".join(fields))
