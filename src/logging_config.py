import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Transport libraries log every packet at INFO
NOISY_LOGGERS = ("socketio", "engineio", "uvicorn.access")


def _build_handlers(level: int, log_dir: Optional[Path]) -> List[logging.Handler]:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    handlers: List[logging.Handler] = [console_handler]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        # 5MB per file, keep 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "draft_room.log", maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    return handlers


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """Configure root logging for the draft room server.

    Logs go to the console and, when ``log_dir`` is given, to a rotating
    ``draft_room.log`` there. Calling this again is a no-op.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(level, Path(log_dir) if log_dir else None):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
