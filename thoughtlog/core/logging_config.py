"""
Centralized logging configuration.

Logs go to the console and to a daily file under logs/. Every record carries
the id of the HTTP request it was emitted for (or "-" outside a request), so
one categorize or insight run can be followed from the route down to the
provider call.
"""
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime
from pathlib import Path
from typing import Optional


_logging_configured = False

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | req=%(request_id)s | %(name)s:%(lineno)d | %(message)s"


class RequestContextFilter(logging.Filter):
    """Stamps each record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def bind_request_id(request_id: Optional[str] = None) -> Token:
    """
    Set the request id for the current context.

    A short random id is generated when none is given. Pass the returned
    token to reset_request_id() once the request is finished.
    """
    return request_id_var.set(request_id or uuid.uuid4().hex[:12])


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure application-wide logging once, at startup.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            the file always captures DEBUG
        log_dir: Directory for log files. Defaults to 'logs/' in project root.

    Returns:
        Configured root logger instance
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger()

    if log_dir is None:
        log_dir = Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    context_filter = RequestContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    log_file = log_dir / f"thoughtlog_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.addFilter(context_filter)
    file_handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # requests logs every provider connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _logging_configured = True

    root_logger.debug(f"Logging configured: level={log_level}, file={log_file}")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Using OpenAI provider")
        2024-01-15 10:30:45 | INFO     | req=3f9c1a2b7d4e | thoughtlog.llm.selector:112 | Using OpenAI provider
    """
    return logging.getLogger(name)


class LoggerMixin:
    """Adds a self.logger named after the class."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)
