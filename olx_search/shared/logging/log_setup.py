"""
Centralized logging configuration using structlog with colorful console output.
"""

import atexit
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import colorama
import structlog
from structlog.dev import Column, ConsoleRenderer, KeyValueColumnFormatter

LEVEL_NUMBERS = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
    "critical": 50,
}


def _column(key: str, value_style: str) -> Column:
    """Console column that hides the key and colors the value."""
    return Column(
        key,
        KeyValueColumnFormatter(
            key_style=None,
            value_style=value_style,
            reset_style=colorama.Style.RESET_ALL,
            value_repr=str,
        ),
    )


def build_log_file_path(log_dir: str) -> Path:
    """
    Build a timestamped log file path.
    
    Args:
        log_dir: Directory receiving the log file
        
    Returns:
        Path like <log_dir>/olx-search_2024-05-01_12-30-00.log
    """
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return Path(log_dir) / f"olx-search_{stamp}.log"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the application.
    
    Console output is colorful key/value lines on stderr. When a log file is
    given, events are written there as JSON lines instead, keeping stdout and
    stderr free for results.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for log output
    """
    # initialize colorama for cross-platform color support (especially Windows)
    colorama.init()
    
    current_log_level = getattr(logging, log_level.upper())
    
    def add_logger_info(logger, name, event_dict):
        """Add level and logger name, which WriteLogger does not provide."""
        event_dict["level"] = name.upper()
        event_dict["logger"] = event_dict.pop("logger_name", None) or "app"
        return event_dict
    
    def level_filter(logger, name, event_dict):
        """Filter events based on log level."""
        if LEVEL_NUMBERS.get(name.lower(), 20) < current_log_level:
            raise structlog.DropEvent
        return event_dict
    
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        processors = [
            level_filter,
            add_logger_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ]
        log_stream = open(log_file, "a", encoding="utf-8")
        atexit.register(log_stream.close)
        logger_factory = structlog.WriteLoggerFactory(file=log_stream)
    else:
        console_renderer = ConsoleRenderer(
            columns=[
                _column("level", colorama.Style.BRIGHT + colorama.Fore.WHITE),
                _column("timestamp", colorama.Fore.YELLOW),
                _column("logger", colorama.Fore.CYAN),
                _column("event", colorama.Style.BRIGHT + colorama.Fore.MAGENTA),
                # catch-all for other fields
                Column(
                    "",
                    KeyValueColumnFormatter(
                        key_style=colorama.Style.DIM + colorama.Fore.CYAN,
                        value_style=colorama.Fore.GREEN,
                        reset_style=colorama.Style.RESET_ALL,
                        value_repr=str,
                    ),
                ),
            ]
        )
        processors = [
            level_filter,
            add_logger_info,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            console_renderer,
        ]
        logger_factory = structlog.WriteLoggerFactory(file=sys.stderr)
    
    structlog.configure(
        processors=processors,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )
    
    if log_file:
        get_logger(__name__).info(
            "log_file_created",
            path=log_file,
            python=sys.version.split()[0],
            platform=sys.platform,
            args=" ".join(sys.argv),
        )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.
    
    Args:
        name: Logger name (usually __name__)
        
    Returns:
        Logger bound to the short module name
    """
    # lazy proxy: configuration is resolved on first use
    return structlog.get_logger(logger_name=name.split(".")[-1])


def log_scraping_progress(
    logger: structlog.BoundLogger,
    action: str,
    page: Optional[int] = None,
    total_pages: Optional[int] = None,
    items_found: Optional[int] = None,
    **extra_context: Any
) -> None:
    """
    Log scraping progress with structured data.
    
    Args:
        logger: Logger instance
        action: Action being performed
        page: Current page number
        total_pages: Total pages to scrape
        items_found: Number of items found
        **extra_context: Additional context data
    """
    context = {"action": action}
    
    if page is not None:
        context["page"] = str(page)
    if total_pages is not None:
        context["total_pages"] = str(total_pages)
        if page is not None:
            context["progress"] = f"{page}/{total_pages}"
    if items_found is not None:
        context["items_found"] = str(items_found)
    
    context.update(extra_context)
    
    logger.info("scraping_progress", **context)
