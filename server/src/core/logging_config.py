"""
Logging setup for the squad creation blocker.

All plugin modules log under the `squadblock` logger; production output is
JSON when python-json-logger is installed.
"""

import logging
import logging.config
import sys
from typing import Dict, Any

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _formatter(environment: str) -> Dict[str, Any]:
    if environment.lower() != "production":
        return {"class": "logging.Formatter", "format": LOG_FORMAT, "datefmt": DATE_FORMAT}
    try:
        import pythonjsonlogger.jsonlogger  # noqa: F401
    except ImportError:
        return {
            "class": "logging.Formatter",
            "format": LOG_FORMAT + " [JSON logger not available]",
            "datefmt": DATE_FORMAT,
        }
    return {
        "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        "datefmt": DATE_FORMAT,
    }


def get_logging_config(level: str = "INFO", environment: str = "development") -> Dict[str, Any]:
    """
    Build the dictConfig for the given level and environment.

    Plugin records go to stdout; ERROR and above are repeated on stderr with
    the calling function and line.
    """
    level = level.upper()
    formatter = _formatter(environment)
    detailed = dict(
        formatter,
        format="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
    )

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter, "detailed": detailed},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": sys.stdout,
            },
            "error_console": {
                "class": "logging.StreamHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "stream": sys.stderr,
            },
        },
        "loggers": {
            "squadblock": {
                "level": level,
                "handlers": ["console", "error_console"],
                "propagate": False,
            },
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            # Host events arrive on every squad creation
            "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: str = "INFO", environment: str = "development") -> None:
    """Apply the logging configuration. Call once at startup."""
    logging.config.dictConfig(get_logging_config(level, environment))
    logging.getLogger("squadblock").info(
        "Logging configured", extra={"log_level": level, "environment": environment}
    )


def get_logger(name: str) -> logging.Logger:
    """
    Map a module name onto the `squadblock` hierarchy.

    `server.src.services.rate_limiter` becomes `squadblock.services`.
    """
    if name.startswith("squadblock"):
        return logging.getLogger(name)
    parts = name.split(".")
    if parts[:2] == ["server", "src"]:
        name = f"squadblock.{parts[2]}" if len(parts) >= 3 else "squadblock"
    else:
        name = f"squadblock.{name}"
    return logging.getLogger(name)
