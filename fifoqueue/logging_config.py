"""
Logging configuration for applications embedding fifoqueue.

The library itself never configures logging; callers pass this to
logging.config.dictConfig.
"""

import logging
from typing import Any, Dict


class DrainRoundFilter(logging.Filter):
    """Filter to suppress per-round auto-dequeue debug logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Drop per-round debug records from the auto-dequeue loop."""
        if record.name == "fifoqueue.modules.queue.auto_dequeue" and record.levelno == logging.DEBUG:
            return "round" not in record.getMessage()
        return True


def get_logging_config(level: str = "INFO", quiet_rounds: bool = True) -> Dict[str, Any]:
    """Get logging configuration for the fifoqueue logger."""
    filters = ["drain_round_filter"] if quiet_rounds else []

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "drain_round_filter": {
                "()": DrainRoundFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": filters
            }
        },
        "loggers": {
            "fifoqueue": {
                "handlers": ["default"],
                "level": level.upper(),
                "propagate": False
            }
        }
    }
