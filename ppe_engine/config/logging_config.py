"""
Logging setup for the engine.

Records go to stdout either as JSON lines (the default) or as a plain
one-line console format when running in debug mode. Level and format come
from EngineSettings, which reads LOG_LEVEL / LOG_FORMAT from the environment.
"""
import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Optional

from ppe_engine.config.params import EngineSettings


def get_logging_config(debug: bool = False, settings: Optional[EngineSettings] = None) -> dict:
    """Build a dictConfig mapping for the ``ppe_engine`` logger tree."""
    settings = settings or EngineSettings.from_env()
    log_level = settings.log_level or ("DEBUG" if debug else "INFO")
    log_format = settings.log_format or ("console" if debug else "json")

    if log_format == "json":
        formatters = {"json": {"()": "ppe_engine.config.logging_config.JsonFormatter"}}
        formatter = "json"
    else:
        formatters = {
            "verbose": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        }
        formatter = "verbose"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "ppe_engine": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }


def configure_logging(debug: bool = False, settings: Optional[EngineSettings] = None) -> None:
    logging.config.dictConfig(get_logging_config(debug, settings))


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    Besides timestamp / level / logger / message, the register context the
    engine passes through ``extra=`` (operation, company and asset ids) is
    lifted to the top level so log lines can be filtered per company.
    """

    context_fields = ("operation", "company_id", "asset_id")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self.context_fields:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)
