# core/logging_config.py
import logging
import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single console handler."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "level": level.upper(),
            "handlers": ["console"],
        },
        "loggers": {
            # SQL echo is controlled by DEBUG on the engine, keep it off the root level
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    })
