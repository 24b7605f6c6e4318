"""
Process-wide logging setup.

One stdout handler on the root logger; gunicorn / uvicorn capture stdout, so
nothing is written to files here. Modules log through
`logging.getLogger(__name__)`.
"""
from __future__ import annotations

import logging.config

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": _FORMAT},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "default",
            },
        },
        "root": {
            "level": level.upper(),
            "handlers": ["stdout"],
        },
    })
