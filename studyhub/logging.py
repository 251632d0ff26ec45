import logging
import sys

from studyhub.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Storage SDKs log every HTTP request at INFO.
QUIET_LOGGERS = ("httpx", "botocore", "urllib3", "uvicorn.access")

APP_LOGGER_PREFIXES = ("studyhub", "web")


def _formatter() -> logging.Formatter:
    if not settings.log_json:
        return logging.Formatter(TEXT_FORMAT)

    from pythonjsonlogger.json import JsonFormatter

    return JsonFormatter(
        fmt=JSON_FORMAT,
        rename_fields={"asctime": "timestamp", "levelname": "level"},
        static_fields={"service": "studyhub"},
    )


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    Level and format come from ``LOG_LEVEL`` and ``LOG_JSON``.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def reconfigure() -> None:
    """Restore logging after Alembic's ``fileConfig``.

    ``fileConfig`` swaps the root handlers and disables every logger that
    already exists, which silences module-level loggers imported before
    the migrations ran.
    """
    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(existing, logging.Logger) and name.startswith(APP_LOGGER_PREFIXES):
            existing.disabled = False
    configure_logging()
