import logging
import os
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# third-party loggers that flood DEBUG output
QUIET_LOGGERS = {
    "urllib3": logging.WARNING,
    "django.db.backends": logging.INFO,
    "asyncio": logging.WARNING,
}


def _add_service(_, __, event_dict):
    event_dict.setdefault("service", "medtrack")
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """
    Route structlog and stdlib logging through one ProcessorFormatter.

    JSON lines when `json_logs` (or the JSON_LOGS env var) is set, coloured
    console output otherwise. Call it before anything creates a logger:
    loggers are cached on first use.
    """
    if json_logs is None:
        json_logs = bool(os.getenv("JSON_LOGS", ""))
    level = level.upper()

    # shared by structlog events and foreign (stdlib) records
    pre_chain = [
        structlog.contextvars.merge_contextvars,     # request_id, method, path
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service,
    ]

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(quiet_level, logging.getLevelName(level)))

    logging.captureWarnings(True)
