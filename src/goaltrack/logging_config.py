"""structlog setup shared by the API process and the tests.

Stdlib loggers (``logging.getLogger(__name__)``) render through the same
processor chain, so module code never imports structlog directly.
"""

import logging
import sys

import structlog

# Keys whose values never reach a log line
SECRET_KEYS = frozenset({"access_token", "refresh_token", "password", "authorization", "apikey"})

# The Supabase client stack logs every HTTP round trip and socket frame at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "realtime", "websockets")


def redact_secrets(logger, method_name: str, event_dict: dict) -> dict:
    for key in event_dict.keys() & SECRET_KEYS:
        event_dict[key] = "[redacted]"
    return event_dict


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Route stdlib and structlog records through one formatter on stdout.

    JSON lines when ``json_output`` is set, coloured console output otherwise.
    """
    chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=chain,
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(
    trace_id: str,
    user_id: str | None = None,
    workspace_id: str | None = None,
) -> None:
    """Attach request identifiers to every record logged in this task."""
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id,
        **{k: v for k, v in (("user_id", user_id), ("workspace_id", workspace_id)) if v},
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
