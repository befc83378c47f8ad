#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/

from logging.config import dictConfig
import structlog
from typing import Any

from .configuration import EnvfConfiguration

ENVF_LOG = "envf"
_logger = None
pre_chain = [
    # Add the log level to the event_dict if the log entry is not from structlog.
    structlog.stdlib.add_log_level,
]


def render_diagnostic(_, __, event_dict: dict) -> str:
    """
    Render an event as `LEVEL: message`, the way envf talks to the terminal.
    Any extra bound keys follow as key=value pairs.
    """
    level = str(event_dict.pop("level", "info")).upper()
    event = event_dict.pop("event", "")
    extras = " ".join(f"{k}={v}" for k, v in event_dict.items() if not k.startswith("_"))
    if extras:
        return f"{level}: {event} {extras}"
    return f"{level}: {event}"


def logging_config(configuration: EnvfConfiguration) -> dict[str, Any]:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'envf-formatter': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': render_diagnostic,
                'foreign_pre_chain': pre_chain,
            },
            'jsonformatter': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.processors.JSONRenderer(sort_keys=False),
                'foreign_pre_chain': pre_chain,
            },
        },
        'handlers': {
            'structlog-console': {
                'level': 'DEBUG',
                'formatter': 'jsonformatter' if configuration.log_format == "json" else 'envf-formatter',
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stderr',  # stdout belongs to the launched command
            },
        },
        'loggers': {
            ENVF_LOG: {
                'handlers': ['structlog-console'],
                'level': configuration.logging_level,
                'propagate': False
            },
        },
    }


def init_logging(configuration: EnvfConfiguration | None = None):
    global _logger
    if _logger is not None:
        return _logger

    configuration = configuration or EnvfConfiguration()
    dictConfig(logging_config(configuration))
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,            # filter first: most runs log nothing
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),    # Include the stack when stack_info=True
            structlog.processors.format_exc_info,        # Include the exception when exc_info=True
            structlog.processors.UnicodeDecoder(),       # Decodes the unicode values in any kv pairs
            # this must be the last one if further customizing formats below...
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,                 # structlog.testing.capture_logs() needs uncached loggers
    )

    _logger = structlog.get_logger(ENVF_LOG)
    _logger.debug("Initialized logging for envf", logging_level=configuration.logging_level)
    return _logger


def get_logger():
    return structlog.get_logger(ENVF_LOG)
