import logging

import structlog

structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
    processors=[
        # enrich
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        structlog.dev.ConsoleRenderer(),
    ],
)

# Ensure the stdlib logger named "treectx" inherits the root logger configuration.
_std_logger = logging.getLogger("treectx")
_std_logger.setLevel(logging.NOTSET)
_std_logger.propagate = True

logger: structlog.BoundLogger = structlog.get_logger("treectx")
