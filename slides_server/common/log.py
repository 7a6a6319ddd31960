import logging

from slides_server.core.conf import settings

log = logging.getLogger('slides_server')


def setup_logging() -> None:
    """Configure root logging once for the process."""
    level = settings.LOG_LEVEL.upper()

    logging.basicConfig(level=level, format=settings.LOG_FORMAT)

    if level in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
        log.setLevel(level)

    # Suppress verbose client and driver logs
    for name in settings.LOG_QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
