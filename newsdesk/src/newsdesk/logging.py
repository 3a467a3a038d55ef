import logging
import os
import sys

DEFAULT_FORMAT = '[%(levelname)s] %(name)s: %(message)s'

def configure_logging(level=None):
    """
    Configure logging to stderr.
    ``level`` falls back to $NEWSDESK_LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.environ.get("NEWSDESK_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    if root_logger.handlers:
        root_logger.handlers.clear()

    root_logger.addHandler(handler)

    # HTTP client noise
    logging.getLogger("urllib3").setLevel(logging.WARNING)
