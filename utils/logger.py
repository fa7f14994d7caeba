"""
Logging setup

One stream handler on the root logger, configured once per process.
Modules get their logger through get_logger(__name__).
"""

import logging
import sys

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_configured = False


def setup_logging(level='INFO'):
    """Configure root logging; later calls only adjust the level."""
    global _configured

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        # SQL echo is controlled by SQLALCHEMY_ECHO, keep the engine logger quiet
        logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
        _configured = True

    return root


def get_logger(name):
    return logging.getLogger(name)
