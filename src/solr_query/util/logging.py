"""Logger helpers.

Library modules only create loggers; handlers are installed by the CLI
(or by the embedding application).
"""

from __future__ import annotations

import logging

_ROOT = "solr_query"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``solr_query``."""
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send ``solr_query`` log records to stderr at ``level``."""
    logger = logging.getLogger(_ROOT)
    logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


logging.getLogger(_ROOT).addHandler(logging.NullHandler())
