"""
Logging Configuration for geocalc.

The numerical engine (`geospatial`, `sampling`) never logs: it reports
everything through `GeoResult` values. Logging is for the layers around it,
the command line front end, which traces what it does at DEBUG and
reports failures at ERROR.
"""

import logging
import sys

_configured_loggers = set()


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for geocalc.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    _configured_loggers.add(name)
    return logger


def level_from_verbosity(verbose: int) -> int:
    """Map a -v/-q counter to a logging level.

    Parameters
    ----------
    verbose : int
        Number of -v flags minus number of -q flags.

    Returns
    -------
    int
        DEBUG for positive values, WARNING for negative values, INFO otherwise.
    """
    if verbose > 0:
        return logging.DEBUG
    if verbose < 0:
        return logging.WARNING
    return logging.INFO


def set_verbosity(verbose: int) -> None:
    """Apply a -v/-q counter to every logger created by `get_logger`."""
    level = level_from_verbosity(verbose)
    for name in _configured_loggers:
        logging.getLogger(name).setLevel(level)
