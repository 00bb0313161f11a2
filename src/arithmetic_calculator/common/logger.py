"""Package-wide logger."""
import logging
import os


LOG_LEVEL_ENV: str = "ARITHMETIC_CALCULATOR_LOG_LEVEL"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger() -> logging.Logger:
    """
    Create the package logger with a single stream handler.

    The level comes from the ARITHMETIC_CALCULATOR_LOG_LEVEL environment variable
    and falls back to WARNING when it is unset or unknown.

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger("arithmetic_calculator")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)

    level_name: str = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    log.setLevel(getattr(logging, level_name, logging.WARNING))
    return log


logger: logging.Logger = _build_logger()


def set_verbose(verbose: bool) -> None:
    """Switch the package logger to DEBUG, or back to the environment default."""
    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        _build_logger()
