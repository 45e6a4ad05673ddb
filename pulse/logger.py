import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("pulse")


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the project logger.

    Safe to call more than once: handlers are only added the first time,
    later calls just adjust the level.
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
