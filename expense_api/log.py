import logging

LOG_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s:  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level="INFO"):
    """Configure the root logger.

    Args:
        level (str | int): A standard logging level name or number.

    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        raise ValueError("Invalid logging level. Use one of the standard logging levels, e.g. INFO.")

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)
