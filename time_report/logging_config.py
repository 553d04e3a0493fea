import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING, logger_name: str = "time_report") -> None:
    """Configure console logging for the report commands

    Args:
        level: Threshold for the package logger
        logger_name: Logger that receives the console handler

    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Console handler, added once per process
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
