import logging

from rich.logging import RichHandler


def configure_logging(level = logging.INFO):
    """Send SeedFoil log records to the console through rich."""
    logger = logging.getLogger("SeedFoil")
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(rich_tracebacks = True, show_path = False))
    logger.setLevel(level)
    return logger
