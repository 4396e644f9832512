import logging

from rich.logging import RichHandler

from SeedFoil.log import configure_logging


def test_configure_logging_once():
    logger = configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)

    assert logger.name == "SeedFoil"
    assert logger.level == logging.DEBUG
    assert sum(isinstance(handler, RichHandler) for handler in logger.handlers) == 1
    assert logging.getLogger("SeedFoil.store").getEffectiveLevel() == logging.DEBUG

    logger.handlers = [handler for handler in logger.handlers if not isinstance(handler, RichHandler)]
    logger.setLevel(logging.NOTSET)
