import logging
import sys


def setup_logging(level=logging.INFO):
    """ Attaches a console handler to the `symquad` logger.

    Earlier handlers are removed, so calling this twice does not duplicate
    the output.
    """
    logger = logging.getLogger('symquad')
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                          datefmt='%H:%M:%S'))
    logger.addHandler(handler)
    return logger
