import logging

ROOT_LOGGER_NAME = 'asset_tracker'
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level='INFO'):
    """Install a console handler on the package logger once and set its level."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name):
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
