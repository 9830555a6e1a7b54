import logging
import os
import sys
from logging import handlers


__all__ = ['LOGGER_NAME', 'setup_logger']

LOGGER_NAME = 'pmt_sipm_waveform'


def setup_logger(log_dir=None, level=logging.INFO, name=LOGGER_NAME):
    """Configure the package logger: stderr, plus a rotating file if asked."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    # Replace handlers from an earlier call (e.g. a second CLI run in-process)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(fmt)
    sh.setLevel(level)
    logger.addHandler(sh)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, f'{name}.log')
        fh = handlers.RotatingFileHandler(
            log_path, maxBytes=2*1024*1024, backupCount=3, encoding='utf-8'
        )
        fh.setFormatter(fmt)
        fh.setLevel(level)
        logger.addHandler(fh)
    return logger
