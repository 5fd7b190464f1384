
import logging
import os

from filedrop.core.config import settings

def configure_logging():
    logger = logging.getLogger()
    if logger.hasHandlers():
        return
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    fh = logging.FileHandler(os.path.join(settings.LOG_DIR, "app.log"))
    fh.setFormatter(fmt)
    fh.setLevel(level)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(level)

    logger.addHandler(fh)
    logger.addHandler(ch)
