import logging
from datetime import datetime

from kpca.config import DATA_DIR, LOG_LEVEL


def setup_logger(name="kpca", log_to_file=False, level=None):
    logger = logging.getLogger(name)
    logger.setLevel(level or LOG_LEVEL)

    formatter = logging.Formatter(
        "%(asctime)s — %(levelname)s — %(message)s"
    )

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_to_file:
            DATA_DIR.mkdir(parents=True, exist_ok=True)
            log_path = DATA_DIR / f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
