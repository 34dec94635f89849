import os
import sys
import logging

from yt_normalizer.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = str(config.LOG_DIR)
loging_path = os.path.join(logging_dir, "ytnormalizer.log")
if not os.path.exists(logging_dir):
    os.makedirs(logging_dir)

logger = logging.getLogger('ytnormalizer')
if not logger.handlers:
    formatter = logging.Formatter(logging_str)
    for handler in (logging.FileHandler(loging_path), logging.StreamHandler(sys.stdout)):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
    logger.propagate = False

logging = logger
