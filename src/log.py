import logging
import os
from logging.handlers import RotatingFileHandler

import seqlog

from core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIR = "logs"


def setup_logging_to_console(level=logging.INFO, logger=None):
    target = logger or logging.getLogger()
    target.setLevel(level)

    # logging.basicConfig may already have installed one
    if any(type(h) is logging.StreamHandler for h in target.handlers):
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    target.addHandler(handler)


def setup_logging_to_file(app: str, level=logging.INFO, logger=None):
    os.makedirs(LOG_DIR, exist_ok=True)

    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, f"{app}.log"), maxBytes=10 * 1024 * 1024, backupCount=5
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    target = logger or logging.getLogger()
    target.setLevel(level)
    target.addHandler(handler)

    if settings.SEQ_SERVER_URL:
        seqlog.log_to_seq(
            server_url=settings.SEQ_SERVER_URL,
            api_key=settings.SEQ_SERVER_API_KEY,
            level=level,
            batch_size=10,
            auto_flush_timeout=10,
            override_root_logger=True,
        )
        seqlog.set_global_log_properties(
            App=app, Environment=settings.ENVIRONMENT_NAME
        )
