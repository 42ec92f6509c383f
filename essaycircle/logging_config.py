# essaycircle/logging_config.py
# -*- coding: utf-8 -*-
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure le logging racine une seule fois (idempotent)."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
    # httpx logue chaque requête en INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
