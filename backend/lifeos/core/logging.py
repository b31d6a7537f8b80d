# backend/lifeos/core/logging.py
import logging

from lifeos.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the API process and the scripts.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # motor/pymongo are noisy at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
