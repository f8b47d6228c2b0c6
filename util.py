"""Utility functions for the metronome programs."""

import logging
import os
import time
from typing import List, Optional  # pylint: disable=unused-import

LOG_FORMAT = "%(asctime)s %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Optional[str] = None,
                  level: int = logging.INFO) -> None:
    """
    Initializes logging to stdout and, optionally, to a file.

    Parameters:
        log_dir: If given, a directory to create and write metronome.log into
        level: The logging level for the root logger

    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        os.mkdir(log_dir)
        handlers.append(logging.FileHandler(os.path.join(log_dir, "metronome.log")))

    logger = logging.getLogger()
    logger.setLevel(level)
    logging.Formatter.converter = time.gmtime
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
