from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
	"""
	Configure the package logger once. Calling it again only adjusts the level.
	"""
	logger = logging.getLogger("jtlstats")
	logger.setLevel(level)

	if not logger.handlers:
		handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
		handler.setFormatter(logging.Formatter(LOG_FORMAT))
		logger.addHandler(handler)

	for handler in logger.handlers:
		handler.setLevel(level)

	return logger
