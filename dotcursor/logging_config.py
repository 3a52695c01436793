from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

_CONFIGURED_FLAG_ATTR = "_dotcursor_configured"


@dataclass(frozen=True)
class LoggingConfig:
	level: str = "INFO"
	fmt: str = "%(levelname)s | %(message)s"
	datefmt: str = "%Y-%m-%d %H:%M:%S"


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
	"""Attach a single stderr handler to the root logger.

	Repeated calls only adjust the level unless ``force`` is set.
	"""
	root = logging.getLogger()
	level = logging.getLevelName(cfg.level.upper())
	if not isinstance(level, int):
		level = logging.INFO
	root.setLevel(level)

	if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
		return root

	for handler in list(root.handlers):
		if getattr(handler, _CONFIGURED_FLAG_ATTR, False):
			root.removeHandler(handler)

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter(cfg.fmt, datefmt=cfg.datefmt))
	setattr(handler, _CONFIGURED_FLAG_ATTR, True)
	root.addHandler(handler)
	setattr(root, _CONFIGURED_FLAG_ATTR, True)
	return root
