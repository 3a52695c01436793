"""Poll-based change detection for watch mode.

A signature is a digest over every entry the analyzer would visit, so edits
to ignored or hidden files never trigger a regeneration. Each detected change
runs the caller's callback once, as a full independent re-run.
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from typing import Callable, List, Optional

from .fs_scan import skip_reason, to_relative_path
from .ignore import GITIGNORE_NAME, load_gitignore, merge_patterns
from .model import AnalyzerConfig

logger = logging.getLogger(__name__)


def _update_digest(digest, token: str) -> None:
	digest.update(token.encode("utf-8", errors="surrogateescape"))
	digest.update(b"\0")


def _stat_token(path: str) -> str:
	try:
		st = os.stat(path)
	except FileNotFoundError:
		return "missing"
	except OSError:
		return "error"
	return f"{st.st_mtime_ns}:{st.st_size}"


def _walk(digest, dir_path: str, project_root: str, config: AnalyzerConfig, inherited: List[str]) -> None:
	local: List[str] = []
	if config.respect_gitignore:
		_update_digest(digest, f"gitignore:{_stat_token(os.path.join(dir_path, GITIGNORE_NAME))}")
		try:
			local = load_gitignore(dir_path)
		except OSError:
			_update_digest(digest, "gitignore:unreadable")
	patterns = merge_patterns(inherited, local)

	try:
		with os.scandir(dir_path) as it:
			entries = sorted(it, key=lambda e: e.name)
	except OSError:
		_update_digest(digest, f"unreadable:{dir_path}")
		return

	for entry in entries:
		rel_path = to_relative_path(project_root, entry.path)
		if skip_reason(entry.name, rel_path, patterns, config.exclude_dirs, config.exclude_paths):
			continue
		try:
			is_dir = entry.is_dir(follow_symlinks=False)
			st = entry.stat(follow_symlinks=False)
		except OSError:
			_update_digest(digest, f"error:{rel_path}")
			continue
		kind = "d" if is_dir else "f"
		_update_digest(digest, f"{kind}:{rel_path}:{st.st_mtime_ns}:{st.st_size}")
		if is_dir:
			_walk(digest, entry.path, project_root, config, patterns)


def build_watch_signature(root: str, config: Optional[AnalyzerConfig] = None) -> str:
	config = config or AnalyzerConfig()
	root = os.path.abspath(root)
	digest = hashlib.blake2b(digest_size=20)
	_update_digest(digest, f"root:{root}")
	_walk(digest, root, root, config, list(config.gitignore_patterns))
	return digest.hexdigest()


def watch(
	root: str,
	on_change: Callable[[], None],
	config: Optional[AnalyzerConfig] = None,
	interval: float = 1.0,
	max_cycles: Optional[int] = None,
	sleep: Callable[[float], None] = time.sleep,
) -> int:
	"""Poll ``root`` every ``interval`` seconds and call ``on_change`` on changes.

	Runs until interrupted, or for ``max_cycles`` polls when given. An OSError
	from ``on_change`` is logged and watching continues. Returns the number of
	times ``on_change`` was called.
	"""
	previous = build_watch_signature(root, config)
	logger.info("Watching %s for changes", os.path.abspath(root))
	cycles = 0
	runs = 0
	try:
		while max_cycles is None or cycles < max_cycles:
			sleep(interval)
			cycles += 1
			current = build_watch_signature(root, config)
			if current == previous:
				continue
			previous = current
			logger.info("Change detected, regenerating")
			runs += 1
			try:
				on_change()
			except OSError as e:
				logger.error("Regeneration failed: %s", e)
	except KeyboardInterrupt:
		logger.info("Watch stopped")
	return runs
