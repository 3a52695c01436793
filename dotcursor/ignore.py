"""Gitignore-style pattern loading and matching.

Patterns are matched against project-root-relative paths with forward slashes.
Every pattern may match at any depth; a trailing ``/`` marks a directory
pattern that also covers everything nested under a directory of that name.
Negation (``!pattern``) is not supported.
"""

from __future__ import annotations

import functools
import logging
import os
import re
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


def _translate(glob: str) -> str:
	"""Translate a glob into a regex body where ``*`` never crosses ``/``."""
	parts: List[str] = []
	i, n = 0, len(glob)
	while i < n:
		c = glob[i]
		if c == "*":
			if glob.startswith("**/", i):
				parts.append("(?:.*/)?")
				i += 3
				continue
			if glob.startswith("**", i):
				parts.append(".*")
				i += 2
				continue
			parts.append("[^/]*")
		elif c == "?":
			parts.append("[^/]")
		elif c == "[":
			end = glob.find("]", i + 2)
			if end == -1:
				parts.append(re.escape(c))
			else:
				body = glob[i + 1:end].replace("\\", "\\\\")
				if body.startswith("!"):
					body = "^" + body[1:]
				elif body.startswith("^"):
					body = "\\" + body
				parts.append("[" + body + "]")
				i = end + 1
				continue
		else:
			parts.append(re.escape(c))
		i += 1
	return "".join(parts)


@functools.lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern:
	directory = pattern.endswith("/")
	# A leading "/" would anchor at the root in git; here every pattern floats.
	body = pattern.strip("/")
	suffix = "(?:/.*)?" if directory else ""
	try:
		return re.compile("^(?:.*/)?" + _translate(body) + suffix + "$", re.DOTALL)
	except re.error:
		logger.debug("Invalid glob %r, matching it literally", pattern)
		return re.compile("^(?:.*/)?" + re.escape(body) + suffix + "$", re.DOTALL)


def normalize_path(path: str) -> str:
	return path.replace("\\", "/").strip("/")


def matches(relative_path: str, patterns: Iterable[str]) -> bool:
	path = normalize_path(relative_path)
	return any(compile_pattern(p).match(path) for p in patterns)


def parse_gitignore(text: str) -> List[str]:
	patterns: List[str] = []
	for raw in text.splitlines():
		line = raw.strip()
		if not line or line.startswith("#"):
			continue
		if line.startswith("!"):
			logger.debug("Skipping unsupported negation pattern %r", line)
			continue
		patterns.append(line)
	return patterns


def load_gitignore(directory: str) -> List[str]:
	"""Return the patterns of ``directory``'s own .gitignore, or [] if it has none."""
	path = os.path.join(directory, GITIGNORE_NAME)
	try:
		with open(path, "r", encoding="utf-8", errors="replace") as fh:
			text = fh.read()
	except FileNotFoundError:
		return []
	return parse_gitignore(text)


def merge_patterns(inherited: Sequence[str], local: Sequence[str]) -> List[str]:
	merged: List[str] = list(inherited)
	seen = set(merged)
	for p in local:
		if p not in seen:
			seen.add(p)
			merged.append(p)
	return merged


def collect_ancestor_patterns(root: str) -> List[str]:
	"""Gather .gitignore patterns from the parents of ``root``, outermost first.

	Only directories inside the enclosing git work tree are consulted. When
	``root`` is itself the top of a work tree, or is not inside one at all,
	nothing is collected.
	"""
	current = os.path.abspath(root)
	if os.path.exists(os.path.join(current, ".git")):
		return []

	layers: List[List[str]] = []
	while True:
		parent = os.path.dirname(current)
		if parent == current:
			return []
		current = parent
		layers.append(load_gitignore(current))
		if os.path.exists(os.path.join(current, ".git")):
			break

	patterns: List[str] = []
	for layer in reversed(layers):
		patterns = merge_patterns(patterns, layer)
	return patterns
