from __future__ import annotations

import logging
import os
import stat
from typing import Dict, List, Optional, Sequence

from .extract import extract_functions
from .ignore import load_gitignore, matches, merge_patterns
from .model import AnalyzerConfig, DirectoryRecord, FileRecord

logger = logging.getLogger(__name__)


EXTENSION_LANGUAGE: Dict[str, str] = {
	"ts": "TypeScript",
	"js": "JavaScript",
	"py": "Python",
	"java": "Java",
	"cpp": "C++",
	"h": "C/C++ Header",
	"jsx": "React JSX",
	"tsx": "React TSX",
	"md": "Markdown",
	"json": "JSON",
	"yml": "YAML",
	"yaml": "YAML",
	"css": "CSS",
	"html": "HTML",
}

BUILTIN_EXCLUDES = frozenset(
	{
		"node_modules",
		"dist",
		"build",
		"coverage",
		"package-lock.json",
		"yarn.lock",
		".DS_Store",
		"Thumbs.db",
	}
)

LOCKFILE_SUFFIXES = (".lock", ".lockb")


def file_extension(filename: str) -> str:
	if "." not in filename:
		return ""
	return filename.rsplit(".", 1)[1].lower()


def detect_file_type(filename: str) -> str:
	return EXTENSION_LANGUAGE.get(file_extension(filename), "Unknown")


def to_relative_path(project_root: str, path: str) -> str:
	rel_path = os.path.relpath(path, project_root)
	if rel_path == os.curdir:
		return ""
	return rel_path.replace(os.sep, "/")


def skip_reason(
	name: str,
	rel_path: str,
	patterns: Sequence[str],
	exclude_dirs: Sequence[str],
	exclude_paths: Sequence[str] = (),
) -> Optional[str]:
	"""Return why an entry is excluded, or None to keep it.

	Rules are checked in a fixed order: ignore patterns, hidden names, the
	built-in set, lockfile suffixes, caller exclusions, then exact excluded
	paths.
	"""
	if patterns and matches(rel_path, patterns):
		return "ignore pattern"
	if name.startswith("."):
		return "hidden"
	if name in BUILTIN_EXCLUDES:
		return "built-in exclusion"
	if name.endswith(LOCKFILE_SUFFIXES):
		return "lockfile"
	if name in exclude_dirs:
		return "excluded by config"
	if rel_path in exclude_paths:
		return "excluded path"
	return None


def read_text(path: str) -> str:
	with open(path, "r", encoding="utf-8", errors="replace") as fh:
		return fh.read()


def _analyze(dir_path: str, project_root: str, config: AnalyzerConfig, inherited: List[str]) -> DirectoryRecord:
	local = load_gitignore(dir_path) if config.respect_gitignore else []
	patterns = merge_patterns(inherited, local)

	files: List[FileRecord] = []
	subdirectories: List[DirectoryRecord] = []

	with os.scandir(dir_path) as it:
		entries = list(it)

	for entry in entries:
		rel_path = to_relative_path(project_root, entry.path)
		reason = skip_reason(entry.name, rel_path, patterns, config.exclude_dirs, config.exclude_paths)
		if reason:
			logger.debug("Skipping %s (%s)", rel_path, reason)
			continue

		if entry.is_dir(follow_symlinks=False):
			subdirectories.append(_analyze(entry.path, project_root, config, patterns))
			continue
		if entry.is_symlink() and entry.is_dir():
			logger.debug("Skipping %s (symlinked directory)", rel_path)
			continue

		st = entry.stat()
		if not stat.S_ISREG(st.st_mode):
			logger.debug("Skipping %s (not a regular file)", rel_path)
			continue

		size = st.st_size
		file_type = detect_file_type(entry.name)
		functions = extract_functions(read_text(entry.path), file_type)
		files.append(
			FileRecord(
				path=rel_path,
				size=size,
				type=file_type,
				functions=functions or None,
			)
		)

	return DirectoryRecord(
		path=to_relative_path(project_root, dir_path),
		files=files,
		subdirectories=subdirectories,
	)


def analyze_directory(
	root_path: str,
	config: Optional[AnalyzerConfig] = None,
	project_root: Optional[str] = None,
) -> DirectoryRecord:
	"""Walk ``root_path`` depth-first and build its DirectoryRecord tree.

	Paths in the result are relative to ``project_root`` (``root_path`` when not
	given). Any OSError raised while listing, statting or reading aborts the
	whole run.
	"""
	config = config or AnalyzerConfig()
	root = os.path.abspath(root_path)
	project_root = os.path.abspath(project_root) if project_root else root
	info = _analyze(root, project_root, config, list(config.gitignore_patterns))
	logger.info("Analyzed %s", root)
	return info
