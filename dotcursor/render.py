from __future__ import annotations

import logging
from typing import Dict, List

from .fs_scan import file_extension
from .model import DirectoryRecord, FileRecord

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = ".cursor.directory_structure.md"

# Recommended upper bound per extension, in kilobytes.
FILE_SIZE_LIMITS_KB: Dict[str, int] = {
	"ts": 400,
	"js": 400,
	"tsx": 400,
	"jsx": 400,
	"py": 500,
	"java": 500,
	"cpp": 500,
}


def exceeds_size_limit(f: FileRecord) -> bool:
	limit = FILE_SIZE_LIMITS_KB.get(file_extension(f.path))
	return limit is not None and f.size > limit * 1024


def render_file(f: FileRecord, indent: str) -> List[str]:
	parts: List[str] = []
	parts.append(f"{indent}- 📄 `{f.path}`")
	parts.append(f"{indent}  - Type: {f.type}")
	parts.append(f"{indent}  - Size: {f.size / 1024:.2f}KB")
	if exceeds_size_limit(f):
		parts.append(f"{indent}  - ⚠️ **File size exceeds recommended limit**")
	if f.functions:
		parts.append(f"{indent}  - Functions:")
		for name in f.functions:
			parts.append(f"{indent}    - `{name}`")
	return parts


def generate_markdown(info: DirectoryRecord, level: int = 0) -> str:
	indent = "  " * level
	markdown = ""

	if info.path:
		markdown += f"{indent}{'#' * (level + 2)} 📁 {info.path}\n\n"
	else:
		markdown += "# 📁 Project Structure\n\n"

	if info.files:
		if level == 0:
			markdown += "## Files\n\n"
		for f in info.files:
			markdown += "\n".join(render_file(f, indent)) + "\n\n"

	for sub in info.subdirectories:
		markdown += generate_markdown(sub, level + 1)

	return markdown


def write_markdown(path: str, markdown: str) -> None:
	with open(path, "w", encoding="utf-8") as fh:
		fh.write(markdown)
	logger.info("Directory structure written to %s", path)
