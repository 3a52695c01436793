"""Directory structure documentation for a project tree.

Modules:
- fs_scan.py: Directory traversal, exclusion rules and file type detection.
- ignore.py: Gitignore-style pattern loading and matching.
- extract.py: Regex-based function and class name extraction.
- model.py: Records produced by an analysis run.
- render.py: Markdown rendering of the directory model.
- watch.py: Poll-based change detection for watch mode.
- logging_config.py: Root logger setup for the command line.
"""

__version__ = "0.1.0"

__all__ = [
	"fs_scan",
	"ignore",
	"extract",
	"model",
	"render",
	"watch",
	"logging_config",
]
