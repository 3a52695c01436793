from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from dotcursor import __version__
from dotcursor.fs_scan import analyze_directory, to_relative_path
from dotcursor.ignore import collect_ancestor_patterns, merge_patterns
from dotcursor.logging_config import LoggingConfig, configure_logging
from dotcursor.model import AnalyzerConfig
from dotcursor.render import DEFAULT_OUTPUT_NAME, generate_markdown, write_markdown
from dotcursor.watch import watch

logger = logging.getLogger("dotcursor.cli")


def build_config(args: argparse.Namespace, root: str) -> AnalyzerConfig:
	patterns: List[str] = []
	if not args.no_gitignore:
		patterns = collect_ancestor_patterns(root)
	patterns = merge_patterns(patterns, args.ignore)
	return AnalyzerConfig(
		exclude_dirs=args.exclude,
		watch_mode=args.watch,
		gitignore_patterns=patterns,
		respect_gitignore=not args.no_gitignore,
	)


def output_path(args: argparse.Namespace, root: str) -> str:
	if args.output:
		return os.path.abspath(args.output)
	return os.path.join(root, DEFAULT_OUTPUT_NAME)


def generate(root: str, config: AnalyzerConfig, out: Optional[str], as_json: bool) -> None:
	info = analyze_directory(root, config)
	if as_json:
		print(info.model_dump_json(indent=2))
		return
	write_markdown(out, generate_markdown(info))


def cmd_generate(args: argparse.Namespace) -> int:
	root = os.path.abspath(args.path)
	if not os.path.isdir(root):
		logger.error("Not a directory: %s", root)
		return 1

	config = build_config(args, root)
	out = output_path(args, root)
	if config.watch_mode and not args.json:
		# The report must not count as a change to the tree it describes.
		rel_out = to_relative_path(root, out)
		if not rel_out.startswith("../"):
			config = config.model_copy(update={"exclude_paths": config.exclude_paths + [rel_out]})

	try:
		generate(root, config, out, args.json)
	except OSError as e:
		logger.error("Error generating directory structure: %s", e)
		return 1

	if config.watch_mode:
		watch(
			root,
			lambda: generate(root, config, out, args.json),
			config=config,
			interval=args.interval,
		)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser(version: str) -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="dotcursor")
	parser.add_argument("--version", action="version", version=f"%(prog)s {version}")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pg = sub.add_parser("generate", help="Write a markdown map of a directory tree")
	pg.add_argument("path", nargs="?", default=".", help="Directory to analyze")
	pg.add_argument("--exclude", action="append", default=[], metavar="NAME", help="Entry name to skip (repeatable)")
	pg.add_argument("--ignore", action="append", default=[], metavar="PATTERN", help="Gitignore-style pattern (repeatable)")
	pg.add_argument("--no-gitignore", action="store_true", help="Do not read .gitignore files")
	pg.add_argument("-o", "--output", help=f"Markdown output file (default: <path>/{DEFAULT_OUTPUT_NAME})")
	pg.add_argument("--json", action="store_true", help="Print the directory model as JSON instead")
	pg.add_argument("-w", "--watch", action="store_true", help="Regenerate whenever the tree changes")
	pg.add_argument("--interval", type=float, default=1.0, help="Watch poll interval in seconds")
	pg.set_defaults(func=cmd_generate)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None, version: str = __version__) -> int:
	parser = build_parser(version)
	args = parser.parse_args(argv)
	configure_logging(LoggingConfig(level="DEBUG" if args.verbose else "INFO"))
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
