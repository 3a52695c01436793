from __future__ import annotations

import logging
import os
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from dotcursor.fs_scan import analyze_directory
from dotcursor.model import AnalyzeResult, AnalyzerConfig
from dotcursor.render import generate_markdown

logger = logging.getLogger("dotcursor.api")

app = FastAPI(title="dotcursor")


class AnalyzeRequest(BaseModel):
	root_path: str
	exclude_dirs: List[str] = []
	gitignore_patterns: List[str] = []
	respect_gitignore: bool = True


@app.post("/analyze", response_model=AnalyzeResult)
def analyze(req: AnalyzeRequest) -> AnalyzeResult:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")

	config = AnalyzerConfig(
		exclude_dirs=req.exclude_dirs,
		gitignore_patterns=req.gitignore_patterns,
		respect_gitignore=req.respect_gitignore,
	)
	try:
		info = analyze_directory(root, config)
	except OSError as e:
		logger.error("Analysis of %s failed: %s", root, e)
		raise HTTPException(status_code=500, detail=str(e))

	return AnalyzeResult(structure=info, markdown=generate_markdown(info))


def create_app() -> FastAPI:
	return app
