from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: str
	size: int = Field(ge=0)
	type: str
	functions: Optional[List[str]] = None


class DirectoryRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: str
	files: List[FileRecord] = []
	subdirectories: List["DirectoryRecord"] = []


class AnalyzerConfig(BaseModel):
	exclude_dirs: List[str] = []
	exclude_paths: List[str] = []
	watch_mode: bool = False
	gitignore_patterns: List[str] = []
	respect_gitignore: bool = True


class AnalyzeResult(BaseModel):
	structure: DirectoryRecord
	markdown: str
