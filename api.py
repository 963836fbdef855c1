from __future__ import annotations

import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from projscan.branching import analyze_branching
from projscan.config import DEFAULT_IGNORE_PATTERNS, ScanOptions
from projscan.errors import ScanError
from projscan.fs_scan import DirectoryScanner
from projscan.model import BranchingDetails, ScanResult
from projscan.profiles import ProfileRegistry


app = FastAPI(title="Project Scanner")

registry = ProfileRegistry()


class ScanRequest(BaseModel):
	root_path: str
	max_depth: Optional[int] = Field(default=None, ge=0)
	ignore_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
	include_hidden: bool = False
	enhanced: bool = False
	profile: str = "generic"


class BranchingRequest(BaseModel):
	content: str
	language: Optional[str] = None


@app.post("/scan", response_model=ScanResult)
def scan(req: ScanRequest) -> ScanResult:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	options = ScanOptions(
		max_depth=req.max_depth,
		ignore_patterns=req.ignore_patterns,
		include_hidden=req.include_hidden,
		mapper_profile=req.profile,
		enhanced_analysis=req.enhanced,
	)
	try:
		return DirectoryScanner(options, registry).scan(root)
	except ScanError as e:
		raise HTTPException(status_code=400, detail=str(e))


@app.post("/branching", response_model=BranchingDetails)
def branching(req: BranchingRequest) -> BranchingDetails:
	return analyze_branching(req.content, req.language, registry)
