from __future__ import annotations

import datetime
import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_IGNORE_PATTERNS = [".git", "node_modules", "target", "__pycache__", ".DS_Store"]


class OutputFormat(str, enum.Enum):
	BASIC = "basic"
	COMPACT = "compact"
	DETAILED = "detailed"
	HIERARCHICAL = "hierarchical"


class AnalyzerSettings(BaseModel):
	model_config = ConfigDict(frozen=True)

	# dates after this day read as upcoming logic, dates before it as legacy
	reference_date: datetime.date = datetime.date(2024, 12, 31)
	# quoted versions compared with >= at or above this major read as upcoming
	future_version_major: int = 2


class ScanOptions(BaseModel):
	max_depth: Optional[int] = Field(default=None, ge=0)
	ignore_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
	follow_symlinks: bool = False
	include_hidden: bool = False
	mapper_profile: str = "generic"
	enhanced_analysis: bool = False
	output_format: OutputFormat = OutputFormat.BASIC
	max_file_size: int = Field(default=2 * 1024 * 1024, gt=0)
	workers: int = Field(default=4, ge=1)
