from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field


class BranchKind(str, enum.Enum):
	CONDITIONAL = "conditional"
	LOOP = "loop"
	SWITCH = "switch"


class TemporalClass(str, enum.Enum):
	NONE = "none"
	FUTURE = "future"
	PAST = "past"


class BlockStyle(str, enum.Enum):
	BRACES = "braces"
	INDENT = "indent"


class ConditionStyle(str, enum.Enum):
	# `if (cond) {`
	PAREN = "paren"
	# `if cond {` / `if cond:`
	SPAN = "span"
	# parenthesized when a paren follows the keyword, else up to the block or line end
	AUTO = "auto"


class StringDelimiter(BaseModel):
	model_config = ConfigDict(frozen=True)

	open: str
	close: str
	# None means raw: no escape sequences inside the literal
	escape: Optional[str] = "\\"


class LanguageProfile(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	line_comments: Tuple[str, ...] = ()
	block_comments: Tuple[Tuple[str, str], ...] = ()
	string_delimiters: Tuple[StringDelimiter, ...] = ()
	conditional_keywords: FrozenSet[str] = frozenset()
	loop_keywords: FrozenSet[str] = frozenset()
	switch_keywords: FrozenSet[str] = frozenset()
	logical_and: FrozenSet[str] = frozenset()
	logical_or: FrozenSet[str] = frozenset()
	continuation_keywords: FrozenSet[str] = frozenset()
	common_values: FrozenSet[float] = frozenset()
	impure_symbols: Dict[str, Tuple[str, ...]] = {}
	block_style: BlockStyle = BlockStyle.BRACES
	condition_style: ConditionStyle = ConditionStyle.PAREN
	ternary: bool = False
	# quote-delimited single characters (Rust 'x') distinct from lifetimes
	char_literals: bool = False
	# slash-delimited regex literals after an operator or open bracket
	regex_literals: bool = False

	def kind_of(self, word: str) -> Optional[BranchKind]:
		if word in self.conditional_keywords:
			return BranchKind.CONDITIONAL
		if word in self.loop_keywords:
			return BranchKind.LOOP
		if word in self.switch_keywords:
			return BranchKind.SWITCH
		return None


@dataclass
class Branch:
	"""One conditional, loop or switch occurrence found during a single scan."""

	kind: BranchKind
	depth: int
	condition: str
	line: int = 1
	is_hardcoded: bool = False
	has_date: bool = False
	is_pure: bool = True
	temporal_class: TemporalClass = TemporalClass.NONE


def percentage(count: int, total: int) -> int:
	if total <= 0:
		return 0
	return round(count / total * 100)


class BranchingDetails(BaseModel):
	model_config = ConfigDict(frozen=True)

	conditional_count: int = 0
	loop_count: int = 0
	switch_count: int = 0
	max_nesting: int = 0
	logical_operators: int = 0
	cyclomatic_complexity: int = 1
	cognitive_complexity: int = 0
	hardcoded_dates_count: int = 0
	hardcoded_values_count: int = 0
	pure_branches: int = 0
	non_pure_branches: int = 0
	future_logic_count: int = 0
	past_logic_count: int = 0
	total_branches: int = 0
	nesting_distribution: Dict[int, int] = {}

	@computed_field  # type: ignore[misc]
	@property
	def hardcoded_percentage(self) -> int:
		return percentage(self.hardcoded_values_count, self.total_branches)

	@computed_field  # type: ignore[misc]
	@property
	def pure_percentage(self) -> int:
		return percentage(self.pure_branches, self.total_branches)


class EnhancedFileInfo(BaseModel):
	language: Optional[str] = None
	line_count: Optional[int] = None
	complexity_score: Optional[float] = None
	importance_score: Optional[float] = None
	content_summary: Optional[str] = None
	purpose: Optional[str] = None
	exports: List[str] = []
	imports: List[str] = []
	api_surface: List[str] = []
	branching: Optional[BranchingDetails] = None


class FileEntry(BaseModel):
	path: str
	rel_path: str
	name: str
	size: int = 0
	modified: float = 0.0
	is_dir: bool = False
	tags: List[str] = []
	enhanced_info: Optional[EnhancedFileInfo] = None


class ScanStats(BaseModel):
	total_files: int = 0
	total_dirs: int = 0
	total_size: int = 0
	scan_duration_ms: int = 0
	files_per_second: float = 0.0


class ScanResult(BaseModel):
	root_path: str
	files: List[FileEntry]
	stats: ScanStats
	errors: List[str] = []
