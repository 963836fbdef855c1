from __future__ import annotations

from typing import Dict, Optional, Tuple

from .model import BranchingDetails


SCORE_CAP = 10.0
BRANCHING_CAP = 8.0

# structural keywords that add weight on top of the branching term
LANGUAGE_PATTERNS: Dict[str, Tuple[Tuple[str, float], ...]] = {
	"rust": (("impl ", 0.5), ("trait ", 0.3), ("struct ", 0.2)),
	"cpp": (("class ", 0.4), ("template", 0.3), ("struct ", 0.2)),
	"javascript": (("class ", 0.4), ("function ", 0.3), ("async ", 0.2)),
	"typescript": (("class ", 0.4), ("function ", 0.3), ("async ", 0.2)),
	"python": (("class ", 0.4), ("def ", 0.2), ("async ", 0.2)),
}

SUMMARY_FALLBACKS: Dict[str, str] = {
	"rust": "Rust source code",
	"python": "Python script",
	"javascript": "JavaScript code",
	"typescript": "TypeScript code",
	"markdown": "Documentation file",
	"json": "JSON configuration",
}


def branching_term(details: BranchingDetails) -> float:
	nesting_penalty = (details.max_nesting ** 1.5) * 0.2
	term = (
		details.cyclomatic_complexity * 0.4
		+ details.cognitive_complexity * 0.4
		+ nesting_penalty * 0.2
	)
	return min(term, BRANCHING_CAP)


def complexity_score(content: str, language: Optional[str], details: Optional[BranchingDetails] = None) -> float:
	lines = len(content.splitlines())
	score = lines / 100.0 + len(content) / 10000.0
	if details is not None:
		score += branching_term(details)
	for pattern, weight in LANGUAGE_PATTERNS.get(language or "", ()):
		score += content.count(pattern) * weight
	return round(min(score, SCORE_CAP), 2)


def infer_purpose(path: str, content: str, language: Optional[str]) -> str:
	lowered = path.lower()
	if "test" in lowered:
		return "Test code"
	if "example" in lowered or "demo" in lowered:
		return "Example/demo code"
	if "lib" in lowered or "core" in lowered:
		return "Core library functionality"
	if "cli" in lowered or "bin" in lowered:
		return "Command-line interface"
	if "config" in lowered:
		return "Configuration"
	if "main(" in content or "fn main" in content or "__main__" in content:
		return "Application entry point"
	if language == "markdown":
		return "Documentation"
	if language in ("json", "yaml", "toml"):
		return "Configuration file"
	if language == "shell":
		return "Shell script"
	return "Source code"


def importance_score(path: str, size: int, complexity: Optional[float], api_surface: int = 0) -> float:
	score = 1.0 + min(size / 10000.0, 2.0)
	if complexity is not None:
		score += complexity * 0.3
	score += api_surface * 0.1
	if "main" in path or "lib" in path:
		score += 1.0
	if "core" in path:
		score += 0.5
	return round(min(score, SCORE_CAP), 2)


def content_summary(content: str, language: Optional[str]) -> str:
	"""First descriptive comment among the opening lines, else a generic label."""
	lines = content.splitlines()
	if not lines:
		return "Empty file"
	for line in lines[:10]:
		stripped = line.strip()
		if not stripped.startswith(("//", "#", "/*")):
			continue
		comment = stripped.lstrip("/#*").strip()
		if len(comment) > 10 and not comment.startswith("!"):
			return comment[:100]
	return SUMMARY_FALLBACKS.get(language or "", f"{len(lines)} lines of code")
