from __future__ import annotations

import os
import time
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel

from .config import OutputFormat
from .model import BranchingDetails, FileEntry, ScanResult


def format_size(size: int) -> str:
	if size < 1024:
		return f"{size}B"
	if size < 1024 * 1024:
		return f"{size / 1024:.1f}KB"
	return f"{size / (1024 * 1024):.1f}MB"


def format_time_ago(modified: float, now: Optional[float] = None) -> str:
	seconds = (now if now is not None else time.time()) - modified
	if seconds < 0:
		return "unknown"
	if seconds < 60:
		return "just now"
	if seconds < 3600:
		return f"{int(seconds // 60)}m ago"
	if seconds < 86400:
		return f"{int(seconds // 3600)}h ago"
	return f"{int(seconds // 86400)}d ago"


def nesting_tokens(distribution: Dict[int, int]) -> List[str]:
	ordered = sorted(distribution.items(), key=lambda item: (-item[1], -item[0]))
	return [f"{count}x depth-{depth}" for depth, count in ordered if count > 0]


def branching_breakdown(details: BranchingDetails) -> str:
	total = details.total_branches
	parts: List[str] = []
	if details.conditional_count:
		parts.append(f"{details.conditional_count}x conditionals")
	if details.loop_count:
		parts.append(f"{details.loop_count}x loops")
	if details.switch_count:
		parts.append(f"{details.switch_count}x switches")
	if details.hardcoded_values_count:
		parts.append(
			f"Hard-coded: {details.hardcoded_percentage}% ({details.hardcoded_values_count}/{total})"
		)
	if total:
		parts.append(f"Pure: {details.pure_percentage}% ({details.pure_branches}/{total})")
	if details.future_logic_count:
		parts.append(f"Future: {details.future_logic_count}x")
	if details.past_logic_count:
		parts.append(f"Past: {details.past_logic_count}x")
	nesting = nesting_tokens(details.nesting_distribution)
	if nesting:
		parts.append(f"Nesting: {', '.join(nesting)}")
	if details.logical_operators:
		parts.append(f"{details.logical_operators}x logical ops")
	return " | ".join(parts)


def _tags(f: FileEntry, empty: str = "") -> str:
	return f" ({', '.join(f.tags)})" if f.tags else empty


def format_basic(result: ScanResult) -> str:
	parts: List[str] = []
	for f in result.files:
		kind = "[DIR]" if f.is_dir else "[FILE]"
		parts.append(f"  {kind} {f.path}{_tags(f)}")
	return "\n".join(parts)


def format_compact(result: ScanResult, now: Optional[float] = None) -> str:
	parts: List[str] = []
	for f in result.files:
		if f.is_dir:
			continue
		parts.append(f"[FILE] {f.path}{_tags(f)} | {format_size(f.size)}, {format_time_ago(f.modified, now)}")
	return "\n".join(parts)


def format_detailed(result: ScanResult, now: Optional[float] = None) -> str:
	parts: List[str] = []
	for f in result.files:
		if f.is_dir:
			parts.append(f" {f.path}")
			continue
		parts.append(f"[FILE] {f.path}{_tags(f, ' (unclassified)')}")
		line = f"  Size: {format_size(f.size)} | Modified: {format_time_ago(f.modified, now)}"
		info = f.enhanced_info
		if info is None:
			parts.append(line)
			parts.append("")
			continue
		if info.line_count is not None:
			line += f" | Lines: {info.line_count}"
		parts.append(line)
		if info.content_summary:
			parts.append(f"  {info.content_summary}")
		if info.exports:
			parts.append(f"  Exports: {', '.join(info.exports)}")
		if len(info.imports) > 3:
			parts.append(f"  Imports: {len(info.imports)} dependencies")
		elif info.imports:
			parts.append(f"  Imports: {', '.join(info.imports)}")
		if info.purpose:
			parts.append(f"  Purpose: {info.purpose}")
		if info.complexity_score is not None and info.importance_score is not None:
			parts.append(f"  Complexity: {info.complexity_score:.1f} | Importance: {info.importance_score:.1f}")
		if info.branching is not None:
			breakdown = branching_breakdown(info.branching)
			if breakdown:
				parts.append(f"    Enhanced Branching Analysis: {breakdown}")
		parts.append("")
	return "\n".join(parts)


def format_hierarchical(result: ScanResult) -> str:
	by_dir: Dict[str, List[FileEntry]] = {}
	for f in result.files:
		if f.is_dir:
			by_dir.setdefault("" if f.rel_path == os.curdir else f.rel_path, [])
			continue
		by_dir.setdefault(os.path.dirname(f.rel_path), []).append(f)

	parts: List[str] = []
	for directory in sorted(by_dir):
		depth = 0 if not directory else directory.count(os.sep) + 1
		if directory:
			parts.append(f"{'  ' * (depth - 1)} {os.path.basename(directory)}/")
		indent = "  " * depth
		for f in sorted(by_dir[directory], key=lambda e: e.name):
			summary = ""
			if f.enhanced_info is not None and f.enhanced_info.content_summary:
				summary = f" - {f.enhanced_info.content_summary}"
			parts.append(f"{indent} [FILE] {f.name}{_tags(f)} | {format_size(f.size)}{summary}")
	return "\n".join(parts)


def format_result(result: ScanResult, output_format: OutputFormat = OutputFormat.BASIC) -> str:
	output_format = OutputFormat(output_format)
	if output_format is OutputFormat.COMPACT:
		return format_compact(result)
	if output_format is OutputFormat.DETAILED:
		return format_detailed(result)
	if output_format is OutputFormat.HIERARCHICAL:
		return format_hierarchical(result)
	return format_basic(result)


def format_stats(result: ScanResult) -> str:
	s = result.stats
	return (
		f"Scanned {s.total_files} files and {s.total_dirs} directories "
		f"({format_size(s.total_size)}) in {s.scan_duration_ms}ms"
	)


def to_json(model: BaseModel) -> str:
	return model.model_dump_json(indent=2)


def to_yaml(model: BaseModel) -> str:
	return yaml.safe_dump(model.model_dump(mode="json"), sort_keys=False)
