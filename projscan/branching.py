"""Per-file branching analysis.

`analyze_branching` is the whole pipeline for one file: scrub the text, scan
for branch constructs, classify each branch condition and fold the results
into an immutable `BranchingDetails`. It keeps no state between calls and
never raises on odd input; empty or unrecognizable content yields the
baseline report (cyclomatic complexity 1, everything else 0).
"""

from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Iterable, List, Optional

from .branches import scan_branches
from .config import AnalyzerSettings
from .hardcoded import contains_date, is_hardcoded
from .model import Branch, BranchingDetails, BranchKind, LanguageProfile, TemporalClass
from .profiles import ProfileRegistry
from .purity import is_pure
from .scrub import scrub
from .temporal import classify_temporal


def classify_branch(branch: Branch, profile: LanguageProfile, settings: AnalyzerSettings) -> Branch:
	condition = branch.condition
	return dataclasses.replace(
		branch,
		is_hardcoded=is_hardcoded(condition, profile),
		has_date=contains_date(condition, profile),
		is_pure=is_pure(condition, profile),
		temporal_class=classify_temporal(condition, settings, profile),
	)


def summarize_branches(branches: Iterable[Branch], logical_operators: int = 0) -> BranchingDetails:
	branches = list(branches)
	kinds = Counter(b.kind for b in branches)
	distribution = Counter(b.depth for b in branches)
	temporal = Counter(b.temporal_class for b in branches)
	pure = sum(1 for b in branches if b.is_pure)
	total = len(branches)
	return BranchingDetails(
		conditional_count=kinds[BranchKind.CONDITIONAL],
		loop_count=kinds[BranchKind.LOOP],
		switch_count=kinds[BranchKind.SWITCH],
		max_nesting=max(distribution, default=0),
		logical_operators=logical_operators,
		cyclomatic_complexity=total + 1,
		# one unit per branch plus one per enclosing level
		cognitive_complexity=sum(1 + (b.depth - 1) for b in branches),
		hardcoded_dates_count=sum(1 for b in branches if b.has_date),
		hardcoded_values_count=sum(1 for b in branches if b.is_hardcoded),
		pure_branches=pure,
		non_pure_branches=total - pure,
		future_logic_count=temporal[TemporalClass.FUTURE],
		past_logic_count=temporal[TemporalClass.PAST],
		total_branches=total,
		nesting_distribution=dict(sorted(distribution.items())),
	)


def find_branches(
	content: str,
	language: Optional[str] = None,
	registry: Optional[ProfileRegistry] = None,
	settings: Optional[AnalyzerSettings] = None,
) -> List[Branch]:
	"""Classified branch records in source order, mostly useful for diagnostics."""
	profile = (registry or ProfileRegistry()).get(language)
	settings = settings or AnalyzerSettings()
	scan = scan_branches(scrub(content or "", profile), profile)
	return [classify_branch(b, profile, settings) for b in scan.branches]


def analyze_branching(
	content: str,
	language: Optional[str] = None,
	registry: Optional[ProfileRegistry] = None,
	settings: Optional[AnalyzerSettings] = None,
) -> BranchingDetails:
	profile = (registry or ProfileRegistry()).get(language)
	settings = settings or AnalyzerSettings()
	scan = scan_branches(scrub(content or "", profile), profile)
	return summarize_branches(
		(classify_branch(b, profile, settings) for b in scan.branches),
		logical_operators=scan.logical_operators,
	)
