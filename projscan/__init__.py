"""Heuristic project scanner with per-file branching analysis.

Modules:
- profiles.py: Per-language lexical profiles and the profile registry.
- scrub.py: Comment and string-literal masking.
- branches.py: Branch construct detection with nesting depth.
- hardcoded.py, purity.py, temporal.py: Branch condition classifiers.
- branching.py: Per-file branching report.
- scoring.py: File-level complexity, importance, summary and purpose.
- surface.py: Exported names, imports and public API of a source file.
- mapper.py: File tagging pipeline.
- fs_scan.py: Directory traversal and enhanced analysis.
- summarize.py: Text, JSON and YAML rendering.
- model.py, config.py, errors.py: Data structures, options and failures.
"""

__all__ = [
	"profiles",
	"scrub",
	"branches",
	"hardcoded",
	"purity",
	"temporal",
	"branching",
	"scoring",
	"surface",
	"mapper",
	"fs_scan",
	"summarize",
	"model",
	"config",
	"errors",
]
