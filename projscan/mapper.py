"""File tagging.

Tags come from a fixed pipeline of strategies, each looking at one aspect of
a scanned entry: its extension, its path relative to the scan root, and (when
the scanner read it) its content. The enhanced mapper appends tags derived
from the entry's `EnhancedFileInfo`.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .model import EnhancedFileInfo, FileEntry


logger = logging.getLogger(__name__)


EXTENSION_TAGS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
	("documentation", (".md", ".txt", ".rst")),
	("configuration", (".json", ".yaml", ".yml", ".toml", ".ini", ".cfg")),
	("script", (".sh", ".bash", ".zsh", ".fish", ".ps1", ".bat", ".cmd")),
	("source", (".rs", ".py", ".js", ".ts", ".jsx", ".tsx", ".go", ".java", ".c", ".cpp", ".h", ".hpp")),
)

PATH_TAGS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
	("test", ("test", "spec")),
	("example", ("example", "demo")),
)

_ENTRYPOINT = re.compile(
	r"""if\s+__name__\s*==\s*["']__main__["']|\bfn\s+main\s*\(|\bfunc\s+main\s*\(|\bint\s+main\s*\(|static\s+void\s+main\s*\("""
)

Strategy = Callable[[FileEntry, Optional[str]], Iterable[str]]


def extension_tags(entry: FileEntry, content: Optional[str]) -> List[str]:
	name = entry.name.lower()
	tags = []
	if name.startswith("readme"):
		tags.append("documentation")
	for tag, extensions in EXTENSION_TAGS:
		if name.endswith(extensions) and tag not in tags:
			tags.append(tag)
	return tags


def path_tags(entry: FileEntry, content: Optional[str]) -> List[str]:
	# relative to the scan root so the location of the root itself never leaks in
	rel = entry.rel_path.replace(os.sep, "/").lower()
	return [tag for tag, needles in PATH_TAGS if any(n in rel for n in needles)]


def content_tags(entry: FileEntry, content: Optional[str]) -> List[str]:
	if not content:
		return []
	tags = []
	if content.startswith("#!"):
		tags.append("script")
	if _ENTRYPOINT.search(content):
		tags.append("entrypoint")
	return tags


PIPELINE: Tuple[Strategy, ...] = (extension_tags, path_tags, content_tags)


def enhanced_tags(info: EnhancedFileInfo) -> List[str]:
	tags = []
	if info.language:
		tags.append(info.language)
	purpose = info.purpose or ""
	if "entry point" in purpose:
		tags.append("entrypoint")
	if "Core library" in purpose:
		tags.append("core-api")
	if "Command-line" in purpose:
		tags.append("cli")
	if info.importance_score is not None:
		if info.importance_score > 5.0:
			tags.append("high-importance")
		elif info.importance_score > 2.0:
			tags.append("moderate-importance")
	if info.complexity_score is not None and info.complexity_score > 5.0:
		tags.append("high-complexity")
	return tags


def _append_unique(tags: List[str], new: Iterable[str]) -> None:
	for tag in new:
		if tag not in tags:
			tags.append(tag)


@dataclass(frozen=True)
class Mapper:
	name: str
	enhanced: bool = False

	def classify(self, entry: FileEntry, content: Optional[str] = None) -> List[str]:
		if entry.is_dir:
			return ["directory"]
		tags: List[str] = []
		for strategy in PIPELINE:
			_append_unique(tags, strategy(entry, content))
		if not tags:
			tags.append("unclassified")
		if self.enhanced and entry.enhanced_info is not None:
			_append_unique(tags, enhanced_tags(entry.enhanced_info))
		return tags


MAPPERS: Dict[str, Mapper] = {
	"generic": Mapper("generic"),
	"enhanced-generic": Mapper("enhanced-generic", enhanced=True),
}


def get_mapper(profile: str, enhanced: bool = False) -> Mapper:
	mapper = MAPPERS.get(profile)
	if mapper is None:
		logger.warning("unknown mapper profile %r, using generic (known: %s)", profile, ", ".join(sorted(MAPPERS)))
		mapper = MAPPERS["generic"]
	if enhanced and not mapper.enhanced:
		return MAPPERS["enhanced-generic"]
	return mapper
