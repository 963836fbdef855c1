from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Set, Tuple

from .branching import analyze_branching
from .config import AnalyzerSettings, ScanOptions
from .errors import LimitExceeded, PathNotFound, PermissionDenied, ScanError
from .mapper import get_mapper
from .model import EnhancedFileInfo, FileEntry, ScanResult, ScanStats
from .profiles import ProfileRegistry
from .scoring import complexity_score, content_summary, importance_score, infer_purpose
from .surface import extract_surface


logger = logging.getLogger(__name__)


EXTENSION_LANGUAGE: Dict[str, str] = {
	".rs": "rust",
	".py": "python",
	".js": "javascript",
	".jsx": "javascript",
	".ts": "typescript",
	".tsx": "typescript",
	".go": "go",
	".java": "java",
	".c": "c",
	".h": "c",
	".hpp": "c",
	".cpp": "cpp",
	".cxx": "cpp",
	".cc": "cpp",
	".md": "markdown",
	".json": "json",
	".yaml": "yaml",
	".yml": "yaml",
	".toml": "toml",
	".sh": "shell",
	".bash": "shell",
}


def detect_language(filename: str) -> Optional[str]:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower())


def _first_visit(path: str, visited: Set[Tuple[int, int]]) -> bool:
	try:
		st = os.stat(path)
	except OSError:
		return False
	key = (st.st_dev, st.st_ino)
	if key in visited:
		logger.debug("not descending into %s again, already visited", path)
		return False
	visited.add(key)
	return True


class DirectoryScanner:
	"""Walks a directory tree, tags every entry and optionally analyzes file content."""

	def __init__(
		self,
		options: Optional[ScanOptions] = None,
		registry: Optional[ProfileRegistry] = None,
		settings: Optional[AnalyzerSettings] = None,
	):
		self.options = options or ScanOptions()
		self.registry = registry or ProfileRegistry()
		self.settings = settings or AnalyzerSettings()
		self.mapper = get_mapper(self.options.mapper_profile, self.options.enhanced_analysis)

	def should_ignore(self, rel_path: str, name: str) -> bool:
		if not self.options.include_hidden and name.startswith(".") and name not in (".", ".."):
			return True
		return any(pattern in rel_path for pattern in self.options.ignore_patterns)

	def _walk(self, root: str, errors: List[str]) -> List[FileEntry]:
		entries = [self._entry(root, root)]
		max_depth = self.options.max_depth
		follow = self.options.follow_symlinks
		# (st_dev, st_ino) of directories already descended into
		visited: Set[Tuple[int, int]] = set()
		if follow:
			_first_visit(root, visited)

		def on_error(exc: OSError) -> None:
			errors.append(str(PermissionDenied(exc.filename)) if isinstance(exc, PermissionError) else f"Walk error: {exc}")

		for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=follow):
			rel = os.path.relpath(dirpath, root)
			depth = 0 if rel == os.curdir else rel.count(os.sep) + 1
			if max_depth is not None and depth >= max_depth:
				dirnames[:] = []
				continue
			dirnames[:] = sorted(d for d in dirnames if not self.should_ignore(os.path.join(rel, d), d))
			visible = [f for f in sorted(filenames) if not self.should_ignore(os.path.join(rel, f), f)]
			for name in dirnames + visible:
				path = os.path.join(dirpath, name)
				try:
					entries.append(self._entry(root, path))
				except OSError as e:
					logger.debug("stat failed for %s: %s", path, e)
					errors.append(f"{path}: {e}")
			if follow:
				dirnames[:] = [d for d in dirnames if _first_visit(os.path.join(dirpath, d), visited)]
		return entries

	def _entry(self, root: str, path: str) -> FileEntry:
		st = os.stat(path) if self.options.follow_symlinks else os.lstat(path)
		is_dir = os.path.isdir(path) and (self.options.follow_symlinks or not os.path.islink(path))
		rel_path = os.path.relpath(path, root)
		return FileEntry(
			path=path,
			rel_path=rel_path,
			name=os.path.basename(path) or rel_path,
			size=0 if is_dir else st.st_size,
			modified=st.st_mtime,
			is_dir=is_dir,
		)

	def _read(self, entry: FileEntry) -> str:
		if entry.size > self.options.max_file_size:
			raise LimitExceeded(entry.path, entry.size, self.options.max_file_size)
		try:
			with open(entry.path, "r", encoding="utf-8", errors="replace") as fh:
				return fh.read()
		except PermissionError:
			raise PermissionDenied(entry.path)

	def analyze_entry(self, entry: FileEntry) -> Tuple[EnhancedFileInfo, Optional[str]]:
		language = detect_language(entry.name)
		content = self._read(entry)
		branching = analyze_branching(content, language, self.registry, self.settings)
		complexity = complexity_score(content, language, branching)
		surface = extract_surface(content, language)
		info = EnhancedFileInfo(
			language=language,
			line_count=len(content.splitlines()),
			complexity_score=complexity,
			importance_score=importance_score(entry.rel_path, entry.size, complexity, len(surface.api)),
			content_summary=content_summary(content, language),
			purpose=infer_purpose(entry.rel_path, content, language),
			exports=surface.exports,
			imports=surface.imports,
			api_surface=surface.api,
			branching=branching,
		)
		return info, content

	def _process(self, entry: FileEntry) -> Tuple[FileEntry, Optional[str]]:
		if entry.is_dir:
			entry.tags = self.mapper.classify(entry)
			return entry, None
		content = None
		error = None
		if self.options.enhanced_analysis:
			try:
				entry.enhanced_info, content = self.analyze_entry(entry)
			except ScanError as e:
				logger.warning("skipping analysis of %s: %s", entry.path, e)
				error = f"Enhanced analysis failed for {entry.path}: {e}"
			except OSError as e:
				logger.warning("could not read %s: %s", entry.path, e)
				error = f"Enhanced analysis failed for {entry.path}: {e}"
		entry.tags = self.mapper.classify(entry, content)
		return entry, error

	def scan(self, root: str) -> ScanResult:
		started = time.perf_counter()
		root = os.path.abspath(root)
		if not os.path.exists(root):
			raise PathNotFound(root)

		errors: List[str] = []
		entries = self._walk(root, errors)
		logger.debug("found %d entries under %s", len(entries), root)

		with ThreadPoolExecutor(max_workers=self.options.workers) as pool:
			processed = list(pool.map(self._process, entries))

		files: List[FileEntry] = []
		for entry, error in processed:
			files.append(entry)
			if error:
				errors.append(error)

		elapsed = time.perf_counter() - started
		file_count = sum(1 for f in files if not f.is_dir)
		stats = ScanStats(
			total_files=file_count,
			total_dirs=len(files) - file_count,
			total_size=sum(f.size for f in files if not f.is_dir),
			scan_duration_ms=int(elapsed * 1000),
			files_per_second=round(len(files) / elapsed, 2) if elapsed > 0 else 0.0,
		)
		return ScanResult(root_path=root, files=files, stats=stats, errors=errors)
