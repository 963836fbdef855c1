"""Public surface of a source file: exported names, imports and API signatures.

Python sources are parsed with `ast`; Rust and JavaScript/TypeScript are read
line by line. Files that do not parse, and languages without an extractor,
yield an empty surface.
"""

from __future__ import annotations

import ast
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Surface:
	exports: List[str] = field(default_factory=list)
	imports: List[str] = field(default_factory=list)
	api: List[str] = field(default_factory=list)


def _format_args(args: ast.arguments) -> str:
	parts: List[str] = []
	for a in args.posonlyargs:
		parts.append(a.arg)
	if args.posonlyargs:
		parts.append("/")
	for a in args.args:
		parts.append(a.arg)
	if args.vararg:
		parts.append("*" + args.vararg.arg)
	elif args.kwonlyargs:
		parts.append("*")
	for a in args.kwonlyargs:
		parts.append(a.arg)
	if args.kwarg:
		parts.append("**" + args.kwarg.arg)
	return ", ".join(parts)


def python_surface(content: str) -> Surface:
	try:
		tree = ast.parse(content)
	except (SyntaxError, ValueError) as e:
		logger.debug("no python surface, parse failed: %s", e)
		return Surface()

	surface = Surface()
	imports: List[str] = []
	for node in tree.body:
		if isinstance(node, ast.Import):
			for alias in node.names:
				imports.append(alias.name)
		elif isinstance(node, ast.ImportFrom):
			module = "." * node.level + (node.module or "")
			for alias in node.names:
				imports.append(f"{module}.{alias.name}" if node.module else module + alias.name)
		elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
			if node.name.startswith("_"):
				continue
			surface.exports.append(node.name)
			prefix = "async def" if isinstance(node, ast.AsyncFunctionDef) else "def"
			surface.api.append(f"{prefix} {node.name}({_format_args(node.args)})")
		elif isinstance(node, ast.ClassDef):
			if node.name.startswith("_"):
				continue
			surface.exports.append(node.name)
			bases = ", ".join(ast.unparse(b) for b in node.bases)
			surface.api.append(f"class {node.name}({bases})" if bases else f"class {node.name}")
	surface.imports = sorted(set(imports))
	return surface


_RUST_ITEM = re.compile(r"^pub(?:\([^)]*\))?\s+(?:(?:async|const|unsafe|extern\s+\"\w+\")\s+)*(fn|struct|enum|trait)\s+(\w+)")
_RUST_USE = re.compile(r"^(?:pub(?:\([^)]*\))?\s+)?use\s+([^;]+);?")


def rust_surface(content: str) -> Surface:
	surface = Surface()
	for line in content.splitlines():
		trimmed = line.strip()
		m = _RUST_ITEM.match(trimmed)
		if m:
			surface.exports.append(m.group(2))
			surface.api.append(trimmed.rstrip("{").rstrip())
			continue
		m = _RUST_USE.match(trimmed)
		if m:
			surface.imports.append(m.group(1).strip())
	return surface


_JS_DECL = re.compile(
	r"^export\s+(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
	r"(function\*?|class|const|let|var|interface|type|enum)\s+(\w+)"
)
_JS_NAMED = re.compile(r"^export\s+(?:type\s+)?\{([^}]*)\}")
_JS_IMPORT = re.compile(r"""^import\s+(?:.*?\bfrom\s+)?["']([^"']+)["']""")


def javascript_surface(content: str) -> Surface:
	surface = Surface()
	for line in content.splitlines():
		trimmed = line.strip()
		m = _JS_DECL.match(trimmed)
		if m:
			surface.exports.append(m.group(2))
			if m.group(1) in ("function", "function*", "class"):
				surface.api.append(trimmed.rstrip("{").rstrip())
			continue
		m = _JS_NAMED.match(trimmed)
		if m:
			for item in m.group(1).split(","):
				# `a as b` exports b
				name = item.split()[-1] if item.split() else ""
				if name:
					surface.exports.append(name)
			continue
		m = _JS_IMPORT.match(trimmed)
		if m:
			surface.imports.append(m.group(1))
	return surface


EXTRACTORS: Dict[str, Callable[[str], Surface]] = {
	"python": python_surface,
	"rust": rust_surface,
	"javascript": javascript_surface,
	"typescript": javascript_surface,
}


def extract_surface(content: str, language: Optional[str]) -> Surface:
	extractor = EXTRACTORS.get(language or "")
	if extractor is None:
		return Surface()
	return extractor(content)
