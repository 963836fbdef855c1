from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from projscan.branching import analyze_branching
from projscan.config import DEFAULT_IGNORE_PATTERNS, OutputFormat, ScanOptions
from projscan.errors import InvalidConfig, PathNotFound, PermissionDenied, ScanError
from projscan.fs_scan import DirectoryScanner, detect_language
from projscan.profiles import ProfileRegistry
from projscan.summarize import branching_breakdown, format_result, format_stats, to_json, to_yaml


logger = logging.getLogger("projscan")


def _options(args: argparse.Namespace) -> ScanOptions:
	try:
		return ScanOptions(
			max_depth=args.max_depth,
			ignore_patterns=list(DEFAULT_IGNORE_PATTERNS) + list(args.ignore or []),
			follow_symlinks=args.follow_symlinks,
			include_hidden=args.hidden,
			mapper_profile=args.profile,
			enhanced_analysis=args.enhanced,
			output_format=args.format,
			workers=args.workers,
		)
	except ValidationError as e:
		raise InvalidConfig(str(e))


def cmd_scan(args: argparse.Namespace) -> None:
	scanner = DirectoryScanner(_options(args), ProfileRegistry())
	result = scanner.scan(os.path.abspath(args.path))
	if args.json:
		print(to_json(result))
	elif args.yaml:
		print(to_yaml(result))
	else:
		print(format_result(result, scanner.options.output_format))
		print(format_stats(result))
	for error in result.errors:
		logger.warning(error)


def cmd_branching(args: argparse.Namespace) -> None:
	path = os.path.abspath(args.path)
	if not os.path.isfile(path):
		raise PathNotFound(path)
	try:
		with open(path, "r", encoding="utf-8", errors="replace") as fh:
			content = fh.read()
	except PermissionError:
		raise PermissionDenied(path)
	language = args.language or detect_language(path)
	details = analyze_branching(content, language, ProfileRegistry())
	if args.json:
		print(to_json(details))
	elif args.yaml:
		print(to_yaml(details))
	else:
		print(branching_breakdown(details) or "No branches found")


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="projscan")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	ps = sub.add_parser("scan", help="Scan a directory and print tagged entries")
	ps.add_argument("path", help="Directory to scan")
	ps.add_argument("--format", choices=[f.value for f in OutputFormat], default=OutputFormat.BASIC.value)
	ps.add_argument("--profile", default="generic", help="Mapper profile")
	ps.add_argument("--enhanced", action="store_true", help="Analyze file content")
	ps.add_argument("--max-depth", type=int, default=None)
	ps.add_argument("--ignore", action="append", metavar="PATTERN", help="Extra ignore substring")
	ps.add_argument("--hidden", action="store_true", help="Include hidden files")
	ps.add_argument("--follow-symlinks", action="store_true")
	ps.add_argument("--workers", type=int, default=4)
	out = ps.add_mutually_exclusive_group()
	out.add_argument("--json", action="store_true")
	out.add_argument("--yaml", action="store_true")
	ps.set_defaults(func=cmd_scan)

	pb = sub.add_parser("branching", help="Print the branching analysis of one file")
	pb.add_argument("path", help="Source file")
	pb.add_argument("--language", default=None, help="Language hint (defaults to the file extension)")
	out = pb.add_mutually_exclusive_group()
	out.add_argument("--json", action="store_true")
	out.add_argument("--yaml", action="store_true")
	pb.set_defaults(func=cmd_branching)

	pv = sub.add_parser("serve", help="Run FastAPI server")
	pv.add_argument("--host", default="127.0.0.1")
	pv.add_argument("--port", type=int, default=8000)
	pv.add_argument("--reload", action="store_true")
	pv.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> None:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)
	try:
		args.func(args)
	except ScanError as e:
		print(f"error: {e}", file=sys.stderr)
		sys.exit(1)


if __name__ == "__main__":
	main()
