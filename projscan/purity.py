from __future__ import annotations

import re
from typing import List

from .model import LanguageProfile
from .scrub import scrub


def symbol_pattern(symbol: str) -> str:
	"""Word-boundary aware matcher for one impure symbol.

	`GLOBAL_` is a prefix, `socket` a whole word, `.read(` a plain substring.
	"""
	head = r"(?<![\w])" if symbol[0].isalnum() or symbol[0] == "_" else ""
	tail = r"(?![\w])" if symbol[-1].isalnum() else ""
	return head + re.escape(symbol) + tail


def impure_categories(condition: str, profile: LanguageProfile) -> List[str]:
	if not condition:
		return []
	code = scrub(condition, profile).code
	hits = []
	for category, symbols in profile.impure_symbols.items():
		if any(re.search(symbol_pattern(s), code) for s in symbols):
			hits.append(category)
	return hits


def is_pure(condition: str, profile: LanguageProfile) -> bool:
	return not impure_categories(condition, profile)
