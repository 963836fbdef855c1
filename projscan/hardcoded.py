from __future__ import annotations

import datetime
import re
from typing import List, Optional, Tuple

from .model import LanguageProfile
from .profiles import GENERIC
from .scrub import scrub


YEAR_RANGE = (1970, 2099)

# a literal glued to a longer identifier never counts: item_2024, v42, x1
_ISO_DATE = re.compile(r"(?<![\w.])(\d{4})([-/.])(\d{2})\2(\d{2})(?=T\d|[^\w]|$)")
_SLASH_DATE = re.compile(r"(?<![\w/.])(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?![\w/])")
_YEAR = re.compile(r"(?<![\w.])(\d{4})(?![\w.])")
_NUMBER = re.compile(
	r"(?<![\w.])-?"
	r"(0[xX][0-9a-fA-F_]+|0[bB][01_]+|\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?)"
	r"(?:[uUlLfFdD]|[ui](?:8|16|32|64|128|size)|f(?:32|64))?"
	r"(?![\w.])"
)
_CMP_BEFORE = re.compile(
	r"(?:===|!==|==|!=|<>|\bis(?:\s+not)?|\.equals(?:IgnoreCase)?\s*\(|strcmp\s*\((?:[^,()]*,)?)\s*[A-Za-z]{0,2}$"
)
_CMP_AFTER = re.compile(r"^\s*(?:===|!==|==|!=|<>|\.equals(?:IgnoreCase)?\s*\()")
# ordering operators, for literal dates; arrows (=>, ->) and shifts excluded
_ORDER_BEFORE = re.compile(r"(?<![-=<>])(?:<=|>=|<|>)\s*[A-Za-z]{0,2}$")
_ORDER_AFTER = re.compile(r"^\s*(?:<=|>=|<(?![<=])|>(?![>=]))")


def _date_or_none(year: int, month: int, day: int) -> Optional[datetime.date]:
	try:
		return datetime.date(year, month, day)
	except ValueError:
		return None


def find_dates(condition: str) -> List[Tuple[datetime.date, Tuple[int, int]]]:
	"""All calendar-valid dates in the condition with their (start, end) spans."""
	found: List[Tuple[datetime.date, Tuple[int, int]]] = []
	for m in _ISO_DATE.finditer(condition):
		year = int(m.group(1))
		if not 1900 <= year <= 2199:
			continue
		date = _date_or_none(year, int(m.group(3)), int(m.group(4)))
		if date is not None:
			found.append((date, m.span()))
	for m in _SLASH_DATE.finditer(condition):
		first, second, year_text = int(m.group(1)), int(m.group(2)), m.group(3)
		year = int(year_text)
		if len(year_text) == 2:
			year += 2000 if year < 70 else 1900
		month, day = (first, second) if first <= 12 else (second, first)
		date = _date_or_none(year, month, day)
		if date is not None:
			found.append((date, m.span()))
	return found


def find_years(condition: str, profile: Optional[LanguageProfile] = None) -> List[int]:
	"""Standalone year tokens that are not part of a full date."""
	taken = [span for _, span in find_dates(condition)]
	common = profile.common_values if profile is not None else frozenset()
	years: List[int] = []
	for m in _YEAR.finditer(condition):
		if any(s <= m.start() < e for s, e in taken):
			continue
		year = int(m.group(1))
		if YEAR_RANGE[0] <= year <= YEAR_RANGE[1] and float(year) not in common:
			years.append(year)
	return years


def _compared(code: str, start: int, end: int, ordered: bool = False) -> bool:
	before, after = code[:start], code[end:]
	if _CMP_BEFORE.search(before) or _CMP_AFTER.search(after):
		return True
	return ordered and bool(_ORDER_BEFORE.search(before) or _ORDER_AFTER.search(after))


def date_view(condition: str, profile: Optional[LanguageProfile] = None) -> str:
	"""The condition with every string literal blanked except comparison operands.

	A date in `expiry > "2025-01-01"` is a hard-coded cutoff; the same text in
	`log("built 2025-01-01")` is just a message.
	"""
	scrubbed = scrub(condition, profile or GENERIC)
	chars = list(scrubbed.text)
	for span in scrubbed.literals():
		if not _compared(scrubbed.code, span.start, span.end, ordered=True):
			chars[span.start:span.end] = " " * (span.end - span.start)
	return "".join(chars)


def contains_date(condition: str, profile: Optional[LanguageProfile] = None) -> bool:
	view = date_view(condition, profile)
	return bool(find_dates(view)) or bool(find_years(view, profile))


def _number_value(literal: str) -> Optional[float]:
	cleaned = literal.replace("_", "")
	try:
		if cleaned[:2].lower() in ("0x", "0b"):
			return float(int(cleaned, 0))
		return float(cleaned)
	except ValueError:
		return None


def magic_numbers(code: str, profile: LanguageProfile) -> List[str]:
	"""Numeric literals outside the profile's common-value set."""
	found = []
	for m in _NUMBER.finditer(code):
		value = _number_value(m.group(1))
		if value is None:
			continue
		if m.group(0).startswith("-"):
			value = -value
		if value not in profile.common_values:
			found.append(m.group(0))
	return found


def has_string_comparison(condition: str, profile: LanguageProfile) -> bool:
	scrubbed = scrub(condition, profile)
	return any(_compared(scrubbed.code, s.start, s.end) for s in scrubbed.literals())


def is_hardcoded(condition: str, profile: LanguageProfile) -> bool:
	if not condition:
		return False
	if contains_date(condition, profile):
		return True
	# numbers inside string literals are judged by the comparison check only
	code = scrub(condition, profile).code
	if magic_numbers(code, profile):
		return True
	return has_string_comparison(condition, profile)
