from __future__ import annotations

import re
from typing import Optional

from .config import AnalyzerSettings
from .hardcoded import date_view, find_dates, find_years
from .model import LanguageProfile, TemporalClass


_FUTURE_OPS = (">", ">=")
_PAST_OPS = ("<", "<=")
_FLIPPED = {">": "<", ">=": "<=", "<": ">", "<=": ">="}

_VERSION_RIGHT = re.compile(r"(>=|<=|>|<)\s*[\"']v?(\d+)\.\d+")
_VERSION_LEFT = re.compile(r"[\"']v?(\d+)\.\d+(?:\.\d+)*[\"']\s*(>=|<=|>|<)(?!=)")
_API_LEVEL = re.compile(
	r"(?<![\w])(?:api_level|api_version|sdk_int|SDK_INT|minSdkVersion|targetSdkVersion)\s*(>=|<=|>|<)"
)
_FEATURE_FLAG = re.compile(
	r"feature_?flags?|beta_?features?|experimental|feature_?enabled|feature_?toggle|isFeatureEnabled",
	re.IGNORECASE,
)
_PAST_MARKER = re.compile(
	r"deprecat|legacy|end_?of_?life|(?<![a-z])eol(?![a-z])|support_?end|sunset|obsolete",
	re.IGNORECASE,
)


def _version_signal(condition: str, settings: AnalyzerSettings) -> Optional[TemporalClass]:
	comparisons = [(m.group(1), int(m.group(2))) for m in _VERSION_RIGHT.finditer(condition)]
	comparisons += [(_FLIPPED[m.group(2)], int(m.group(1))) for m in _VERSION_LEFT.finditer(condition)]
	signal = None
	for op, major in comparisons:
		if op in _FUTURE_OPS and major >= settings.future_version_major:
			return TemporalClass.FUTURE
		if op in _PAST_OPS and major < settings.future_version_major:
			signal = TemporalClass.PAST
	return signal


def _date_signal(condition: str, settings: AnalyzerSettings, profile: Optional[LanguageProfile]) -> Optional[TemporalClass]:
	cutoff = settings.reference_date
	view = date_view(condition, profile)
	later = earlier = False
	for date, _ in find_dates(view):
		later = later or date > cutoff
		earlier = earlier or date < cutoff
	for year in find_years(view):
		later = later or year > cutoff.year
		earlier = earlier or year < cutoff.year
	if later:
		return TemporalClass.FUTURE
	if earlier:
		return TemporalClass.PAST
	return None


def classify_temporal(
	condition: str,
	settings: Optional[AnalyzerSettings] = None,
	profile: Optional[LanguageProfile] = None,
) -> TemporalClass:
	"""Future signals win over past ones when a condition carries both."""
	if not condition:
		return TemporalClass.NONE
	settings = settings or AnalyzerSettings()

	dates = _date_signal(condition, settings, profile)
	versions = _version_signal(condition, settings)
	api_ops = [m.group(1) for m in _API_LEVEL.finditer(condition)]

	if (
		dates is TemporalClass.FUTURE
		or versions is TemporalClass.FUTURE
		or any(op in _FUTURE_OPS for op in api_ops)
		or _FEATURE_FLAG.search(condition)
	):
		return TemporalClass.FUTURE
	if (
		dates is TemporalClass.PAST
		or versions is TemporalClass.PAST
		or any(op in _PAST_OPS for op in api_ops)
		or _PAST_MARKER.search(condition)
	):
		return TemporalClass.PAST
	return TemporalClass.NONE
