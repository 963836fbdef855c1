import datetime

import pytest

from projscan.config import AnalyzerSettings
from projscan.model import TemporalClass
from projscan.temporal import classify_temporal


@pytest.mark.parametrize(
	"condition",
	[
		'release_date > "2025-06-01"',
		"api_level >= 35",
		'version >= "2.0.0"',
		'feature_flags.contains("new_ui")',
		"beta_features.enabled",
		"year > 2026",
	],
)
def test_future_logic(condition):
	assert classify_temporal(condition) is TemporalClass.FUTURE


@pytest.mark.parametrize(
	"condition",
	[
		'created_date < "2020-01-01"',
		"api_level < 21",
		'version < "1.0.0"',
		"deprecated_api_enabled",
		"legacy_mode",
		'support_end < "2023-12-31"',
		'date == "2024-12-25"',
	],
)
def test_past_logic(condition):
	assert classify_temporal(condition) is TemporalClass.PAST


@pytest.mark.parametrize("condition", ["x > 0", "count == 42", ""])
def test_no_temporal_signal(condition):
	assert classify_temporal(condition) is TemporalClass.NONE


def test_future_wins_over_past():
	assert classify_temporal("legacy_mode && year > 2026") is TemporalClass.FUTURE


def test_reference_date_is_configurable():
	settings = AnalyzerSettings(reference_date=datetime.date(2030, 1, 1))
	assert classify_temporal('release_date > "2025-06-01"', settings) is TemporalClass.PAST


@pytest.mark.parametrize("condition", ['log("build 2023")', 'banner.contains("2030-01-01")'])
def test_dates_in_message_strings_carry_no_signal(condition):
	assert classify_temporal(condition) is TemporalClass.NONE
