import datetime

import pytest

from projscan.hardcoded import contains_date, find_dates, find_years, is_hardcoded, magic_numbers
from projscan.profiles import ProfileRegistry


registry = ProfileRegistry()
rust = registry.get("rust")


@pytest.mark.parametrize(
	"condition",
	[
		'date == "2024-12-25"',
		'expiry > "2025-01-01T00:00:00Z"',
		'birth_date == "12/25/1990"',
		"year < 2022",
		"count > 42",
		"ratio == 3.14159",
		"status == 404",
		"temp < -273.15",
		"mask & 0xFF00 != 0",
		'role == "admin"',
	],
)
def test_flags_hardcoded_conditions(condition):
	assert is_hardcoded(condition, rust)


@pytest.mark.parametrize(
	"condition",
	[
		"x == 0",
		"n > 1",
		"len < 1024",
		"size == 256",
		"n % 2 == 0",
		"idx != -1",
		"item_2024 > limit",
		"v42 == x",
		"user.is_admin()",
		"",
	],
)
def test_ignores_common_values_and_identifiers(condition):
	assert not is_hardcoded(condition, rust)


def test_string_comparison_forms():
	java = registry.get("java")
	assert is_hardcoded('name.equals("admin")', java)
	assert not is_hardcoded('msg.contains("err")', java)
	assert is_hardcoded('strcmp(mode, "fast") == 0', registry.get("c"))


def test_numbers_inside_strings_are_not_magic():
	assert not is_hardcoded('log("retry 42 times")', rust)
	assert magic_numbers("retry > 42 || n == 0", rust) == ["42"]


def test_find_dates_validates_calendar():
	assert find_dates('d == "2024-02-30"') == []
	assert find_dates('d == "13/45/2020"') == []
	[(date, span)] = find_dates('d == "2024-02-29"')
	assert date == datetime.date(2024, 2, 29)
	assert span == (6, 16)


def test_years_inside_dates_are_not_counted_twice():
	assert find_years('d == "2024-12-25"') == []
	assert find_years("year < 2022 && id > 1000") == [2022]


def test_contains_date():
	assert contains_date('created < "01/01/2023"')
	assert not contains_date("count > 42")


@pytest.mark.parametrize(
	"condition",
	[
		'log("build 2023")',
		'notify("released 2024-12-25")',
		'cout << "since 1999"',
	],
)
def test_dates_in_message_strings_are_ignored(condition):
	assert not contains_date(condition, rust)
	assert not is_hardcoded(condition, rust)


def test_dates_compared_by_ordering_still_count():
	assert contains_date('"2023-01-01" <= started', rust)
	assert contains_date('deadline >= "12/31/2025" && log("1999")', rust)
