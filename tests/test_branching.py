from textwrap import dedent

import pytest

from projscan.branching import analyze_branching, find_branches, summarize_branches
from projscan.model import Branch, BranchKind, TemporalClass
from projscan.profiles import ProfileRegistry


registry = ProfileRegistry()

RUST_SAMPLE = dedent(
	"""
	fn check(order: &Order) -> bool {
		if order.date == "2024-12-25" {
			return true;
		}
		if order.total > 42 && order.count < 1024 {
			for item in order.items.iter() {
				if fs::metadata(&item.path).is_ok() {
					log(item);
				}
			}
		}
		while order.pending() {
			order.advance();
		}
		false
	}
	"""
)

SAMPLES = {
	"rust": RUST_SAMPLE,
	"python": dedent(
		"""
		def run(jobs):
			for job in jobs:
				if job.ready and not job.failed:
					while job.step():
						pass
				elif job.retries > 3:
					match job.kind:
						case "a":
							pass
		"""
	),
	"javascript": "for (const x of xs) { if (x > 7 || y) { z = x ? 1 : 2; } }",
	"c": "switch (m) { case 1: while (n--) { if (fopen(p)) {} } }",
	"generic": "if x == 10 { loop { } }",
}


def test_rust_sample_report():
	details = analyze_branching(RUST_SAMPLE, "rust", registry)
	assert details.conditional_count == 3
	assert details.loop_count == 2
	assert details.switch_count == 0
	assert details.total_branches == 5
	assert details.nesting_distribution == {1: 3, 2: 1, 3: 1}
	assert details.max_nesting == 3
	assert details.cyclomatic_complexity == 6
	assert details.cognitive_complexity == 8
	assert details.hardcoded_values_count == 2
	assert details.hardcoded_dates_count == 1
	assert details.pure_branches == 4
	assert details.non_pure_branches == 1
	assert details.past_logic_count == 1
	assert details.future_logic_count == 0
	assert details.logical_operators == 1
	assert details.hardcoded_percentage == 40
	assert details.pure_percentage == 80


@pytest.mark.parametrize("language", sorted(SAMPLES))
def test_report_invariants(language):
	d = analyze_branching(SAMPLES[language], language, registry)
	assert d.total_branches > 0
	assert d.total_branches == d.conditional_count + d.loop_count + d.switch_count
	assert d.pure_branches + d.non_pure_branches == d.total_branches
	assert sum(d.nesting_distribution.values()) == d.total_branches
	assert d.max_nesting == max(d.nesting_distribution)
	assert d.cyclomatic_complexity == d.total_branches + 1
	assert 0 <= d.hardcoded_percentage <= 100
	assert 0 <= d.pure_percentage <= 100


@pytest.mark.parametrize("language", sorted(SAMPLES))
def test_analysis_is_repeatable(language):
	first = analyze_branching(SAMPLES[language], language, registry)
	second = analyze_branching(SAMPLES[language], language, registry)
	assert first == second


def test_empty_input_is_baseline():
	d = analyze_branching("", "python")
	assert d.total_branches == 0
	assert d.cyclomatic_complexity == 1
	assert d.cognitive_complexity == 0
	assert d.nesting_distribution == {}
	assert d.hardcoded_percentage == 0
	assert d.pure_percentage == 0


def test_no_branches_yields_zero_counts():
	d = analyze_branching("let x = compute(1, 2);\nprint(x);\n", "rust")
	assert d.total_branches == 0
	assert d.cyclomatic_complexity == 1


def test_unknown_language_falls_back_to_generic():
	src = "if (x) { while (y) {} }"
	assert analyze_branching(src, "cobol") == analyze_branching(src, "generic")
	assert analyze_branching(src, None) == analyze_branching(src, "generic")


@pytest.mark.parametrize("language", registry.names())
def test_garbage_input_never_raises(language):
	junk = "\x00\xff{{{((\"unterminated /* if (a) { ? : }}}} ''' \\"
	d = analyze_branching(junk, language, registry)
	assert d.cyclomatic_complexity >= 1


def test_find_branches_classifies_each_branch():
	branches = find_branches(RUST_SAMPLE, "rust", registry)
	first = branches[0]
	assert first.kind is BranchKind.CONDITIONAL
	assert first.is_hardcoded
	assert first.has_date
	assert first.temporal_class is TemporalClass.PAST
	assert first.line == 3
	assert [b.is_pure for b in branches] == [True, True, True, False, True]


def test_summarize_branches():
	branches = [
		Branch(kind=BranchKind.CONDITIONAL, depth=1, condition="a", is_hardcoded=True),
		Branch(kind=BranchKind.LOOP, depth=2, condition="b", is_pure=False),
		Branch(kind=BranchKind.SWITCH, depth=2, condition="c", temporal_class=TemporalClass.FUTURE),
	]
	d = summarize_branches(branches, logical_operators=4)
	assert (d.conditional_count, d.loop_count, d.switch_count) == (1, 1, 1)
	assert d.nesting_distribution == {1: 1, 2: 2}
	assert d.cognitive_complexity == 5
	assert d.cyclomatic_complexity == 4
	assert d.hardcoded_percentage == 33
	assert d.pure_percentage == 67
	assert d.future_logic_count == 1
	assert d.logical_operators == 4


def test_message_strings_do_not_mark_branches_as_dated():
	src = 'if (log("build 2023")) { a(); }\nif (created < "01/01/2023") { b(); }\n'
	first, second = find_branches(src, "javascript", registry)
	assert (first.has_date, first.is_hardcoded, first.temporal_class) == (False, False, TemporalClass.NONE)
	assert (second.has_date, second.is_hardcoded, second.temporal_class) == (True, True, TemporalClass.PAST)
