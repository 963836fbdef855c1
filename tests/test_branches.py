from textwrap import dedent

from projscan.branches import count_logical_operators, scan_branches
from projscan.model import BranchKind
from projscan.profiles import ProfileRegistry
from projscan.scrub import scrub


registry = ProfileRegistry()

COND = BranchKind.CONDITIONAL
LOOP = BranchKind.LOOP
SWITCH = BranchKind.SWITCH


def scan(src, language):
	profile = registry.get(language)
	return scan_branches(scrub(src, profile), profile)


def shape(result):
	return [(b.kind, b.depth) for b in result.branches]


def test_nested_c_constructs():
	src = dedent(
		"""
		int f(int a, int b) {
			if (a > 0) {
				for (int i = 0; i < b; i++) {
					while (b) {
						b--;
					}
				}
			}
			switch (a) {
			case 1:
				break;
			}
			return 0;
		}
		"""
	)
	result = scan(src, "c")
	assert shape(result) == [(COND, 1), (LOOP, 2), (LOOP, 3), (SWITCH, 1)]
	assert [b.condition for b in result.branches] == ["a > 0", "int i = 0; i < b; i++", "b", "a"]
	assert result.max_nesting == 3


def test_keywords_in_comments_and_strings_are_ignored():
	src = dedent(
		"""
		// if (a) { }
		/* while (x) { } */
		const s = "for (;;) {} && ||";
		if (ready) { go(); }
		"""
	)
	result = scan(src, "javascript")
	assert shape(result) == [(COND, 1)]
	assert result.branches[0].condition == "ready"
	assert result.logical_operators == 0


def test_else_if_chain_stays_at_same_depth():
	src = dedent(
		"""
		if (a) {
			x();
		} else if (b) {
			y();
		} else {
			if (c) {
				z();
			}
		}
		"""
	)
	assert shape(scan(src, "java")) == [(COND, 1), (COND, 1), (COND, 2)]


def test_ternary_counts_as_conditional():
	result = scan('const v = a > 1 ? "x" : "y";', "javascript")
	assert shape(result) == [(COND, 1)]
	assert result.branches[0].condition == "a > 1"


def test_optional_chaining_is_not_a_ternary():
	assert scan('const v = obj?.name ?? "anon";', "typescript").branches == []


def test_do_while_is_one_loop():
	src = dedent(
		"""
		do {
			step();
		} while (count < 10);
		"""
	)
	result = scan(src, "javascript")
	assert shape(result) == [(LOOP, 1)]
	assert result.branches[0].condition == "count < 10"


def test_rust_impl_for_and_match_guards():
	src = dedent(
		"""
		impl Display for Point {
			fn fmt(&self) {
				for p in pts {
					if p.x > 3 { }
				}
				match v {
					Some(n) if n > 3 => big(),
					_ => small(),
				}
			}
		}
		"""
	)
	result = scan(src, "rust")
	assert shape(result) == [(LOOP, 1), (COND, 2), (SWITCH, 1), (COND, 2)]
	assert result.branches[0].condition == "p in pts"
	assert result.branches[3].condition == "n > 3"


def test_python_and_c_nesting_match():
	c_src = dedent(
		"""
		if (a) {
			for (i = 0; i < n; i++) {
				if (b) {
					x();
				}
			}
		} else if (c) {
			y();
		}
		while (d) {
			z();
		}
		"""
	)
	py_src = dedent(
		"""
		if a:
			for i in range(n):
				if b:
					x()
		elif c:
			y()
		while d:
			z()
		"""
	)
	expected = [(COND, 1), (LOOP, 2), (COND, 3), (COND, 1), (LOOP, 1)]
	assert shape(scan(c_src, "c")) == expected
	assert shape(scan(py_src, "python")) == expected


def test_python_inline_forms():
	src = dedent(
		"""
		def f(items, ok):
			values = [v for v in items if v > 0]
			label = "a" if ok else "b"
			return values, label
		"""
	)
	result = scan(src, "python")
	assert shape(result) == [(LOOP, 1), (COND, 1), (COND, 1)]
	assert [b.condition for b in result.branches] == ["v in items", "v > 0", "ok"]


def test_python_match_is_soft_keyword():
	src = dedent(
		"""
		match = re.match(p, s)
		match command:
			case "go":
				pass
		"""
	)
	assert shape(scan(src, "python")) == [(SWITCH, 1)]


def test_python_multiline_string_keeps_blocks():
	src = 'def f():\n\tdoc = """\nif fake:\n\tpass\n"""\n\tif real:\n\t\tpass\n'
	result = scan(src, "python")
	assert shape(result) == [(COND, 1)]
	assert result.branches[0].condition == "real"


def test_logical_operators():
	c = registry.get("c")
	py = registry.get("python")
	assert count_logical_operators(scrub("if (a && b || !c) {}", c).code, c) == 2
	assert count_logical_operators(scrub("if a and b or not c:", py).code, py) == 2
	assert count_logical_operators(scrub("android or_else", py).code, py) == 0


def test_unmatched_closers_are_clamped():
	result = scan("}}} if (a) { if (b) {", "c")
	assert shape(result) == [(COND, 1), (COND, 2)]


def test_deep_nesting_does_not_recurse():
	braces = "if (x) {" * 50 + "}" * 50
	result = scan(braces, "c")
	assert len(result.branches) == 50
	assert result.max_nesting == 50

	indented = "".join(" " * i + "if x:\n" for i in range(50)) + " " * 50 + "pass\n"
	result = scan(indented, "python")
	assert len(result.branches) == 50
	assert result.max_nesting == 50


def test_line_numbers():
	result = scan("a = 1;\nif (x) {\n}\n", "c")
	assert result.branches[0].line == 2


def test_rust_char_literals_do_not_break_blocks():
	src = dedent(
		"""
		if c == '"' {
			quote();
		}
		if c == '}' {
			if ready {
				go();
			}
		}
		"""
	)
	result = scan(src, "rust")
	assert shape(result) == [(COND, 1), (COND, 1), (COND, 2)]
	assert [b.condition for b in result.branches] == ["c == '\"'", "c == '}'", "ready"]


def test_javascript_regex_literal_does_not_hide_branches():
	result = scan('if (/"/.test(s)) { a(); } if (b) { c(); }', "javascript")
	assert shape(result) == [(COND, 1), (COND, 1)]
	assert result.branches[1].condition == "b"
