from projscan.profiles import ProfileRegistry
from projscan.scrub import State, scrub


registry = ProfileRegistry()


def test_comments_and_strings_blanked_with_offsets_kept():
	src = 'x = 1 // if (a) {\ny = "if (b)" /* while */ + 2\n'
	out = scrub(src, registry.get("c"))
	assert len(out.code) == len(src)
	assert len(out.text) == len(src)
	assert out.code.count("\n") == src.count("\n")
	assert "if" not in out.code
	assert "while" not in out.code
	assert '"if (b)"' in out.text
	assert "while" not in out.text


def test_escaped_delimiter_does_not_close_string():
	src = 'if (s == "a\\"b") {}'
	out = scrub(src, registry.get("javascript"))
	assert out.code.startswith("if (s == ")
	assert out.code.endswith(") {}")
	[literal] = out.literals()
	assert src[literal.start:literal.end] == '"a\\"b"'


def test_unterminated_block_comment_runs_to_end():
	src = "if (a) { /* never closed\nif (b) {}"
	out = scrub(src, registry.get("c"))
	last = out.spans[-1]
	assert last.state is State.BLOCK_COMMENT
	assert last.end == len(src)
	assert "if (b)" not in out.code


def test_unterminated_string_runs_to_end():
	src = 'let s = "oops\nif (b) {}'
	out = scrub(src, registry.get("javascript"))
	assert out.spans[-1].state is State.STRING_LITERAL
	assert out.spans[-1].end == len(src)
	assert "if" not in out.code


def test_raw_rust_string_ignores_escapes():
	src = 'let p = r#"C:\\dir\\"#; if x {}'
	out = scrub(src, registry.get("rust"))
	assert "if x {}" in out.code
	assert len(out.literals()) == 1


def test_python_triple_quoted_string():
	src = 'x = """if a:\n    pass"""\nif b:\n    pass\n'
	out = scrub(src, registry.get("python"))
	assert out.code.count("if") == 1
	assert out.code.count("\n") == 4


def test_spans_cover_input():
	src = "a // b\n'c' d"
	out = scrub(src, registry.get("generic"))
	assert out.spans[0].start == 0
	assert out.spans[-1].end == len(src)
	for before, after in zip(out.spans, out.spans[1:]):
		assert before.end == after.start


def test_empty_input():
	out = scrub("", registry.get("python"))
	assert out.code == ""
	assert out.spans == []


def test_rust_char_literals_hold_quotes_and_braces():
	src = "if c == '\"' { quote(); } if c == '}' { close(); } if ready { go(); }"
	out = scrub(src, registry.get("rust"))
	assert len(out.literals()) == 2
	assert "if ready { go(); }" in out.code
	assert out.code.count("{") == out.code.count("}") == 3


def test_rust_escaped_char_literals():
	src = r"if c == '\'' || c == '\u{1F600}' || c == '\x7f' { x(); }"
	out = scrub(src, registry.get("rust"))
	assert len(out.literals()) == 3
	assert out.code.endswith("{ x(); }")


def test_rust_lifetimes_stay_in_code():
	src = "fn first<'a>(x: &'a str, y: &'static str) -> &'a str { x }"
	out = scrub(src, registry.get("rust"))
	assert out.literals() == []
	assert out.code == src


def test_javascript_regex_literal_is_a_literal():
	src = 'if (/"/.test(s)) { a(); } if (b) { c(); }'
	out = scrub(src, registry.get("javascript"))
	[literal] = out.literals()
	assert src[literal.start:literal.end] == '/"/'
	assert "if (b) { c(); }" in out.code


def test_javascript_regex_with_class_and_flags():
	src = "const re = /[/'\"]+\\//gi; if (x) {}"
	out = scrub(src, registry.get("javascript"))
	[literal] = out.literals()
	assert src[literal.start:literal.end] == "/[/'\"]+\\//gi"
	assert out.code.endswith("; if (x) {}")


def test_javascript_division_is_code():
	src = "const r = total / count / 2; if (r) {}"
	out = scrub(src, registry.get("javascript"))
	assert out.literals() == []
	assert out.code == src
