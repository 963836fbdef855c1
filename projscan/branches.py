"""Branch discovery over scrubbed source text.

Two walkers share one contract: every conditional, loop or switch keyword in
code yields one Branch at the nesting depth active when it is met (top level
is 1). Brace languages track nesting with an explicit frame stack; the
indentation walker keeps a stack of (indent, is_branch) frames. Neither
recurses, so arbitrarily deep input cannot exhaust the call stack.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Pattern, Tuple

from .model import BlockStyle, Branch, BranchKind, ConditionStyle, LanguageProfile
from .scrub import Scrubbed


_WORD = re.compile(r"[^\W\d]\w*")
_LEADING_KEYWORD = re.compile(r"^(?:return|yield|await)\b\s*")
_IMPL = re.compile(r"\bimpl\b")

_PLAIN = "plain"
_BRANCH = "branch"
_DO = "do"

# indentation languages: inline forms (conditional expressions, comprehensions)
_INLINE_KINDS = {"if": BranchKind.CONDITIONAL, "for": BranchKind.LOOP}
_INLINE_STOP = frozenset({"if", "for", "else", "async"})
_SOFT_KEYWORDS = frozenset({"match"})
_NOT_A_STATEMENT = ("=", ".", ",", ")", "]", "}")


@dataclass
class BranchScan:
	branches: List[Branch] = field(default_factory=list)
	logical_operators: int = 0

	@property
	def max_nesting(self) -> int:
		return max((b.depth for b in self.branches), default=0)


class _LineIndex:
	def __init__(self, text: str):
		self._newlines = [i for i, c in enumerate(text) if c == "\n"]

	def line_of(self, offset: int) -> int:
		return bisect.bisect_left(self._newlines, offset) + 1


def _is_word_char(c: str) -> bool:
	return c.isalnum() or c == "_"


def _skip_ws(code: str, i: int, end: Optional[int] = None) -> int:
	end = len(code) if end is None else end
	while i < end and code[i].isspace():
		i += 1
	return i


def _prev_significant(code: str, i: int) -> str:
	k = i - 1
	while k >= 0 and code[k].isspace():
		k -= 1
	return code[k] if k >= 0 else ""


def _next_significant(code: str, i: int, end: Optional[int] = None) -> str:
	k = _skip_ws(code, i, end)
	limit = len(code) if end is None else end
	return code[k] if k < limit else ""


def _match_paren(code: str, i: int) -> int:
	level = 0
	for k in range(i, len(code)):
		c = code[k]
		if c == "(":
			level += 1
		elif c == ")":
			level -= 1
			if level == 0:
				return k
	return len(code)


def logical_operator_pattern(profile: LanguageProfile) -> Optional[Pattern[str]]:
	parts = []
	for token in sorted(profile.logical_and | profile.logical_or, key=len, reverse=True):
		if _is_word_char(token[0]):
			parts.append(r"\b%s\b" % re.escape(token))
		else:
			parts.append(re.escape(token))
	if not parts:
		return None
	return re.compile("|".join(parts))


def count_logical_operators(code: str, profile: LanguageProfile) -> int:
	pattern = logical_operator_pattern(profile)
	if pattern is None:
		return 0
	return sum(1 for _ in pattern.finditer(code))


# ---------------------------------------------------------------------------
# brace-delimited languages


def _is_keyword_use(code: str, word: str, start: int, end: int) -> bool:
	if _prev_significant(code, start) in (".", "#"):
		return False
	nxt = code[end:end + 2]
	if nxt[:1] == "!":
		return False
	if nxt[:1] == ":" and nxt != "::":
		return False
	if nxt[:1] == "=" and nxt != "==":
		return False
	if word == "for":
		line_start = code.rfind("\n", 0, start) + 1
		if _IMPL.search(code, line_start, start):
			return False
		if _next_significant(code, end) == "<":
			return False
	return True


def _brace_condition(scrubbed: Scrubbed, start: int, profile: LanguageProfile) -> Tuple[str, Optional[int]]:
	"""Returns the condition text after a keyword and the offset of the `{`
	opening the construct's block, if there is one."""
	code, text = scrubbed.code, scrubbed.text
	n = len(code)
	style = profile.condition_style
	j = _skip_ws(code, start)

	if style is not ConditionStyle.SPAN and j < n and code[j] == "(":
		close = _match_paren(code, j)
		after = _skip_ws(code, close + 1)
		brace = after if after < n and code[after] == "{" else None
		return text[j + 1:close].strip(), brace

	stop_at_line = style is ConditionStyle.AUTO
	level = 0
	k = j
	while k < n:
		c = code[k]
		if c in "([":
			level += 1
		elif c in ")]":
			if level == 0:
				break
			level -= 1
		elif level == 0:
			if c == "{":
				return text[j:k].strip(), k
			if c == "}" or code.startswith("=>", k):
				break
			if stop_at_line and c in ";\n":
				break
		k += 1
	return text[j:k].strip(), None


def _is_assignment(code: str, k: int) -> bool:
	nxt = code[k + 1] if k + 1 < len(code) else ""
	prev = code[k - 1] if k > 0 else ""
	return nxt not in ("=", ">") and prev not in ("=", "!", "<", ">")


def _has_ternary_colon(code: str, q: int) -> bool:
	level = 0
	k = q + 1
	n = len(code)
	while k < n:
		c = code[k]
		if c in "([{":
			level += 1
		elif c in ")]}":
			if level == 0:
				return False
			level -= 1
		elif level == 0:
			if c == ";":
				return False
			if c == ":":
				if code.startswith("::", k):
					k += 2
					continue
				return True
		k += 1
	return False


def _is_ternary(code: str, q: int) -> bool:
	prev = code[q - 1] if q > 0 else ""
	nxt = code[q + 1] if q + 1 < len(code) else ""
	if prev == "?" or nxt in ("?", ".", ":", "="):
		return False
	# java wildcards: List<?>, Map<K, ? extends V>
	if _prev_significant(code, q) in ("<", "(", ",", ""):
		return False
	if _next_significant(code, q + 1) in (">", ")", ",", ""):
		return False
	return _has_ternary_colon(code, q)


def _ternary_condition(scrubbed: Scrubbed, q: int) -> str:
	code = scrubbed.code
	k = q - 1
	while k >= 0 and code[k].isspace():
		k -= 1
	end = k + 1
	level = 0
	while k >= 0:
		c = code[k]
		if c in ")]":
			level += 1
		elif c in "([":
			if level == 0:
				break
			level -= 1
		elif level == 0:
			if c == ":" and k > 0 and code[k - 1] == ":":
				k -= 2
				continue
			if c in ";{},?:\n":
				break
			if c == "=" and _is_assignment(code, k):
				break
		k -= 1
	return _LEADING_KEYWORD.sub("", scrubbed.text[k + 1:end].strip())


def _scan_braces(scrubbed: Scrubbed, profile: LanguageProfile, lines: _LineIndex) -> List[Branch]:
	code = scrubbed.code
	n = len(code)
	branches: List[Branch] = []
	frames: List[Tuple[str, Optional[Branch]]] = []
	openers: Dict[int, Tuple[str, Optional[Branch]]] = {}
	depth = 0
	# position right after the `}` closing a do-block, and that do-loop's branch
	do_tail: Optional[Tuple[int, Branch]] = None

	i = 0
	while i < n:
		c = code[i]
		if c == "{":
			frame = openers.pop(i, (_PLAIN, None))
			frames.append(frame)
			if frame[0] != _PLAIN:
				depth += 1
		elif c == "}":
			# unmatched closers leave the counter at its floor
			if frames:
				kind, owner = frames.pop()
				if kind != _PLAIN:
					depth -= 1
				if kind == _DO and owner is not None:
					do_tail = (i + 1, owner)
		elif c == "?" and profile.ternary and _is_ternary(code, i):
			branches.append(Branch(
				kind=BranchKind.CONDITIONAL,
				depth=depth + 1,
				condition=_ternary_condition(scrubbed, i),
				line=lines.line_of(i),
			))
		elif (c.isalpha() or c == "_") and (i == 0 or not _is_word_char(code[i - 1])):
			m = _WORD.match(code, i)
			end = m.end() if m else i + 1
			word = m.group() if m else c
			kind = profile.kind_of(word)
			if (kind is not None or word in profile.continuation_keywords) and _is_keyword_use(code, word, i, end):
				if kind is None:
					brace = _skip_ws(code, end)
					if brace < n and code[brace] == "{":
						openers[brace] = (_BRANCH, None)
				elif word == "do" and kind is BranchKind.LOOP:
					branch = Branch(kind=kind, depth=depth + 1, condition="", line=lines.line_of(i))
					branches.append(branch)
					brace = _skip_ws(code, end)
					if brace < n and code[brace] == "{":
						openers[brace] = (_DO, branch)
				elif word == "while" and do_tail is not None and not code[do_tail[0]:i].strip():
					do_tail[1].condition, _ = _brace_condition(scrubbed, end, profile)
					do_tail = None
				else:
					condition, brace = _brace_condition(scrubbed, end, profile)
					branch = Branch(kind=kind, depth=depth + 1, condition=condition, line=lines.line_of(i))
					branches.append(branch)
					if brace is not None:
						openers[brace] = (_BRANCH, branch)
			i = end
			continue
		i += 1
	return branches


# ---------------------------------------------------------------------------
# indentation-delimited languages


def _logical_lines(code: str, continued: FrozenSet[int] = frozenset()) -> Iterator[Tuple[int, int]]:
	n = len(code)
	start = 0
	level = 0
	i = 0
	while i < n:
		c = code[i]
		if c in "([{":
			level += 1
		elif c in ")]}":
			level = max(level - 1, 0)
		elif c == "\\" and code.startswith("\\\n", i):
			i += 2
			continue
		elif c == "\n" and level == 0 and i not in continued:
			yield start, i
			start = i + 1
		i += 1
	if start < n:
		yield start, n


def _indent(code: str, start: int, end: int) -> Tuple[int, int]:
	width = 0
	k = start
	while k < end and code[k] in " \t\f":
		if code[k] == "\t":
			width = (width // 8 + 1) * 8
		elif code[k] == " ":
			width += 1
		k += 1
	return width, k


def _header_colon(code: str, start: int, end: int) -> Optional[int]:
	level = 0
	for k in range(start, end):
		c = code[k]
		if c in "([{":
			level += 1
		elif c in ")]}":
			level = max(level - 1, 0)
		elif c == ":" and level == 0 and code[k + 1:k + 2] != "=":
			return k
	return None


def _inline_condition(scrubbed: Scrubbed, start: int, end: int) -> str:
	code = scrubbed.code
	level = 0
	k = start
	while k < end:
		c = code[k]
		if c in "([{":
			level += 1
		elif c in ")]}":
			if level == 0:
				break
			level -= 1
		elif level == 0 and c == ":":
			break
		elif level == 0 and (c.isalpha() or c == "_") and not _is_word_char(code[k - 1]):
			m = _WORD.match(code, k)
			if m is not None:
				if m.group() in _INLINE_STOP:
					break
				k = m.end()
				continue
		k += 1
	return scrubbed.text[start:k].strip()


def _inline_branches(
	scrubbed: Scrubbed,
	profile: LanguageProfile,
	start: int,
	end: int,
	depth: int,
	lines: _LineIndex,
) -> List[Branch]:
	code = scrubbed.code
	found: List[Branch] = []
	for m in _WORD.finditer(code, start, end):
		kind = _INLINE_KINDS.get(m.group())
		if kind is None or profile.kind_of(m.group()) is not kind:
			continue
		if m.start() > 0 and _is_word_char(code[m.start() - 1]):
			continue
		if _prev_significant(code, m.start()) == ".":
			continue
		found.append(Branch(
			kind=kind,
			depth=depth,
			condition=_inline_condition(scrubbed, m.end(), end),
			line=lines.line_of(m.start()),
		))
	return found


def _scan_indented(scrubbed: Scrubbed, profile: LanguageProfile, lines: _LineIndex) -> List[Branch]:
	code, text = scrubbed.code, scrubbed.text
	branches: List[Branch] = []
	frames: List[Tuple[int, bool]] = []
	depth = 0

	# newlines inside multi-line literals never end a logical line
	continued = frozenset(
		k
		for span in scrubbed.literals()
		for k in range(span.start, span.end)
		if code[k] == "\n"
	)
	for start, end in _logical_lines(code, continued):
		indent, first = _indent(code, start, end)
		body = code[first:end].rstrip()
		if not body:
			continue
		while frames and frames[-1][0] >= indent:
			_, was_branch = frames.pop()
			if was_branch:
				depth -= 1

		opens_block = body.endswith(":")
		m = _WORD.match(code, first)
		word = m.group() if m else ""
		kw_start = first
		kw_end = m.end() if m else first
		if word == "async":
			follow = _WORD.match(code, _skip_ws(code, kw_end, end))
			if follow is not None and follow.end() <= end:
				word, kw_start, kw_end = follow.group(), follow.start(), follow.end()

		kind = profile.kind_of(word) if word else None
		is_branch_block = False
		inline_from = first
		if kind is not None and _starts_statement(code, word, kw_end, end, opens_block):
			colon = _header_colon(code, kw_end, end)
			stop = colon if colon is not None else end
			branches.append(Branch(
				kind=kind,
				depth=depth + 1,
				condition=text[kw_end:stop].strip(),
				line=lines.line_of(kw_start),
			))
			is_branch_block = True
			inline_from = kw_end
		elif word in profile.continuation_keywords:
			is_branch_block = True
			inline_from = kw_end

		branches.extend(_inline_branches(scrubbed, profile, inline_from, end, depth + 1, lines))

		if opens_block:
			frames.append((indent, is_branch_block))
			if is_branch_block:
				depth += 1
	return branches


def _starts_statement(code: str, word: str, kw_end: int, end: int, opens_block: bool) -> bool:
	if _next_significant(code, kw_end, end) in _NOT_A_STATEMENT:
		return False
	if word in _SOFT_KEYWORDS:
		return opens_block
	return True


def scan_branches(scrubbed: Scrubbed, profile: LanguageProfile) -> BranchScan:
	lines = _LineIndex(scrubbed.code)
	if profile.block_style is BlockStyle.INDENT:
		branches = _scan_indented(scrubbed, profile, lines)
	else:
		branches = _scan_braces(scrubbed, profile, lines)
	return BranchScan(
		branches=branches,
		logical_operators=count_logical_operators(scrubbed.code, profile),
	)
