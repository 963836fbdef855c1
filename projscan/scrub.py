"""Single-pass tagging of source text into code, comment and string spans.

The scrubber never fails: an unterminated comment or literal simply runs to
the end of the input. Both returned views keep every offset and newline of
the input text so that positions found in one view can be sliced out of
another.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .model import LanguageProfile


class State(enum.Enum):
	CODE = "code"
	LINE_COMMENT = "line_comment"
	BLOCK_COMMENT = "block_comment"
	STRING_LITERAL = "string_literal"


@dataclass(frozen=True)
class Span:
	state: State
	start: int
	end: int


@dataclass
class Scrubbed:
	# comments and string literals blanked
	code: str
	# only comments blanked; literals kept for value inspection
	text: str
	spans: List[Span] = field(default_factory=list)

	def literals(self) -> List[Span]:
		return [s for s in self.spans if s.state is State.STRING_LITERAL]


# (opening token, state, closing token, escape char)
_Opener = Tuple[str, State, str, Optional[str]]


def _openers(profile: LanguageProfile) -> List[_Opener]:
	openers: List[_Opener] = []
	for marker in profile.line_comments:
		openers.append((marker, State.LINE_COMMENT, "\n", None))
	for start, end in profile.block_comments:
		openers.append((start, State.BLOCK_COMMENT, end, None))
	for delim in profile.string_delimiters:
		openers.append((delim.open, State.STRING_LITERAL, delim.close, delim.escape))
	# longest token wins when several share a prefix ('"""' before '"')
	openers.sort(key=lambda o: len(o[0]), reverse=True)
	return openers


def _string_end(content: str, pos: int, close: str, escape: Optional[str]) -> int:
	n = len(content)
	while pos < n:
		if escape is not None and content[pos] == escape:
			pos += 2
			continue
		if content.startswith(close, pos):
			return pos + len(close)
		pos += 1
	return n


_CHAR_LITERAL = re.compile(r"'(?:\\(?:u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|.)|[^\\'\n])'")

# characters after which a slash starts a regex rather than a division
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};")
_REGEX_KEYWORDS = ("return", "typeof")


def _char_end(content: str, pos: int) -> Optional[int]:
	m = _CHAR_LITERAL.match(content, pos)
	return m.end() if m else None


def _regex_end(content: str, pos: int) -> Optional[int]:
	k = pos - 1
	while k >= 0 and content[k].isspace():
		k -= 1
	if k >= 0 and content[k] not in _REGEX_PRECEDERS and not content.endswith(_REGEX_KEYWORDS, 0, k + 1):
		return None
	n = len(content)
	in_class = False
	k = pos + 1
	while k < n:
		c = content[k]
		if c == "\\":
			k += 2
			continue
		if c == "\n":
			return None
		if in_class:
			in_class = c != "]"
		elif c == "[":
			in_class = True
		elif c == "/":
			k += 1
			while k < n and content[k].isalpha():
				k += 1
			return k
		k += 1
	return None


def _blank(chars: List[str], start: int, end: int) -> None:
	for k in range(start, end):
		if chars[k] != "\n":
			chars[k] = " "


def scrub(content: str, profile: LanguageProfile) -> Scrubbed:
	openers = _openers(profile)
	first_chars = {o[0][0] for o in openers}
	if profile.char_literals:
		first_chars.add("'")
	if profile.regex_literals:
		first_chars.add("/")
	n = len(content)
	code = list(content)
	text = list(content)
	spans: List[Span] = []

	segment = 0
	i = 0
	while i < n:
		if content[i] not in first_chars:
			i += 1
			continue
		opener = next((o for o in openers if content.startswith(o[0], i)), None)
		if opener is None:
			end = None
			if content[i] == "'" and profile.char_literals:
				end = _char_end(content, i)
			elif content[i] == "/" and profile.regex_literals:
				end = _regex_end(content, i)
			if end is None:
				i += 1
				continue
			state = State.STRING_LITERAL
		else:
			token, state, close, escape = opener
			if state is State.LINE_COMMENT:
				end = content.find("\n", i)
				end = n if end == -1 else end
			elif state is State.BLOCK_COMMENT:
				end = content.find(close, i + len(token))
				end = n if end == -1 else end + len(close)
			else:
				end = _string_end(content, i + len(token), close, escape)

		if i > segment:
			spans.append(Span(State.CODE, segment, i))
		spans.append(Span(state, i, end))
		_blank(code, i, end)
		if state is not State.STRING_LITERAL:
			_blank(text, i, end)
		segment = i = end

	if segment < n:
		spans.append(Span(State.CODE, segment, n))
	return Scrubbed(code="".join(code), text="".join(text), spans=spans)
