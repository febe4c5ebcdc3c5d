# critical_css/selector.py

"""
Selector tokenizer.

Splits one CSS selector into its compound segments and records the tag, id and
class constraints of each. Pseudo-classes, pseudo-elements and attribute
selectors other than [class=...] add no constraint.
"""

import re
from enum import Enum
from typing import List, Optional, Set, Tuple

from critical_css.models import SimpleSelector

COMBINATORS = frozenset(" \t\r\n\f>+~")
MARKERS = frozenset(".#")

# [class="a b"], [class~='a'], [class^="a"] ...
_CLASS_ATTRIBUTE_RE = re.compile(
    r"""^\s*class\s*[~|^$*]?=\s*(?:"([^"]+)"|'([^']+)').*$""",
    re.DOTALL,
)

# \31 0 -> "1" then "0"; one trailing whitespace belongs to the escape
_HEX_ESCAPE_RE = re.compile(r"([0-9a-fA-F]{1,6})(?:\r\n|[ \t\r\n\f])?")


class _State(Enum):
    DEFAULT = "default"
    ATTRIBUTE = "attribute"
    PSEUDO = "pseudo"


class _SegmentBuilder:
    """Collects the tokens of one compound segment until it is closed."""

    def __init__(self) -> None:
        self.tag: Optional[str] = None
        self.id: Optional[str] = None
        self.classes: Set[str] = set()

    def add(self, token: str) -> None:
        token = token.strip()
        if not token:
            return
        name = token[1:]
        if token[0] == "#":
            if name:
                self.id = name
        elif token[0] == ".":
            if name:
                self.classes.add(name)
        else:
            self.tag = token.lower()

    def build(self) -> Optional[SimpleSelector]:
        if self.tag is None and self.id is None and not self.classes:
            return None
        return SimpleSelector(tag=self.tag, id=self.id, classes=frozenset(self.classes))


def class_attribute_values(attribute: str) -> List[str]:
    """
    Return the class names required by the body of an attribute selector,
    or an empty list when it is not a quoted class attribute selector.
    """
    found = _CLASS_ATTRIBUTE_RE.match(attribute)
    if not found:
        return []
    value = found.group(1) if found.group(1) is not None else found.group(2)
    return value.split()


def _close(builder: _SegmentBuilder, result: List[SimpleSelector]) -> _SegmentBuilder:
    segment = builder.build()
    if segment is not None:
        result.append(segment)
    return _SegmentBuilder()


def _read_escape(text: str, start: int) -> Tuple[str, int]:
    """Decode the escape whose backslash sits just before start."""
    found = _HEX_ESCAPE_RE.match(text, start)
    if found:
        code = int(found.group(1), 16)
        return (chr(code) if 0 < code <= 0x10FFFF else "\ufffd"), found.end()
    if start < len(text):
        return text[start], start + 1
    return "", start


def analyze(selector_text: str) -> List[SimpleSelector]:
    """
    Tokenize a single selector (no top-level commas) into one SimpleSelector
    per compound segment, in textual order. Empty segments are dropped, so
    '', '*' or a bare pseudo chain give an empty list.
    """
    result: List[SimpleSelector] = []
    builder = _SegmentBuilder()
    state = _State.DEFAULT
    resume = _State.DEFAULT
    depth = 0
    buffer = ""
    index = 0

    while index < len(selector_text):
        char = selector_text[index]
        index += 1

        if state is _State.ATTRIBUTE:
            if char == "]":
                # brackets inside :not(...) and friends constrain nothing
                if resume is _State.DEFAULT or not depth:
                    for name in class_attribute_values(buffer):
                        builder.add("." + name)
                buffer = ""
                state = resume
            else:
                buffer += char
            continue

        if char == "\\":
            escaped, index = _read_escape(selector_text, index)
            if state is _State.DEFAULT:
                buffer += escaped
            continue
        if char == "[":
            builder.add(buffer)
            buffer = ""
            resume, state = state, _State.ATTRIBUTE
            continue
        if char == "]":
            continue
        if char == ":":
            state = _State.PSEUDO
            continue
        if char == "(":
            depth += 1
            continue
        if char == ")":
            depth = max(depth - 1, 0)
            continue

        boundary = char in COMBINATORS or char in MARKERS or char == "*"
        if state is _State.PSEUDO:
            if depth or not boundary:
                continue
            state = _State.DEFAULT

        if char in COMBINATORS:
            builder.add(buffer)
            buffer = ""
            builder = _close(builder, result)
        elif char in MARKERS:
            builder.add(buffer)
            buffer = char
        elif char == "*":
            builder.add(buffer)
            buffer = ""
        else:
            buffer += char

    # an unterminated [attribute is dropped rather than read as a tag
    if state is not _State.ATTRIBUTE:
        builder.add(buffer)
    _close(builder, result)
    return result
