#!/usr/bin/env python3
"""
KUBETAGGER PATTERNS
-------------------
Shell-style pattern matching for label keys, with path semantics:
'*' and '?' never cross a '/' separator, so '*' matches 'app' but not
'app.kubernetes.io/name'.

Syntax:
    *          any run of non-'/' characters
    ?          one non-'/' character
    [abc]      character class, '[^...]' negates, 'a-z' ranges
    \\c        literal c

A malformed pattern (unclosed class, empty class, trailing backslash)
never matches.

Author: KubeTagger Team
Date: 2026-10-19
"""

import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

SEPARATOR = "/"


class BadPatternError(ValueError):
    """Raised when a pattern cannot be compiled."""


def _class_char(pattern: str, pos: int) -> Tuple[str, int]:
    if pos >= len(pattern) or pattern[pos] in "-]":
        raise BadPatternError(f"syntax error in pattern '{pattern}'")
    if pattern[pos] == "\\":
        pos += 1
        if pos >= len(pattern):
            raise BadPatternError(f"trailing backslash in pattern '{pattern}'")
    return pattern[pos], pos + 1


def translate(pattern: str) -> str:
    """
    Translates a pattern into an anchored regular expression.

    Raises:
        BadPatternError: on a malformed pattern.
    """
    out = []
    pos, size = 0, len(pattern)
    while pos < size:
        char = pattern[pos]
        pos += 1
        if char == "*":
            out.append(f"[^{SEPARATOR}]*")
        elif char == "?":
            out.append(f"[^{SEPARATOR}]")
        elif char == "\\":
            if pos >= size:
                raise BadPatternError(f"trailing backslash in pattern '{pattern}'")
            out.append(re.escape(pattern[pos]))
            pos += 1
        elif char == "[":
            negate = pos < size and pattern[pos] == "^"
            if negate:
                pos += 1
            ranges = []
            while True:
                if pos >= size:
                    raise BadPatternError(f"unclosed character class in pattern '{pattern}'")
                if pattern[pos] == "]" and ranges:
                    pos += 1
                    break
                low, pos = _class_char(pattern, pos)
                high = low
                if pos < size and pattern[pos] == "-":
                    high, pos = _class_char(pattern, pos + 1)
                    if high < low:
                        raise BadPatternError(f"reversed range in pattern '{pattern}'")
                ranges.append(f"{re.escape(low)}-{re.escape(high)}")
            out.append("[" + ("^" if negate else "") + "".join(ranges) + "]")
        else:
            out.append(re.escape(char))
    return "(?s:" + "".join(out) + r")\Z"


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[Pattern]:
    try:
        return re.compile(translate(pattern))
    except BadPatternError:
        return None


def path_match(pattern: str, name: str) -> bool:
    """Reports whether the whole name matches the pattern."""
    compiled = _compile(pattern)
    if compiled is None:
        return False
    return compiled.match(name) is not None
