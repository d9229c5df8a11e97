"""Glob pattern helpers following the Redis ``KEYS``/``SCAN MATCH`` dialect.

Supported syntax:

- ``*`` matches any run of characters, including none
- ``?`` matches exactly one character
- ``[abc]`` / ``[a-z]`` match one character from a class or range
- ``[^abc]`` matches one character not in the class
- ``\\x`` matches ``x`` literally

An unterminated ``[`` is treated as a literal bracket.
"""

from __future__ import annotations

import re
from functools import lru_cache


_GLOB_SPECIALS = frozenset("*?[]\\")


def escape_glob(text: str) -> str:
    """Escape glob metacharacters so ``text`` only matches itself."""
    return "".join(f"\\{char}" if char in _GLOB_SPECIALS else char for char in text)


def _translate_class(body: str) -> str:
    negate = body.startswith("^")
    if negate:
        body = body[1:]

    parts: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            parts.append(re.escape(body[index + 1]))
            index += 2
            continue
        if index + 2 < len(body) and body[index + 1] == "-":
            start, end = sorted((char, body[index + 2]))
            parts.append(f"{re.escape(start)}-{re.escape(end)}")
            index += 3
            continue
        parts.append(re.escape(char))
        index += 1

    if not parts:
        # "[]" and "[^]" never match / match anything respectively
        return "." if negate else "(?!)"
    return f"[{'^' if negate else ''}{''.join(parts)}]"


def _class_end(pattern: str, start: int) -> int:
    """Return the index of the closing ``]`` for a class opened at ``start``, or -1."""
    index = start + 1
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == "]":
            return index
        index += 1
    return -1


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into an anchored regular expression.

    The output only uses constructs shared by Python ``re`` and PostgreSQL
    POSIX regular expressions, so it can be evaluated on either side.
    """
    out: list[str] = ["^"]
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "*":
            out.append(".*")
        elif char == "?":
            out.append(".")
        elif char == "\\" and index + 1 < len(pattern):
            index += 1
            out.append(re.escape(pattern[index]))
        elif char == "[":
            end = _class_end(pattern, index)
            if end == -1:
                out.append(re.escape(char))
            else:
                out.append(_translate_class(pattern[index + 1 : end]))
                index = end
        else:
            out.append(re.escape(char))
        index += 1
    out.append("$")
    return "".join(out)


@lru_cache(maxsize=256)
def _compiled(pattern: str) -> re.Pattern[str]:
    return re.compile(glob_to_regex(pattern), re.DOTALL)


def glob_match(pattern: str, key: str) -> bool:
    """Return True when ``key`` matches the glob ``pattern``."""
    # fullmatch: a trailing "$" alone also matches before a final newline
    return _compiled(pattern).fullmatch(key) is not None
