"""Glob-style pattern matching for storage paths.

Supported syntax:
- ``*`` matches any run of characters except ``/``
- ``**`` matches any run of characters including ``/``
- ``?`` matches exactly one character except ``/``
- ``[abc]``, ``[a-z]`` and ``[!abc]`` match one character from (or not from) a class
- ``{a,b}`` matches either alternative
- ``\\`` escapes the following character

Malformed expressions raise GlobSyntaxError instead of silently matching
literally, so callers can tell a broken rule from a rule that simply did not
match.

Example:
    >>> match_compatible("*.tmp", "docs/a.tmp")
    True
    >>> match_compatible("/docs/*", "/other/docs/a.tmp")
    False
"""

import re
from functools import lru_cache
from typing import Pattern

from filegate.core.paths import PATH_SEPARATOR, strip_leading_separator
from filegate.core.patterns.exceptions import GlobSyntaxError

# Optional directory prefix used for unanchored expressions
_ANY_DEPTH_PREFIX = r"(?:.*/)?"


def translate(pattern: str) -> str:
    """Translate a glob expression into an (unanchored) regular expression body.

    Args:
        pattern: Glob expression.

    Returns:
        Regular expression source equivalent to the glob.

    Raises:
        GlobSyntaxError: If the expression is malformed.
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    in_group = False

    while i < n:
        c = pattern[i]

        if c == "\\":
            if i + 1 >= n:
                raise GlobSyntaxError("Trailing escape character", pattern, i)
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue

        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                out.append(".*")
                i += 2
            else:
                out.append("[^/]*")
                i += 1
            continue

        if c == "?":
            out.append("[^/]")
        elif c == "[":
            regex, i = _translate_class(pattern, i)
            out.append(regex)
            continue
        elif c == "{":
            if in_group:
                raise GlobSyntaxError("Cannot nest groups", pattern, i)
            out.append("(?:")
            in_group = True
        elif c == "}" and in_group:
            out.append(")")
            in_group = False
        elif c == "," and in_group:
            out.append("|")
        else:
            out.append(re.escape(c))
        i += 1

    if in_group:
        raise GlobSyntaxError("Missing '}'", pattern, n)

    return "".join(out)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a bracket expression starting at ``pattern[start] == '['``.

    Returns:
        Tuple of (regex character class, index just past the closing bracket).
    """
    n = len(pattern)
    j = start + 1
    negate = False
    if j < n and pattern[j] in "!^":
        negate = True
        j += 1

    parts: list[str] = []
    first = True
    while j < n and (pattern[j] != "]" or first):
        ch = pattern[j]
        if ch == PATH_SEPARATOR:
            raise GlobSyntaxError("Explicit path separator in bracket expression", pattern, j)
        if ch == "\\":
            if j + 1 >= n:
                raise GlobSyntaxError("Trailing escape character", pattern, j)
            parts.append(re.escape(pattern[j + 1]))
            j += 2
        elif ch == "-" and parts and j + 1 < n and pattern[j + 1] != "]":
            parts.append("-")
            j += 1
        else:
            parts.append(re.escape(ch))
            j += 1
        first = False

    if j >= n:
        raise GlobSyntaxError("Missing ']'", pattern, start)
    if not parts:
        raise GlobSyntaxError("Empty bracket expression", pattern, start)

    body = "".join(parts)
    if negate:
        return f"[^/{body}]", j + 1
    return f"[{body}]", j + 1


@lru_cache(maxsize=1024)
def compile_glob(expression: str, anchored: bool = True, case_sensitive: bool = True) -> Pattern[str]:
    """Compile a glob expression into a regular expression.

    Args:
        expression: Glob expression, without a leading separator.
        anchored: If False, the expression may match at any directory depth.
        case_sensitive: Whether matching is case-sensitive.

    Returns:
        Compiled pattern to be used with ``fullmatch``.

    Raises:
        GlobSyntaxError: If the expression is malformed.
    """
    body = translate(expression)
    if not anchored:
        body = _ANY_DEPTH_PREFIX + body
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    try:
        return re.compile(body, flags)
    except re.error as e:
        # e.g. reversed ranges such as [z-a]
        raise GlobSyntaxError(str(e), expression, e.pos) from e


def match(expression: str, candidate: str, case_sensitive: bool = True) -> bool:
    """Match a candidate against a glob expression as a whole.

    Raises:
        GlobSyntaxError: If the expression is malformed.
    """
    return compile_glob(expression, True, case_sensitive).fullmatch(candidate) is not None


def match_compatible(expression: str, candidate: str, case_sensitive: bool = True) -> bool:
    """Match a storage path or bare file name against a filter expression.

    An expression starting with '/' is anchored at the storage root and must
    match the whole candidate path. Any other expression may match the
    candidate at any directory depth, so "*.tmp" filters "a.tmp" as well as
    "dir/a.tmp". A leading '/' on the candidate is ignored.

    Raises:
        GlobSyntaxError: If the expression is malformed.
    """
    anchored = expression.startswith(PATH_SEPARATOR)
    pattern = compile_glob(strip_leading_separator(expression), anchored, case_sensitive)
    return pattern.fullmatch(strip_leading_separator(candidate)) is not None
