"""Glob pattern matching used by filter rules."""

from filegate.core.patterns.exceptions import GlobSyntaxError, PatternError
from filegate.core.patterns.glob import compile_glob, match, match_compatible, translate

__all__ = [
    "GlobSyntaxError",
    "PatternError",
    "compile_glob",
    "match",
    "match_compatible",
    "translate",
]
