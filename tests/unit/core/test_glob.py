"""Unit tests for glob expression matching.

Tests cover:
- Wildcards and their treatment of the path separator
- Character classes, alternation and escapes
- Root-anchored versus any-depth expressions
- Malformed expressions
"""

import pytest

from filegate.core.patterns import GlobSyntaxError, match, match_compatible, translate


class TestMatch:
    """Tests for whole-string glob matching."""

    @pytest.mark.parametrize(
        "expression,candidate,expected",
        [
            ("*.tmp", "a.tmp", True),
            ("*.tmp", "a.txt", False),
            ("*.tmp", "dir/a.tmp", False),
            ("**.tmp", "dir/a.tmp", True),
            ("dir/**", "dir/sub/file.txt", True),
            ("file?.log", "file1.log", True),
            ("file?.log", "file10.log", False),
            ("a?b", "a/b", False),
            ("[abc].txt", "b.txt", True),
            ("[abc].txt", "d.txt", False),
            ("[!abc].txt", "d.txt", True),
            ("[!abc].txt", "a.txt", False),
            ("[a-c]x", "bx", True),
            ("*.{jpg,png}", "photo.png", True),
            ("*.{jpg,png}", "photo.gif", False),
            (r"\*.txt", "*.txt", True),
            (r"\*.txt", "a.txt", False),
            ("a.b", "axb", False),
        ],
    )
    def test_match(self, expression: str, candidate: str, expected: bool) -> None:
        assert match(expression, candidate) is expected

    def test_negated_class_never_matches_separator(self) -> None:
        assert match("a[!x]b", "a/b") is False

    def test_case_insensitive(self) -> None:
        assert match("*.TMP", "a.tmp") is False
        assert match("*.TMP", "a.tmp", case_sensitive=False) is True

    def test_translate_escapes_regex_metacharacters(self) -> None:
        assert translate("a+b") == r"a\+b"


class TestMatchCompatible:
    """Tests for storage path matching."""

    def test_unanchored_expression_matches_bare_name(self) -> None:
        assert match_compatible("*.tmp", "a.tmp") is True

    def test_unanchored_expression_matches_at_any_depth(self) -> None:
        assert match_compatible("*.tmp", "dir/sub/a.tmp") is True
        assert match_compatible("*.tmp", "/dir/a.tmp") is True

    def test_unanchored_expression_matches_whole_segments(self) -> None:
        assert match_compatible("tmp", "dir/tmp") is True
        assert match_compatible("tmp", "dir/mytmp") is False

    def test_anchored_expression_matches_from_root(self) -> None:
        assert match_compatible("/dir/*.tmp", "dir/a.tmp") is True
        assert match_compatible("/dir/*.tmp", "/dir/a.tmp") is True
        assert match_compatible("/dir/*.tmp", "other/dir/a.tmp") is False

    def test_anchored_folder_rule(self) -> None:
        assert match_compatible("/private", "/private") is True
        assert match_compatible("/private", "/private/a.txt") is False
        assert match_compatible("/private/**", "/private/a/b.txt") is True


class TestMalformedExpressions:
    """Tests for expressions that cannot be compiled."""

    @pytest.mark.parametrize(
        "expression",
        [
            "[abc",
            "{a,b",
            "{a,{b}}",
            "[a/b]",
            "abc\\",
            "[!]",
            "[z-a]",
        ],
    )
    def test_malformed_expression_raises(self, expression: str) -> None:
        with pytest.raises(GlobSyntaxError) as exc_info:
            match_compatible(expression, "anything")

        assert exc_info.value.pattern in (expression, expression.lstrip("/"))

    def test_error_message_includes_position(self) -> None:
        with pytest.raises(GlobSyntaxError, match="position 5"):
            translate("abc{x")
