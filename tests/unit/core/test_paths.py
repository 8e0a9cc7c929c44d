"""Unit tests for storage path helpers."""

import pytest

from filegate.core.paths import parent_path, strip_leading_separator


@pytest.mark.parametrize(
    "path,expected",
    [
        ("dir/sub/file.txt", "dir/sub"),
        ("dir/file.txt", "dir"),
        ("/dir/file.txt", "/dir"),
        ("file.txt", ""),
        ("/file.txt", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_parent_path(path, expected):
    assert parent_path(path) == expected


def test_strip_leading_separator():
    assert strip_leading_separator("//a/b") == "a/b"
    assert strip_leading_separator("a/b") == "a/b"
