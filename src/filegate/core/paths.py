"""Helpers for '/'-separated storage paths."""

PATH_SEPARATOR = "/"


def parent_path(path: str | None) -> str:
    """Return the parent of a storage path.

    The parent is everything before the last separator. A bare name, or a
    name directly under the root ("/a.txt"), has no parent and yields "".

    Examples:
        >>> parent_path("dir/sub/file.txt")
        'dir/sub'
        >>> parent_path("/dir/file.txt")
        '/dir'
        >>> parent_path("file.txt")
        ''
    """
    if not path:
        return ""
    index = path.rfind(PATH_SEPARATOR)
    if index <= 0:
        return ""
    return path[:index]


def strip_leading_separator(path: str) -> str:
    """Remove any leading separators from a path."""
    return path.lstrip(PATH_SEPARATOR)
