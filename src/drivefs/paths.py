"""Path normalization shared by every backend.

Canonical paths are absolute, ``/``-separated and free of ``.`` and ``..``
segments. The root is ``/`` and no other canonical path ends in a separator.
They are the only keys used for lookups and caching.
"""

from __future__ import annotations

from drivefs.errors import InvalidArgumentError

__all__ = [
    "ROOT",
    "combine",
    "file_name",
    "is_directory_hint",
    "is_within",
    "join",
    "normalize",
    "parent_path",
    "split_segments",
]

ROOT = "/"
SEPARATORS = ("/", "\\")


def normalize(path: str, absolute: bool = True) -> str:
    """Canonicalize a path string.

    Backslashes are treated as separators, empty and ``.`` segments are
    dropped and ``..`` removes the previous segment. Extra ``..`` segments at
    the root are ignored rather than rejected.

    Args:
        path: Raw path as supplied by a caller.
        absolute: Force an absolute result. When False the result is absolute
            only if ``path`` starts with a separator.

    Returns:
        The normalized path. A relative path with no segments becomes "".

    Raises:
        InvalidArgumentError: If path is None.

    Example:
        >>> normalize("a/./b/../c")
        '/a/c'
        >>> normalize("../x", absolute=False)
        'x'
    """
    if path is None:
        raise InvalidArgumentError("Path cannot be None.")

    replaced = path.replace("\\", "/")
    is_absolute = absolute or replaced.startswith("/")
    segments: list[str] = []

    for part in replaced.split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if segments:
                segments.pop()
            continue
        segments.append(part)

    joined = "/".join(segments)
    if is_absolute:
        return "/" + joined
    return joined


def combine(*parts: str) -> str:
    """Join path parts left to right.

    An absolute part discards everything accumulated before it. Blank parts
    are skipped. The result is absolute only if some part was absolute.

    Args:
        *parts: Path fragments.

    Returns:
        The combined, normalized path.
    """
    result = ""

    for part in parts:
        if part is None or not part.strip():
            continue

        replaced = part.replace("\\", "/")
        if replaced.startswith("/"):
            result = normalize(replaced, absolute=True)
        elif not result:
            result = normalize(replaced, absolute=False)
        else:
            result = normalize(
                result.rstrip("/") + "/" + replaced.lstrip("/"),
                absolute=result.startswith("/"),
            )

    return result


def split_segments(path: str) -> list[str]:
    """Return the segments of a canonical path; the root has none."""
    if path == ROOT:
        return []
    return [segment for segment in path.strip("/").split("/") if segment]


def join(base: str, segment: str) -> str:
    """Append a single segment to a canonical path."""
    if base == ROOT:
        return ROOT + segment
    return f"{base}/{segment}"


def parent_path(path: str) -> str:
    """Return the canonical parent path. The parent of the root is the root."""
    segments = split_segments(path)
    if len(segments) <= 1:
        return ROOT
    return "/" + "/".join(segments[:-1])


def file_name(path: str) -> str:
    """Return the last segment of a canonical path.

    Raises:
        InvalidArgumentError: If the path is the root.
    """
    segments = split_segments(path)
    if not segments:
        raise InvalidArgumentError("Path points to the root directory and has no file name.")
    return segments[-1]


def is_directory_hint(path: str) -> bool:
    """Check whether a raw, non-normalized path ends in a separator."""
    return bool(path) and path[-1] in SEPARATORS


def is_within(path: str, root: str) -> bool:
    """Check whether ``path`` equals ``root`` or lies beneath it."""
    if root == ROOT:
        return True
    return path == root or path.startswith(root + "/")
