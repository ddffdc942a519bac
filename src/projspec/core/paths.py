"""Path helpers for project files written on Windows and read anywhere."""

from __future__ import annotations

import posixpath


def normalise_slashes(path: str) -> str:
    """Turn backslash separators into forward slashes."""
    return path.replace("\\", "/")


def join(*parts: str) -> str:
    """Join path parts after normalising their slashes.

    Trailing separators on a part do not produce doubled slashes:

        >>> join("bin\\\\Debug\\\\", "Foo.dll")
        'bin/Debug/Foo.dll'
    """
    return posixpath.join(*(normalise_slashes(p) for p in parts))
