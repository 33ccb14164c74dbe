"""Platform path building for storage handles.

Handles never format path strings by hand; every path they expose is built
here from a base path plus validated entry names.

Example:
    >>> combine("/data/app", "notes", "todo.txt", separator="/")
    '/data/app/notes/todo.txt'
"""

from __future__ import annotations

import ntpath
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import InvalidSegmentError

_RESERVED_NAMES = (".", "..")


def validate_segment(name: str, separator: str = os.sep) -> str:
    """Check that ``name`` is usable as a single path segment.

    Args:
        name: The entry name to check
        separator: Separator of the path the segment will be joined into

    Returns:
        The name, unchanged

    Raises:
        InvalidSegmentError: If the name is empty, reserved, or contains a
            separator or NUL character
    """
    if not isinstance(name, str) or not name:
        raise InvalidSegmentError("Path segment must be a non-empty string", segment=name)

    forbidden = {separator, "\x00"}
    if separator == os.sep and os.altsep:
        forbidden.add(os.altsep)
    for char in forbidden:
        if char in name:
            raise InvalidSegmentError(
                f"Path segment contains forbidden character {char!r}: {name!r}",
                segment=name,
            )

    if name in _RESERVED_NAMES:
        raise InvalidSegmentError(f"Path segment cannot be {name!r}", segment=name)

    return name


def split_extension(name: str) -> Tuple[str, str]:
    """Split a name into base and extension.

    The extension runs from the last '.' onward, wherever that dot is; a name
    without a dot has an empty extension.

    >>> split_extension("a.b.txt")
    ('a.b', '.txt')
    >>> split_extension(".env")
    ('', '.env')
    >>> split_extension("foo")
    ('foo', '')
    """
    index = name.rfind(".")
    if index < 0:
        return name, ""
    return name[:index], name[index:]


@dataclass(frozen=True)
class PortablePath:
    """A parsed path: an anchor, its segments and the separator joining them.

    Attributes:
        anchor: Root prefix such as '/' or 'C:\\' (empty for relative paths)
        segments: Entry names below the anchor, none of them empty
        separator: Separator used when rendering the path
    """

    anchor: str
    segments: Tuple[str, ...]
    separator: str = os.sep

    @classmethod
    def parse(cls, text: str, separator: str = os.sep) -> "PortablePath":
        """Parse a path string, collapsing repeated and trailing separators.

        Raises:
            InvalidSegmentError: If the text is empty
        """
        if not isinstance(text, str) or not text:
            raise InvalidSegmentError("Base path must be a non-empty string", segment=text)

        drive = ""
        rest = text
        if separator == "\\":
            drive, rest = ntpath.splitdrive(text)

        stripped = rest.lstrip(separator)
        anchor = drive + (separator if len(stripped) != len(rest) else "")
        segments = tuple(part for part in stripped.split(separator) if part)
        return cls(anchor=anchor, segments=segments, separator=separator)

    @property
    def name(self) -> str:
        """Last segment, or '' for a bare anchor."""
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> Optional["PortablePath"]:
        """The containing path, or None at the anchor."""
        if not self.segments:
            return None
        return PortablePath(self.anchor, self.segments[:-1], self.separator)

    def join(self, *names: str) -> "PortablePath":
        """Append validated entry names."""
        for name in names:
            validate_segment(name, self.separator)
        return PortablePath(self.anchor, self.segments + tuple(names), self.separator)

    def __str__(self) -> str:
        return self.anchor + self.separator.join(self.segments)


def combine(*segments: str, separator: str = os.sep) -> str:
    """Build a path string from a base path and entry names.

    Args:
        *segments: A base path followed by zero or more entry names
        separator: Path separator (defaults to the platform's)

    Returns:
        The combined path string

    Raises:
        InvalidSegmentError: If no segments are given or any entry name is invalid
    """
    if not segments:
        raise InvalidSegmentError("combine() requires at least one segment")

    base = PortablePath.parse(segments[0], separator)
    return str(base.join(*segments[1:]))
