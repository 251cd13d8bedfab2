"""Property paths addressing a value inside a validated object.

A path is an immutable sequence of named segments (field names) and indexed
segments (list positions). It renders dot-joined for names and bracketed for
indices, e.g. ``items[0].tags[2].value``. The empty path renders as ``""``
and stands for the validated root value itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Union

_TOKEN = re.compile(r"\[(\d+)\]|([^.\[\]]+)")


@dataclass(frozen=True)
class NamedSegment:
    """A field name step in a path."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IndexSegment:
    """A list position step in a path, rendered as ``[i]``."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Path index cannot be negative: {self.index}")

    def __str__(self) -> str:
        return f"[{self.index}]"


Segment = Union[NamedSegment, IndexSegment]


class PropertyPath:
    """Immutable field/index address attached to every validation error.

    Positional arguments build the initial segments: strings become named
    segments, integers become indexed ones.

    Example:
        ```python
        path = PropertyPath("items").index(0).child("name")
        str(path)
        # 'items[0].name'
        PropertyPath("items", 0, "name") == path
        # True
        ```
    """

    __slots__ = ("_segments",)

    EMPTY: PropertyPath

    def __init__(self, *segments: str | int | Segment):
        converted: list[Segment] = []
        for segment in segments:
            if isinstance(segment, (NamedSegment, IndexSegment)):
                converted.append(segment)
            elif isinstance(segment, bool):
                raise TypeError("Path segments must be str or int, got bool")
            elif isinstance(segment, int):
                converted.append(IndexSegment(segment))
            elif isinstance(segment, str):
                converted.append(NamedSegment(segment))
            else:
                raise TypeError(
                    f"Path segments must be str or int, got {type(segment).__name__}"
                )
        self._segments: tuple[Segment, ...] = tuple(converted)

    @classmethod
    def root(cls) -> PropertyPath:
        """The empty path."""
        return cls.EMPTY

    @classmethod
    def _from_segments(cls, segments: tuple[Segment, ...]) -> PropertyPath:
        path = cls.__new__(cls)
        path._segments = segments
        return path

    @classmethod
    def parse(cls, text: str) -> PropertyPath:
        """Parse a rendered path such as ``orders[1].items[3].name``.

        Args:
            text: Dotted/bracketed path text; ``""`` parses to the empty path

        Returns:
            The equivalent PropertyPath

        Raises:
            ValueError: If the text is not a well-formed path
        """
        if text == "":
            return cls.EMPTY

        segments: list[Segment] = []
        position = 0
        while position < len(text):
            if segments and text[position] == ".":
                position += 1
                match = _TOKEN.match(text, position)
                if match is None or match.group(2) is None:
                    raise ValueError(f"Malformed path: {text!r}")
            else:
                match = _TOKEN.match(text, position)
                if match is None or (match.group(2) is not None and segments):
                    raise ValueError(f"Malformed path: {text!r}")
            if match.group(1) is not None:
                segments.append(IndexSegment(int(match.group(1))))
            else:
                segments.append(NamedSegment(match.group(2)))
            position = match.end()

        return cls._from_segments(tuple(segments))

    @property
    def segments(self) -> tuple[Segment, ...]:
        """The ordered segments of this path."""
        return self._segments

    def is_empty(self) -> bool:
        return not self._segments

    def child(self, name: str) -> PropertyPath:
        """Return a new path extended with a named segment."""
        return PropertyPath._from_segments(self._segments + (NamedSegment(name),))

    def index(self, i: int) -> PropertyPath:
        """Return a new path extended with an indexed segment."""
        return PropertyPath._from_segments(self._segments + (IndexSegment(i),))

    def join(self, other: PropertyPath) -> PropertyPath:
        """Return a new path with all of ``other``'s segments appended."""
        if not other._segments:
            return self
        if not self._segments:
            return other
        return PropertyPath._from_segments(self._segments + other._segments)

    def child_from_string(self, text: str) -> PropertyPath:
        """Append the segments of a rendered path to this one."""
        return self.join(PropertyPath.parse(text))

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self._segments:
            if isinstance(segment, NamedSegment) and parts:
                parts.append(".")
            parts.append(str(segment))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"PropertyPath({str(self)!r})"


PropertyPath.EMPTY = PropertyPath()
