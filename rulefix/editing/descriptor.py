"""
Edit descriptors — the declarative ``(range, text)`` values produced by
the rule fixer and consumed by the patch applier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence, Tuple

# Half-open [start, end) character offsets into a source buffer
Range = Tuple[int, int]


class Located(Protocol):
    """Anything that knows where it sits in the source (node or token)."""
    range: Sequence[int]


class MissingRangeError(AttributeError):
    """Raised when a node or token passed to the fixer has no ``range``."""


@dataclass(frozen=True)
class EditDescriptor:
    """A requested textual change: replace ``range`` with ``text``.

    An empty ``text`` means deletion; a zero-width ``range`` means insertion.
    Nothing here checks that the range is sane, that is the applier's job.
    """
    range: Range
    text: str

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    @property
    def is_insertion(self) -> bool:
        return self.range[0] == self.range[1]

    @property
    def is_removal(self) -> bool:
        return self.range[0] != self.range[1] and self.text == ""

    def to_dict(self) -> dict:
        """Return the JSON-friendly ``{"range": [start, end], "text": ...}`` form."""
        return {"range": [self.range[0], self.range[1]], "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> "EditDescriptor":
        r = data["range"]
        return cls(range=(r[0], r[1]), text=data.get("text", ""))


def as_range(value: Sequence[int]) -> Range:
    """Normalise any two-item sequence to a ``(start, end)`` tuple."""
    return (value[0], value[1])


def range_of(element: Any) -> Range:
    """Return the range of a node or token.

    Raises
    ------
    MissingRangeError
        If *element* has no ``range`` attribute.
    """
    try:
        value = element.range
    except AttributeError:
        raise MissingRangeError(
            f"{type(element).__name__} object has no 'range'; "
            "expected a node or token located in the source"
        ) from None
    return as_range(value)
