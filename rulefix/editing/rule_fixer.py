"""
Rule fixer — builds edit descriptors from nodes, tokens and raw ranges.

The fixer never applies anything and never validates ranges: a range that
is backwards or out of bounds produces an equally malformed descriptor,
which :class:`~rulefix.editing.patch_applier.FixApplier` rejects later.

Every method taking a node or token reads its ``range`` and delegates to
the ``*_range`` variant, so both forms always agree for the same range.
The range variants are also available as plain functions; only
:func:`keep_range` needs the source, and it takes it explicitly.
"""

from __future__ import annotations

from typing import Any, Sequence

from .descriptor import EditDescriptor, Located, as_range, range_of


# ---------------------------------------------------------------------------
# Range-level builders
# ---------------------------------------------------------------------------

def insert_text_at(index: int, text: str) -> EditDescriptor:
    """Insert *text* at the 0-based character *index*."""
    return EditDescriptor(range=(index, index), text=text)


def insert_text_after_range(range: Sequence[int], text: str) -> EditDescriptor:
    return insert_text_at(range[1], text)


def insert_text_before_range(range: Sequence[int], text: str) -> EditDescriptor:
    return insert_text_at(range[0], text)


def replace_text_range(range: Sequence[int], text: str) -> EditDescriptor:
    return EditDescriptor(range=as_range(range), text=text)


def remove_range(range: Sequence[int]) -> EditDescriptor:
    return EditDescriptor(range=as_range(range), text="")


def keep_range(source: Any, range: Sequence[int]) -> EditDescriptor:
    """Return a no-op descriptor whose text is the original slice of *source*.

    The slice is copied now, so the descriptor does not hold on to *source*.
    Appliers use these to reserve a span against overlapping edits.
    """
    r = as_range(range)
    return EditDescriptor(range=r, text=source.text[r[0]:r[1]])


# ---------------------------------------------------------------------------
# Fixer bound to a source
# ---------------------------------------------------------------------------

class RuleFixer:
    """Create fix descriptors for one (immutable) source buffer."""

    def __init__(self, source: Any) -> None:
        """
        Parameters
        ----------
        source:
            Any object with a ``text`` string, typically a
            :class:`~rulefix.source.SourceCode`.  Only :meth:`keep` and
            :meth:`keep_range` read it.
        """
        self.source = source

    def insert_text_after(self, node_or_token: Located, text: str) -> EditDescriptor:
        """Insert *text* right after the node or token."""
        return self.insert_text_after_range(range_of(node_or_token), text)

    def insert_text_after_range(self, range: Sequence[int], text: str) -> EditDescriptor:
        """Insert *text* at the end offset of *range*."""
        return insert_text_after_range(range, text)

    def insert_text_before(self, node_or_token: Located, text: str) -> EditDescriptor:
        """Insert *text* right before the node or token."""
        return self.insert_text_before_range(range_of(node_or_token), text)

    def insert_text_before_range(self, range: Sequence[int], text: str) -> EditDescriptor:
        """Insert *text* at the start offset of *range*."""
        return insert_text_before_range(range, text)

    def replace_text(self, node_or_token: Located, text: str) -> EditDescriptor:
        """Replace the text of the node or token with *text*."""
        return self.replace_text_range(range_of(node_or_token), text)

    def replace_text_range(self, range: Sequence[int], text: str) -> EditDescriptor:
        return replace_text_range(range, text)

    def remove(self, node_or_token: Located) -> EditDescriptor:
        """Remove the node or token from the source."""
        return self.remove_range(range_of(node_or_token))

    def remove_range(self, range: Sequence[int]) -> EditDescriptor:
        return remove_range(range)

    def keep(self, node_or_token: Located) -> EditDescriptor:
        """Keep the node or token as-is, reserving it against other fixes."""
        return self.keep_range(range_of(node_or_token))

    def keep_range(self, range: Sequence[int]) -> EditDescriptor:
        return keep_range(self.source, range)
