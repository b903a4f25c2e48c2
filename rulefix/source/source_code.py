"""
Source code — the immutable text buffer fixes are built against, plus
tree-sitter backed nodes and tokens that carry character ranges.

Tree-sitter reports UTF-8 byte offsets; everything exposed here uses
character offsets so a range can slice :attr:`SourceCode.text` directly.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ..editing.descriptor import Range, range_of
from .parser import detect_language, parse_bytes

logger = logging.getLogger(__name__)

BOM = "\ufeff"


@dataclass(frozen=True)
class Token:
    """A leaf of the syntax tree."""
    type: str
    value: str
    range: Range


class SyntaxNode:
    """Thin view over a tree-sitter node, located by character range."""

    __slots__ = ("_node", "_source")

    def __init__(self, node, source: "SourceCode") -> None:
        self._node = node
        self._source = source

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def range(self) -> Range:
        return (
            self._source.char_offset(self._node.start_byte),
            self._source.char_offset(self._node.end_byte),
        )

    @property
    def text(self) -> str:
        start, end = self.range
        return self._source.text[start:end]

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def has_error(self) -> bool:
        return self._node.has_error

    @property
    def children(self) -> list["SyntaxNode"]:
        return [SyntaxNode(c, self._source) for c in self._node.children]

    @property
    def named_children(self) -> list["SyntaxNode"]:
        return [SyntaxNode(c, self._source) for c in self._node.named_children]

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        p = self._node.parent
        return SyntaxNode(p, self._source) if p is not None else None

    def child_by_field_name(self, name: str) -> Optional["SyntaxNode"]:
        c = self._node.child_by_field_name(name)
        return SyntaxNode(c, self._source) if c is not None else None

    def walk(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self._node]
        while stack:
            node = stack.pop()
            yield SyntaxNode(node, self._source)
            stack.extend(reversed(node.children))

    def find_all(self, node_type: str) -> list["SyntaxNode"]:
        return [n for n in self.walk() if n.type == node_type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.type == other.type and self.range == other.range

    def __hash__(self) -> int:
        return hash((self.type, self.range))

    def __repr__(self) -> str:
        return f"SyntaxNode({self.type!r}, range={self.range})"


class SourceCode:
    """Immutable source text, optionally parsed with tree-sitter.

    A leading BOM is stripped from :attr:`text` and remembered in
    :attr:`has_bom` so appliers can put it back.
    """

    def __init__(
        self,
        text: str,
        language: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        self.has_bom = text.startswith(BOM)
        self.text = text[len(BOM):] if self.has_bom else text
        self.language = language
        self.path = path

        self._tree = None
        self._parsed = False
        self._char_at_byte: Optional[list[int]] = None
        self._tokens: Optional[list[Token]] = None
        self._token_starts: list[int] = []

    @classmethod
    def from_file(cls, file_path: str, language: Optional[str] = None) -> "SourceCode":
        """Read *file_path* as UTF-8; the language defaults to its extension."""
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
        return cls(text, language=language or detect_language(file_path),
                   path=file_path)

    # ------------------------------------------------------------------
    # Text access
    # ------------------------------------------------------------------

    def get_text(
        self,
        element=None,
        before: int = 0,
        after: int = 0,
    ) -> str:
        """Return the whole text, or the element's text widened by *before*/*after*."""
        if element is None:
            return self.text
        start, end = range_of(element)
        return self.text[max(0, start - before):end + after]

    def char_offset(self, byte_offset: int) -> int:
        """Translate a UTF-8 byte offset into a character offset."""
        if self._char_at_byte is None:
            self._char_at_byte = self._build_offset_map()
        if not self._char_at_byte:
            return byte_offset
        return self._char_at_byte[byte_offset]

    def _build_offset_map(self) -> list[int]:
        data = self.text.encode("utf-8")
        if len(data) == len(self.text):
            # ASCII: offsets already agree
            return []
        mapping: list[int] = []
        for index, ch in enumerate(self.text):
            mapping.extend([index] * len(ch.encode("utf-8")))
        mapping.append(len(self.text))
        return mapping

    # ------------------------------------------------------------------
    # Syntax tree
    # ------------------------------------------------------------------

    @property
    def tree(self):
        """The raw tree-sitter tree, or None without a usable language."""
        if not self._parsed:
            self._parsed = True
            if self.language:
                self._tree = parse_bytes(self.text.encode("utf-8"), self.language)
                if self._tree is None:
                    logger.debug("[Fixer] No syntax tree for %s (%s)",
                                 self.path or "<text>", self.language)
        return self._tree

    @property
    def ast(self) -> Optional[SyntaxNode]:
        tree = self.tree
        return SyntaxNode(tree.root_node, self) if tree is not None else None

    @property
    def tokens(self) -> list[Token]:
        """All non-empty leaves of the tree, in source order."""
        if self._tokens is None:
            self._tokens = []
            root = self.ast
            if root is not None:
                for node in root.walk():
                    if node.children:
                        continue
                    start, end = node.range
                    if start == end:
                        continue
                    self._tokens.append(Token(node.type, self.text[start:end], (start, end)))
            self._token_starts = [t.range[0] for t in self._tokens]
        return self._tokens

    def get_first_token(self, element) -> Optional[Token]:
        start, end = range_of(element)
        tokens = self.tokens
        i = bisect.bisect_left(self._token_starts, start)
        if i < len(tokens) and tokens[i].range[1] <= end:
            return tokens[i]
        return None

    def get_last_token(self, element) -> Optional[Token]:
        start, end = range_of(element)
        tokens = self.tokens
        i = bisect.bisect_left(self._token_starts, end) - 1
        while i >= 0 and tokens[i].range[1] > end:
            i -= 1
        if i >= 0 and tokens[i].range[0] >= start:
            return tokens[i]
        return None

    def get_token_before(self, element) -> Optional[Token]:
        start, _ = range_of(element)
        tokens = self.tokens
        i = bisect.bisect_left(self._token_starts, start) - 1
        while i >= 0 and tokens[i].range[1] > start:
            i -= 1
        return tokens[i] if i >= 0 else None

    def get_token_after(self, element) -> Optional[Token]:
        _, end = range_of(element)
        tokens = self.tokens
        i = bisect.bisect_left(self._token_starts, end)
        return tokens[i] if i < len(tokens) else None

    def __repr__(self) -> str:
        return f"SourceCode(path={self.path!r}, language={self.language!r}, length={len(self.text)})"
