"""Source buffers with tree-sitter nodes and tokens."""

from .parser import EXTENSION_TO_LANGUAGE, detect_language, has_syntax_error, parse_bytes
from .source_code import SourceCode, SyntaxNode, Token

__all__ = [
    "EXTENSION_TO_LANGUAGE", "detect_language", "has_syntax_error", "parse_bytes",
    "SourceCode", "SyntaxNode", "Token",
]
