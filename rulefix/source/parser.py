"""
Tree-sitter parsing for source buffers.

Supports: Python, JavaScript, TypeScript

Uses tree-sitter >= 0.22 API with individual language packages.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Language mapping
# ---------------------------------------------------------------------------

EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
}

SUPPORTED_LANGUAGES: set[str] = set(EXTENSION_TO_LANGUAGE.values())


def detect_language(file_path: str) -> Optional[str]:
    """
    Return the tree-sitter language name for *file_path*, or None if unsupported.

    Parameters
    ----------
    file_path:
        Any file path; only the extension is examined.
    """
    ext = os.path.splitext(file_path)[1].lower()
    return EXTENSION_TO_LANGUAGE.get(ext)


# ---------------------------------------------------------------------------
# Language → (tree-sitter Language object) lookup
# ---------------------------------------------------------------------------

def _get_lang_func(language: str):
    """Return the tree-sitter language() function for *language*, or None."""
    try:
        if language == "python":
            import tree_sitter_python as m  # type: ignore
            return m.language
        elif language == "javascript":
            import tree_sitter_javascript as m  # type: ignore
            return m.language
        elif language == "typescript":
            import tree_sitter_typescript as m  # type: ignore
            return m.language_typescript
    except ImportError:
        logger.debug("Grammar package for %s is not installed", language)
    return None


_LANG_CACHE: dict[str, object] = {}
_PARSER_CACHE: dict[str, object] = {}


def _get_ts_language(language: str):
    """Return the cached tree_sitter.Language object for *language*, or None."""
    if language in _LANG_CACHE:
        return _LANG_CACHE[language]
    try:
        import tree_sitter as ts  # type: ignore
        func = _get_lang_func(language)
        if func is None:
            return None
        lang_obj = ts.Language(func())
        _LANG_CACHE[language] = lang_obj
        return lang_obj
    except Exception as exc:
        logger.debug("Cannot load tree-sitter language %s: %s", language, exc)
        return None


def _get_ts_parser(language: str):
    """Return the cached tree-sitter Parser for *language*, or None."""
    if language in _PARSER_CACHE:
        return _PARSER_CACHE[language]
    try:
        import tree_sitter as ts  # type: ignore
        lang_obj = _get_ts_language(language)
        if lang_obj is None:
            return None
        parser = ts.Parser(lang_obj)
        _PARSER_CACHE[language] = parser
        return parser
    except Exception as exc:
        logger.warning("Cannot create tree-sitter parser for %s: %s", language, exc)
        return None


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def parse_bytes(source_bytes: bytes, language: str):
    """
    Parse UTF-8 *source_bytes* as *language*.

    Returns
    -------
    tree_sitter.Tree or None
        ``None`` when no parser is available or parsing blew up.
    """
    ts_parser = _get_ts_parser(language)
    if ts_parser is None:
        return None
    try:
        return ts_parser.parse(source_bytes)
    except Exception as exc:
        logger.warning("Parse error for %s source: %s", language, exc)
        return None


def has_syntax_error(text: str, language: str) -> Optional[bool]:
    """Return True if *text* has parse errors, or None if it cannot be parsed."""
    tree = parse_bytes(text.encode("utf-8"), language)
    if tree is None:
        return None
    return tree.root_node.has_error
