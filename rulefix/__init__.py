"""
rulefix — declarative fix descriptors for lint rules.

Public API for library usage::

    from rulefix import SourceCode, RuleFixer, FixApplier

    source = SourceCode("const a = 1;", language="javascript")
    fixer = RuleFixer(source)
    result = FixApplier().apply(source, [fixer.insert_text_after_range((0, 12), "\\n")])
"""

from .config import Config, setup_logger
from .editing import (
    ApplyResult,
    EditDescriptor,
    FixApplier,
    FixOverlapError,
    MissingRangeError,
    RuleFixer,
    merge_fixes,
)
from .source import SourceCode, SyntaxNode, Token

__all__ = [
    "Config", "setup_logger",
    "ApplyResult", "EditDescriptor", "FixApplier", "FixOverlapError",
    "MissingRangeError", "RuleFixer", "merge_fixes",
    "SourceCode", "SyntaxNode", "Token",
]
