"""
Fix applier — splices edit descriptors into source text, skipping
conflicting and malformed ones, with optional syntax validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from ..source.parser import has_syntax_error
from ..source.source_code import BOM, SourceCode
from .descriptor import EditDescriptor
from .merge import merge_fixes
from .rule_fixer import RuleFixer

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10

FixItem = Union[EditDescriptor, Iterable[EditDescriptor]]
FixProducer = Callable[[SourceCode, RuleFixer], Iterable[FixItem]]


@dataclass
class ApplyResult:
    """Result of applying a set of fixes."""
    output: str = ""
    fixed: bool = False
    applied: list[EditDescriptor] = field(default_factory=list)
    skipped: list[EditDescriptor] = field(default_factory=list)   # overlapped an applied fix
    invalid: list[EditDescriptor] = field(default_factory=list)   # malformed range
    syntax_valid: bool = True
    error: str = ""
    passes: int = 0
    converged: bool = True

    @property
    def has_conflicts(self) -> bool:
        return bool(self.skipped)

    @property
    def conflicts(self) -> list[EditDescriptor]:
        return list(self.skipped)


class FixApplier:
    """Apply edit descriptors to a :class:`SourceCode`."""

    def __init__(
        self,
        validate_syntax: bool = True,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        self._validate_syntax = validate_syntax
        self._max_passes = max_passes

    @classmethod
    def from_config(cls, config) -> "FixApplier":
        return cls(
            validate_syntax=config.VALIDATE_SYNTAX,
            max_passes=config.MAX_FIX_PASSES,
        )

    def apply(
        self,
        source: SourceCode,
        fixes: Iterable[EditDescriptor],
    ) -> ApplyResult:
        """Apply *fixes* to *source* in a single pass.

        Fixes are sorted by range.  A fix starting at or before the end of
        the previously applied one is skipped (touching counts as overlap),
        so ``keep`` descriptors block anything that reaches into them.

        Parameters
        ----------
        source:
            The buffer the fixes were built against.
        fixes:
            Descriptors from :class:`RuleFixer`, in any order.

        Returns
        -------
        ApplyResult
            The new text plus what was applied, skipped or rejected.
        """
        text = source.text
        result = ApplyResult()
        candidates: list[EditDescriptor] = []

        for fix in fixes:
            if self._is_valid(fix, len(text)):
                candidates.append(fix)
            else:
                logger.warning("[Fixer] Rejected fix with invalid range %r", fix.range)
                result.invalid.append(fix)

        # sorted() is stable: equal ranges keep submission order
        candidates = sorted(candidates, key=lambda f: (f.start, f.end))

        chunks: list[str] = []
        last_pos = -1
        for fix in candidates:
            if fix.start <= last_pos:
                logger.debug("[Fixer] Fix %r overlaps previous fix ending at %d",
                             fix.range, last_pos)
                result.skipped.append(fix)
                continue
            chunks.append(text[max(0, last_pos):fix.start])
            chunks.append(fix.text)
            last_pos = fix.end
            result.applied.append(fix)
        chunks.append(text[max(0, last_pos):])

        output = "".join(chunks)
        result.fixed = bool(result.applied)

        if result.skipped:
            logger.info("[Fixer] %d fix(es) skipped due to overlapping ranges",
                        len(result.skipped))

        if result.fixed and self._validate_syntax and source.language:
            if self._introduces_syntax_error(text, output, source.language):
                logger.warning(
                    "[Fixer] Fixes introduced a syntax error in %s, reverting",
                    source.path or "<text>",
                )
                result.syntax_valid = False
                result.error = f"Syntax error after applying fixes to {source.path or '<text>'}"
                result.fixed = False
                output = text

        result.output = (BOM if source.has_bom else "") + output
        return result

    def apply_until_stable(
        self,
        source: SourceCode,
        produce_fixes: FixProducer,
        max_passes: Optional[int] = None,
    ) -> ApplyResult:
        """Repeatedly collect and apply fixes until nothing changes.

        *produce_fixes* is called with the current source and a fixer bound
        to it; each item it yields is a descriptor, or an iterable of
        descriptors forming one multi-part fix.
        """
        limit = max_passes if max_passes is not None else self._max_passes
        current = source
        total = ApplyResult(output=(BOM if source.has_bom else "") + source.text)

        for _ in range(limit):
            fixes = self._collect(current, produce_fixes)
            result = self.apply(current, fixes)

            total.skipped = result.skipped
            total.invalid = result.invalid
            if not result.syntax_valid:
                total.syntax_valid = False
                total.error = result.error
            if not result.fixed or self._strip_bom(result.output) == current.text:
                total.converged = True
                break

            total.applied.extend(result.applied)
            total.fixed = True
            total.passes += 1
            total.output = result.output
            current = SourceCode(result.output, language=source.language,
                                 path=source.path)
        else:
            total.converged = False
            logger.warning("[Fixer] Fixes did not converge after %d passes for %s",
                           limit, source.path or "<text>")

        return total

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _collect(source: SourceCode, produce_fixes: FixProducer) -> list[EditDescriptor]:
        fixer = RuleFixer(source)
        fixes: list[EditDescriptor] = []
        for item in produce_fixes(source, fixer):
            if isinstance(item, EditDescriptor):
                fixes.append(item)
                continue
            merged = merge_fixes(item, source)
            if merged is not None:
                fixes.append(merged)
        return fixes

    @staticmethod
    def _is_valid(fix: EditDescriptor, length: int) -> bool:
        start, end = fix.range
        if not isinstance(start, int) or not isinstance(end, int):
            return False
        if not isinstance(fix.text, str):
            return False
        return 0 <= start <= end <= length

    @staticmethod
    def _strip_bom(text: str) -> str:
        return text[len(BOM):] if text.startswith(BOM) else text

    @staticmethod
    def _introduces_syntax_error(before: str, after: str, language: str) -> bool:
        """True if *after* fails to parse while *before* parsed cleanly."""
        if has_syntax_error(after, language) is not True:
            return False
        return has_syntax_error(before, language) is False
