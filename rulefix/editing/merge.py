"""
Merge the parts of a multi-part fix into a single descriptor.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .descriptor import EditDescriptor

logger = logging.getLogger(__name__)


class FixOverlapError(ValueError):
    """Raised when the parts of one fix overlap each other."""


def merge_fixes(
    fixes: Iterable[EditDescriptor],
    source: Any,
) -> Optional[EditDescriptor]:
    """Combine *fixes* into one descriptor spanning all of them.

    Gaps between parts are filled with the original text of *source*, so
    the merged descriptor has the same effect as applying every part.

    Returns
    -------
    EditDescriptor or None
        ``None`` for no fixes, the fix itself for a single one.

    Raises
    ------
    FixOverlapError
        If two parts overlap.  Touching parts are fine.
    """
    parts = list(fixes)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]

    parts.sort(key=lambda f: (f.start, f.end))
    text = source.text
    start = parts[0].start
    end = start
    chunks: list[str] = []

    for fix in parts:
        if fix.start < end:
            raise FixOverlapError(
                f"Fix parts must not overlap: {fix.range} starts before {end}"
            )
        chunks.append(text[end:fix.start])
        chunks.append(fix.text)
        end = fix.end

    logger.debug("[Fixer] Merged %d fix parts into range (%d, %d)",
                 len(parts), start, end)
    return EditDescriptor(range=(start, end), text="".join(chunks))
