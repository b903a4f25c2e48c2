"""Fix descriptors — build, merge and apply ``(range, text)`` edits."""

from .descriptor import EditDescriptor, Located, MissingRangeError, Range, range_of
from .rule_fixer import (
    RuleFixer,
    insert_text_at,
    insert_text_after_range,
    insert_text_before_range,
    keep_range,
    remove_range,
    replace_text_range,
)
from .merge import FixOverlapError, merge_fixes
from .patch_applier import ApplyResult, FixApplier

__all__ = [
    "EditDescriptor", "Located", "MissingRangeError", "Range", "range_of",
    "RuleFixer", "insert_text_at", "insert_text_after_range",
    "insert_text_before_range", "keep_range", "remove_range",
    "replace_text_range",
    "FixOverlapError", "merge_fixes",
    "ApplyResult", "FixApplier",
]
