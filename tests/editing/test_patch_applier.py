"""Tests for the FixApplier."""

import pytest

from rulefix.config import Config
from rulefix.editing.descriptor import EditDescriptor
from rulefix.editing.merge import FixOverlapError
from rulefix.editing.patch_applier import ApplyResult, FixApplier
from rulefix.editing.rule_fixer import RuleFixer
from rulefix.source.source_code import SourceCode


@pytest.fixture
def applier():
    return FixApplier(validate_syntax=False)


class TestApplySinglePass:
    def test_replace_and_insert(self, applier):
        source = SourceCode("const a = 1;")
        fixer = RuleFixer(source)
        result = applier.apply(source, [
            fixer.replace_text_range((0, 5), "let"),
            fixer.insert_text_after_range((10, 11), "0"),
        ])

        assert result.fixed is True
        assert result.output == "let a = 10;"
        assert len(result.applied) == 2
        assert not result.has_conflicts

    def test_order_independent(self, applier):
        source = SourceCode("abcdef")
        fixes = [EditDescriptor((4, 6), "EF"), EditDescriptor((0, 1), "A")]
        assert applier.apply(source, fixes).output == applier.apply(source, fixes[::-1]).output == "AbcdEF"

    def test_no_fixes(self, applier):
        result = applier.apply(SourceCode("x = 1"), [])
        assert result.fixed is False
        assert result.output == "x = 1"

    def test_removal(self, applier):
        source = SourceCode("foo(bar)")
        result = applier.apply(source, [RuleFixer(source).remove_range((3, 8))])
        assert result.output == "foo"


class TestConflicts:
    def test_overlap_skipped(self, applier):
        source = SourceCode("abcdef")
        first = EditDescriptor((0, 3), "X")
        second = EditDescriptor((2, 5), "Y")
        result = applier.apply(source, [second, first])

        assert result.output == "Xdef"
        assert result.applied == [first]
        assert result.conflicts == [second]

    def test_touching_fixes_conflict(self, applier):
        source = SourceCode("abcdef")
        result = applier.apply(source, [
            EditDescriptor((0, 3), "X"),
            EditDescriptor((3, 3), "!"),
        ])
        assert result.output == "Xdef"
        assert len(result.skipped) == 1

    def test_keep_blocks_overlapping_edit(self, applier):
        source = SourceCode("const a = 1;")
        fixer = RuleFixer(source)
        keep = fixer.keep_range((0, 7))
        edit = fixer.replace_text_range((6, 7), "b")
        result = applier.apply(source, [keep, edit])

        assert result.output == "const a = 1;"
        assert result.applied == [keep]
        assert result.skipped == [edit]

    def test_same_range_first_wins(self, applier):
        source = SourceCode("abc")
        a = EditDescriptor((1, 2), "1")
        b = EditDescriptor((1, 2), "2")
        result = applier.apply(source, [a, b])
        assert result.output == "a1c"
        assert result.skipped == [b]


class TestKeepRoundTrip:
    @pytest.mark.parametrize("rng", [(0, 0), (0, 5), (6, 7), (0, 12)])
    def test_keep_is_noop(self, applier, rng):
        source = SourceCode("const a = 1;")
        result = applier.apply(source, [RuleFixer(source).keep_range(rng)])
        assert result.output == source.text


class TestInvalidRanges:
    @pytest.mark.parametrize("rng", [(5, 2), (-1, 2), (3, 99)])
    def test_malformed_range_rejected(self, applier, rng):
        source = SourceCode("abcdef")
        bad = EditDescriptor(rng, "x")
        result = applier.apply(source, [bad, EditDescriptor((0, 1), "A")])

        assert result.invalid == [bad]
        assert result.output == "Abcdef"


class TestBom:
    def test_bom_preserved(self, applier):
        source = SourceCode("\ufeffvar x;")
        assert source.text == "var x;"
        result = applier.apply(source, [RuleFixer(source).replace_text_range((0, 3), "let")])
        assert result.output == "\ufefflet x;"


class TestSyntaxValidation:
    def test_broken_output_reverted(self):
        source = SourceCode("const a = 1;", language="javascript")
        fixer = RuleFixer(source)
        result = FixApplier(validate_syntax=True).apply(source, [fixer.remove_range((6, 7))])

        assert result.syntax_valid is False
        assert result.fixed is False
        assert result.output == "const a = 1;"
        assert "Syntax error" in result.error

    def test_valid_output_kept(self):
        source = SourceCode("x = 1\n", language="python")
        fixer = RuleFixer(source)
        result = FixApplier(validate_syntax=True).apply(source, [fixer.replace_text_range((4, 5), "2")])

        assert result.syntax_valid is True
        assert result.output == "x = 2\n"

    def test_no_language_skips_validation(self):
        source = SourceCode("const a = 1;")
        result = FixApplier(validate_syntax=True).apply(source, [EditDescriptor((6, 7), "")])
        assert result.output == "const  = 1;"


class TestApplyUntilStable:
    def test_repeats_until_nothing_changes(self, applier):
        def collapse_double_spaces(source, fixer):
            i = source.text.find("  ")
            if i >= 0:
                yield fixer.remove_range((i, i + 1))

        result = applier.apply_until_stable(SourceCode("a    b"), collapse_double_spaces)

        assert result.output == "a b"
        assert result.passes == 3
        assert result.converged is True

    def test_stops_at_max_passes(self, applier):
        def grow(source, fixer):
            yield fixer.insert_text_after_range((0, len(source.text)), "x")

        result = applier.apply_until_stable(SourceCode(""), grow, max_passes=4)

        assert result.output == "xxxx"
        assert result.passes == 4
        assert result.converged is False

    def test_multi_part_fix_merged(self, applier):
        def quote(source, fixer):
            if not source.text.startswith("'"):
                yield [
                    fixer.insert_text_before_range((0, 3), "'"),
                    fixer.insert_text_after_range((0, 3), "'"),
                ]

        result = applier.apply_until_stable(SourceCode("bar"), quote)
        assert result.output == "'bar'"
        assert result.passes == 1

    def test_overlapping_parts_raise(self, applier):
        def bad(source, fixer):
            yield [fixer.remove_range((0, 2)), fixer.remove_range((1, 3))]

        with pytest.raises(FixOverlapError):
            applier.apply_until_stable(SourceCode("abc"), bad)

    def test_keep_only_converges_immediately(self, applier):
        def keep_all(source, fixer):
            yield fixer.keep_range((0, len(source.text)))

        result = applier.apply_until_stable(SourceCode("abc"), keep_all)
        assert result.output == "abc"
        assert result.passes == 0
        assert result.fixed is False


class TestApplierConfig:
    def test_from_config(self, monkeypatch):
        monkeypatch.setenv("RULEFIX_MAX_FIX_PASSES", "2")
        monkeypatch.setenv("RULEFIX_VALIDATE_SYNTAX", "false")
        applier = FixApplier.from_config(Config())

        def grow(source, fixer):
            yield fixer.insert_text_after_range((0, len(source.text)), "y")

        result = applier.apply_until_stable(SourceCode(""), grow)
        assert result.output == "yy"

    def test_default_result(self):
        result = ApplyResult()
        assert result.fixed is False
        assert result.applied == []
        assert result.syntax_valid is True
