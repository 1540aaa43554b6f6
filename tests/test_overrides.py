"""Tests for applying review flags."""
from idnadiff import UNDER_REVIEW, FlaggedEntry, apply_overrides


def test_flagged_under_review():
    """Flagged code points become UNDER REVIEW, whatever their value, others are unchanged."""
    # given,
    derived_values = {0x41: 'PVALID', 0x42: 'DISALLOWED', 0x43: 'CONTEXTJ', 0x44: 'PVALID'}
    flagged = [FlaggedEntry(0x43, 'U+0043; UNDER REVIEW # C'),
               FlaggedEntry(0x42, 'U+0042; UNDER REVIEW # B')]

    # exercise,
    result = apply_overrides(flagged, derived_values)

    # verify.
    assert result.effective == {0x41: 'PVALID', 0x42: UNDER_REVIEW,
                                0x43: UNDER_REVIEW, 0x44: 'PVALID'}
    # the given table is not modified
    assert derived_values[0x42] == 'DISALLOWED'


def test_sorted_by_codepoint():
    """Appendix E is ordered by code point, regardless of order flagged."""
    flagged = [FlaggedEntry(0x42, 'U+0042; UNDER REVIEW # B'),
               FlaggedEntry(0x41, 'U+0041; UNDER REVIEW # A')]
    result = apply_overrides(flagged, {0x41: 'PVALID', 0x42: 'PVALID'})
    assert result.lines == ('U+0041; UNDER REVIEW # A', 'U+0042; UNDER REVIEW # B')


def test_stable_and_not_deduplicated():
    """A code point flagged twice is listed twice, in order flagged."""
    flagged = [FlaggedEntry(0x300, 'first'),
               FlaggedEntry(0x41, 'other'),
               FlaggedEntry(0x300, 'second')]
    result = apply_overrides(flagged, {0x41: 'PVALID', 0x300: 'PVALID'})
    assert result.lines == ('other', 'first', 'second')


def test_nothing_flagged():
    derived_values = {0x41: 'PVALID'}
    result = apply_overrides([], derived_values)
    assert result.lines == ()
    assert result.effective == derived_values
    assert result.effective is not derived_values
