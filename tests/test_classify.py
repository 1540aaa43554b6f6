"""Tests for classification of a single code point's changes."""
import pytest

from idnadiff import (
    Record,
    derived_transition,
    find_derived_change,
    find_category_change,
    find_new_nonspacing_mark,
    find_new_decomposition,
    find_changed_decomposition)

NAME = 'LATIN CAPITAL LETTER A'


@pytest.mark.parametrize('old,new', [
    # did not exist
    (None, Record('DISALLOWED', 'Lu', (), NAME)),
    # unchanged
    (Record('PVALID', 'Lu', (), NAME), Record('PVALID', 'Lu', (), NAME)),
    # newly assigned code points are expected
    (Record('UNASSIGNED', 'Cn', (), ''), Record('PVALID', 'Lu', (), NAME)),
])
def test_derived_change_not_reported(old, new):
    assert find_derived_change(0x41, old, new) is None


def test_derived_change():
    """Change from PVALID to DISALLOWED is reported and flagged."""
    # given,
    old = Record('PVALID', 'Lu', (), NAME)
    new = Record('DISALLOWED', 'Lu', (), NAME)

    # exercise,
    finding = find_derived_change(0x41, old, new)

    # verify.
    assert finding.line == 'U+0041; PVALID; DISALLOWED; LATIN CAPITAL LETTER A'
    assert finding.log_message == '0041 changed from PVALID to DISALLOWED'
    assert finding.flagged
    assert finding.flag == (0x41, 'U+0041; UNDER REVIEW # LATIN CAPITAL LETTER A')


def test_derived_transition_includes_unassigned():
    """Changes from UNASSIGNED are tallied, although not reported in Appendix A."""
    old = Record('UNASSIGNED', 'Cn')
    new = Record('PVALID', 'Lo')
    assert derived_transition(old, new) == ('UNASSIGNED', 'PVALID')
    assert derived_transition(None, new) is None
    assert derived_transition(new, new) is None


def test_category_change_not_flagged():
    """Changes of General_Category are reported, but never flagged."""
    # given,
    old = Record('PVALID', 'Lo', (), 'VEDIC SIGN X')
    new = Record('PVALID', 'Mc', (), 'VEDIC SIGN X')

    # exercise,
    finding = find_category_change(0x1CF2, old, new)

    # verify.
    assert finding.line == 'U+1CF2; Lo; Mc; VEDIC SIGN X'
    assert not finding.flagged
    assert finding.flag is None


@pytest.mark.parametrize('old,new', [
    (None, Record('PVALID', 'Mc')),
    (Record('PVALID', 'Lo'), Record('PVALID', 'Lo')),
    (Record('UNASSIGNED', 'Cn'), Record('PVALID', 'Lo')),
    (Record('PVALID', 'Lo'), Record('UNASSIGNED', 'Cn')),
])
def test_category_change_not_reported(old, new):
    assert find_category_change(0x1CF2, old, new) is None


@pytest.mark.parametrize('old', [
    None,
    Record('UNASSIGNED', 'Cn'),
    Record('PVALID', 'Lo'),
])
def test_new_nonspacing_mark(old):
    """Assigned Mn code point that was not Mn before, or did not exist."""
    new = Record('PVALID', 'Mn', (), 'COMBINING X')
    finding = find_new_nonspacing_mark(0x1AB0, old, new)
    assert finding.line == 'U+1AB0; COMBINING X'
    assert finding.flagged


@pytest.mark.parametrize('old,new', [
    # already Mn
    (Record('PVALID', 'Mn'), Record('PVALID', 'Mn')),
    # not assigned
    (None, Record('UNASSIGNED', 'Mn')),
    # not Mn
    (None, Record('PVALID', 'Lo')),
])
def test_new_nonspacing_mark_not_reported(old, new):
    assert find_new_nonspacing_mark(0x1AB0, old, new) is None


def test_new_decomposition():
    """Newly PVALID code point with a normalization of two code points."""
    # given,
    old = Record('UNASSIGNED', 'Cn')
    new = Record('PVALID', 'Ll', ('0061', '0300'), 'LATIN SMALL LETTER X')

    # exercise,
    finding = find_new_decomposition(0x1DF00, old, new)

    # verify.
    assert finding.line == 'U+1DF00; 0061 0300; LATIN SMALL LETTER X'
    assert finding.log_message == 'New code point to normalize 1DF00 0061 0300'
    assert finding.flagged


@pytest.mark.parametrize('old,new', [
    # single code point normalization
    (Record('UNASSIGNED', 'Cn'), Record('PVALID', 'Ll', ('0061',))),
    # did not exist as UNASSIGNED
    (None, Record('PVALID', 'Ll', ('0061', '0300'))),
    (Record('PVALID', 'Ll'), Record('PVALID', 'Ll', ('0061', '0300'))),
    # not PVALID
    (Record('UNASSIGNED', 'Cn'), Record('DISALLOWED', 'Ll', ('0061', '0300'))),
])
def test_new_decomposition_not_reported(old, new):
    assert find_new_decomposition(0x1DF00, old, new) is None


def test_changed_decomposition():
    old = Record('PVALID', 'Ll', ('0061', '0301'))
    new = Record('PVALID', 'Ll', ('0061', '0300'))
    assert find_changed_decomposition(0xE1, old, new) == (
        'Changed normalization for code point 00E1 (PVALID PVALID): 0061 0301 : 0061 0300')
    assert find_changed_decomposition(0xE1, new, new) is None
    assert find_changed_decomposition(0xE1, Record('UNASSIGNED'), new) is None
