"""
Classify how a single code point changed between two releases.

Each ``find_*`` function is a pure function of one code point's
:class:`~idnadiff.snapshot.Record` in the old release (``None`` when the code
point did not exist) and in the new release, returning a :class:`Finding`
when the code point belongs to that appendix, otherwise ``None``.
"""
from __future__ import annotations

# std imports
from dataclasses import dataclass

from typing import Callable, NamedTuple

# local
from .snapshot import PVALID, UNDER_REVIEW, NONSPACING_MARK, Record, format_ucs


class FlaggedEntry(NamedTuple):
    """A code point to be listed in Appendix E and set to ``UNDER REVIEW``."""
    ucs: int
    label: str


@dataclass(frozen=True)
class Finding:
    """One line of an appendix, and whether the code point is flagged for review."""
    ucs: int
    name: str
    line: str
    log_message: str
    flagged: bool

    @property
    def flag(self) -> FlaggedEntry | None:
        if not self.flagged:
            return None
        return FlaggedEntry(self.ucs, review_label(self.ucs, self.name))


def review_label(ucs: int, name: str) -> str:
    """
    Return the Appendix E line of a flagged code point.

    >>> review_label(0x41, 'LATIN CAPITAL LETTER A')
    'U+0041; UNDER REVIEW # LATIN CAPITAL LETTER A'
    """
    return f'U+{format_ucs(ucs)}; {UNDER_REVIEW} # {name}'


def derived_transition(old: Record | None, new: Record) -> tuple[str, str] | None:
    """
    Return ``(old, new)`` derived property values when they differ.

    Unlike :func:`find_derived_change`, changes from ``UNASSIGNED`` are
    included, these are tallied in the summary of Appendix A.
    """
    if old is None or old.derived == new.derived:
        return None
    return old.derived, new.derived


def find_derived_change(ucs: int, old: Record | None, new: Record) -> Finding | None:
    """
    Appendix A: code point changed its derived property value.

    Newly assigned code points, changing from ``UNASSIGNED``, are expected
    and not reported.
    """
    if derived_transition(old, new) is None or old.is_unassigned:
        return None
    hex_ucs = format_ucs(ucs)
    return Finding(
        ucs=ucs,
        name=new.name,
        line=f'U+{hex_ucs}; {old.derived}; {new.derived}; {new.name}',
        log_message=f'{hex_ucs} changed from {old.derived} to {new.derived}',
        flagged=True)


def find_category_change(ucs: int, old: Record | None, new: Record) -> Finding | None:
    """
    Appendix B: code point changed its General_Category.

    Code points that are ``UNASSIGNED`` in either release are ignored.  These
    findings are reported only, they are not flagged for review.
    """
    if old is None or old.category == new.category:
        return None
    if old.is_unassigned or new.is_unassigned:
        return None
    hex_ucs = format_ucs(ucs)
    return Finding(
        ucs=ucs,
        name=new.name,
        line=f'U+{hex_ucs}; {old.category}; {new.category}; {new.name}',
        log_message=(f'Code point U+{hex_ucs} changed from {old.derived} to {new.derived} '
                     f'(General Category: {old.category} to {new.category})'),
        flagged=False)


def find_new_nonspacing_mark(ucs: int, old: Record | None, new: Record) -> Finding | None:
    """Appendix C: assigned code point that became, or was added as, a nonspacing mark."""
    if new.is_unassigned or new.category != NONSPACING_MARK:
        return None
    if old is not None and old.category == NONSPACING_MARK:
        return None
    hex_ucs = format_ucs(ucs)
    return Finding(
        ucs=ucs,
        name=new.name,
        line=f'U+{hex_ucs}; {new.name}',
        log_message=f'New code point with General Category Mn {hex_ucs}',
        flagged=True)


def find_new_decomposition(ucs: int, old: Record | None, new: Record) -> Finding | None:
    """
    Appendix D: newly assigned ``PVALID`` code point that decomposes to more than one token.

    The code point must exist, as ``UNASSIGNED``, in the old release.
    """
    if old is None or not old.is_unassigned or new.derived != PVALID:
        return None
    if len(new.decomposition) <= 1:
        return None
    hex_ucs = format_ucs(ucs)
    return Finding(
        ucs=ucs,
        name=new.name,
        line=f'U+{hex_ucs}; {new.decomposition_text}; {new.name}',
        log_message=f'New code point to normalize {hex_ucs} {new.decomposition_text}',
        flagged=True)


def find_changed_decomposition(ucs: int, old: Record | None, new: Record) -> str | None:
    """
    Return a diagnostic message when an assigned code point changed its decomposition.

    Only multi-token decompositions in the new release are considered.  These
    are logged, never reported nor flagged.
    """
    if old is None or old.is_unassigned or len(new.decomposition) <= 1:
        return None
    if old.decomposition_text == new.decomposition_text:
        return None
    return (f'Changed normalization for code point {format_ucs(ucs)} '
            f'({old.derived} {new.derived}): '
            f'{old.decomposition_text} : {new.decomposition_text}')


#: Finder function of each appendix letter, in the order they are scanned.
FINDERS: dict[str, Callable[[int, Record | None, Record], Finding | None]] = {
    'A': find_derived_change,
    'B': find_category_change,
    'C': find_new_nonspacing_mark,
    'D': find_new_decomposition,
}
