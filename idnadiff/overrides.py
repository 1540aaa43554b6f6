"""Apply review flags to the derived property values of the new release."""
from __future__ import annotations

# std imports
import operator

from typing import Mapping, Iterable, NamedTuple

# local
from .classify import FlaggedEntry
from .snapshot import UNDER_REVIEW


class OverrideResult(NamedTuple):
    """Lines of Appendix E, and the derived property values with flags applied."""
    lines: tuple[str, ...]
    effective: dict[int, str]


def apply_overrides(flagged: Iterable[FlaggedEntry],
                    derived_values: Mapping[int, str]) -> OverrideResult:
    """
    Return Appendix E lines and a copy of ``derived_values`` with flagged code points under review.

    Entries are ordered by code point.  The sort is stable, so entries of the
    same code point keep the order in which they were flagged, and a code
    point flagged twice is listed twice.  ``derived_values`` is not modified.
    """
    effective = dict(derived_values)
    lines = []
    for entry in sorted(flagged, key=operator.attrgetter('ucs')):
        lines.append(entry.label)
        effective[entry.ucs] = UNDER_REVIEW
    return OverrideResult(tuple(lines), effective)
