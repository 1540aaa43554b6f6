"""Compact a table of code point values into ranges of equal value."""
from __future__ import annotations

# std imports
from typing import Mapping, Iterable, NamedTuple

# local
from .snapshot import format_ucs


class ValueRange(NamedTuple):
    """Code points ``start`` through ``end``, inclusive, all of ``value``."""
    start: int
    end: int
    value: str

    def __str__(self) -> str:
        """
        >>> str(ValueRange(0x41, 0x5A, 'PVALID'))
        'U+0041..U+005A; PVALID'
        >>> str(ValueRange(0x41, 0x41, 'PVALID'))
        'U+0041; PVALID'
        """
        if self.start == self.end:
            return f'U+{format_ucs(self.start)}; {self.value}'
        return f'U+{format_ucs(self.start)}..U+{format_ucs(self.end)}; {self.value}'


def compact_ranges(table: Mapping[int, str]) -> list[ValueRange]:
    """
    Return a list of maximal ranges of consecutive code points sharing the same value.

    A range never spans a code point missing from ``table``, so that
    :func:`expand_ranges` always restores ``table`` exactly.
    """
    ranges: list[ValueRange] = []
    for ucs in sorted(table):
        value = table[ucs]
        if ranges and ranges[-1].value == value and ranges[-1].end == ucs - 1:
            # continuation of existing range, rewrite
            ranges[-1] = ranges[-1]._replace(end=ucs)
        else:
            # and start a new one
            ranges.append(ValueRange(ucs, ucs, value))
    return ranges


def expand_ranges(ranges: Iterable[ValueRange]) -> dict[int, str]:
    """Return table of code point values described by ``ranges``."""
    return {ucs: value_range.value
            for value_range in ranges
            for ucs in range(value_range.start, value_range.end + 1)}
