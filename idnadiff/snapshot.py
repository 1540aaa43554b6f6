"""
Per-codepoint records of one Unicode release, as read from IDNA tables.

A :class:`Snapshot` is built once by :mod:`idnadiff.loader` (or by hand, in
tests) and is never modified afterwards.
"""
from __future__ import annotations

# std imports
import functools
from types import MappingProxyType
from dataclasses import field, dataclass

from typing import Mapping, Iterator, NamedTuple

#: derived property value of code points not yet assigned in a release
UNASSIGNED = 'UNASSIGNED'

#: derived property value of code points that are valid in IDNA
PVALID = 'PVALID'

#: derived property value given to every code point flagged for review
UNDER_REVIEW = 'UNDER REVIEW'

#: General_Category value of nonspacing marks
NONSPACING_MARK = 'Mn'

#: highest valid code point
MAX_UCS = 0x10FFFF


def format_ucs(ucs: int) -> str:
    """
    Return code point as upper-case hexadecimal of at least 4 digits.

    >>> format_ucs(0x41)
    '0041'
    >>> format_ucs(0x1F600)
    '1F600'
    """
    return f'{ucs:04X}'


class Record(NamedTuple):
    """
    Known attributes of one code point in one release.

    :param derived: IDNA derived property value, such as ``'PVALID'``.
    :param category: General_Category value, such as ``'Lu'``, or empty
        string when not known.
    :param decomposition: Tokens of the normalization mapping.
    :param name: Display name of the code point.
    """
    derived: str
    category: str = ''
    decomposition: tuple[str, ...] = ()
    name: str = ''

    @property
    def is_unassigned(self) -> bool:
        return self.derived == UNASSIGNED

    @property
    def decomposition_text(self) -> str:
        return ' '.join(self.decomposition)


@dataclass(frozen=True)
class Snapshot:
    """Immutable mapping of code point to :class:`Record` for one version."""
    version: str
    records: Mapping[int, Record] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # freeze a private copy, so the caller's dict may be reused freely
        object.__setattr__(self, 'records', MappingProxyType(dict(self.records)))

    def __contains__(self, ucs: object) -> bool:
        return ucs in self.records

    def __getitem__(self, ucs: int) -> Record:
        return self.records[ucs]

    def __iter__(self) -> Iterator[int]:
        return iter(self.codepoints)

    def __len__(self) -> int:
        return len(self.records)

    def get(self, ucs: int) -> Record | None:
        return self.records.get(ucs)

    @functools.cached_property
    def codepoints(self) -> tuple[int, ...]:
        """All code points of this snapshot, in ascending order."""
        return tuple(sorted(self.records))

    def derived_values(self) -> dict[int, str]:
        """Return a new dict of code point to derived property value."""
        return {ucs: record.derived for ucs, record in self.records.items()}

    def count_nonspacing_marks(self) -> int:
        """Count assigned code points of General_Category Mn."""
        return sum(1 for record in self.records.values()
                   if not record.is_unassigned and record.category == NONSPACING_MARK)
