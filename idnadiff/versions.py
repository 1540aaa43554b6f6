"""Unicode version labels, as used to name snapshot directories."""
from __future__ import annotations

# std imports
import re
from dataclasses import dataclass

# local
from .exceptions import InvalidVersionLabel

# IDNA derived property tables are compared for Unicode 12.0.0 and up
VERSION_PATTERN = re.compile(r'^1[2-9](\.\d+)*$')


@dataclass(order=True, frozen=True)
class UnicodeVersion:
    """A class for comparable unicode version, missing parts are zero."""
    major: int
    minor: int = 0
    micro: int = 0

    @classmethod
    def parse(cls, version_str: str) -> UnicodeVersion:
        """
        Parse a version string.

        >>> UnicodeVersion.parse("15.1")
        UnicodeVersion(major=15, minor=1, micro=0)

        :raises InvalidVersionLabel: when ``version_str`` is not a Unicode
            version of 12.0 or later.
        """
        if not VERSION_PATTERN.match(version_str or ''):
            raise InvalidVersionLabel(
                f'Invalid version {version_str!r}, please use the format 12.0.0')
        return cls(*map(int, version_str.split(".")[:3]))

    def __str__(self) -> str:
        """
        >>> str(UnicodeVersion(12, 1, 0))
        '12.1.0'
        """
        return f'{self.major}.{self.minor}.{self.micro}'


def parse_version_pair(old_label: str, new_label: str) -> tuple[UnicodeVersion, UnicodeVersion]:
    """
    Parse labels of the earlier and later version of a comparison.

    :raises InvalidVersionLabel: when either label is invalid, or
        ``old_label`` is not an earlier version than ``new_label``.
    """
    old, new = UnicodeVersion.parse(old_label), UnicodeVersion.parse(new_label)
    if old >= new:
        raise InvalidVersionLabel(
            f'Version {old_label!r} is not earlier than {new_label!r}')
    return old, new
