"""
Build Appendices A through D of a review report.

:func:`build_plan` scans every code point of the new release once for each
appendix, in ascending order, and returns an immutable :class:`ReviewPlan`:
the appendix lines, the code points flagged for review, and statistics.
Nothing is modified, the flags are applied later by
:func:`idnadiff.overrides.apply_overrides`.

Code points changing General_Category (Appendix B) are reported but not
flagged for review, unlike those of Appendices A, C and D.  This policy is
kept until confirmed otherwise by the IDNA experts reviewing the report.
"""
from __future__ import annotations

# std imports
import collections
from dataclasses import dataclass

from typing import Any, Mapping, Sequence, NamedTuple

# local
from .classify import FINDERS, Finding, FlaggedEntry, derived_transition, find_changed_decomposition
from .reporter import NULL_REPORTER, Reporter
from .snapshot import UNDER_REVIEW, Snapshot


class SectionDef(NamedTuple):
    title: str
    header: tuple[str, ...]
    placeholder: str
    lead: str


SECTIONS: dict[str, SectionDef] = {
    'A': SectionDef('Code points that changed derived property values',
                    ('# Code point; Old; New; Name',),
                    '# No change in derived property value except from UNASSIGNED',
                    '\n'),
    'B': SectionDef('Changes in General Category',
                    ('# Code point; Old GC; New GC; Name', ''),
                    '# No changes in General Category detected',
                    '\n\n'),
    'C': SectionDef('New code points where General Category is Mn',
                    ('# Code point; Name',),
                    '# No new code points with General Category Mn',
                    '\n\n'),
    'D': SectionDef('New code points with NFK normalization',
                    (),
                    '# No new code points with length of NFK greater than one',
                    '\n\n'),
    'E': SectionDef('Additions to Exceptions (F)',
                    (),
                    f'# No additional code points to become {UNDER_REVIEW}',
                    '\n'),
    'F': SectionDef('Derived property values Unicode {version}',
                    (),
                    '# No code points',
                    '\n'),
}

_SCAN_MESSAGES = {
    'A': 'Comparing derived property values',
    'B': 'Check changes in General Category:',
    'C': 'Check new code points with General_Category Mn',
    'D': 'Check changes in NFK for all code points',
}


def _code_points(count: int) -> str:
    """
    >>> _code_points(1)
    '1 code point'
    """
    return f'{count} code {"point" if count == 1 else "points"}'


@dataclass(frozen=True)
class Appendix:
    """A titled section of the report."""
    letter: str
    title: str
    lines: tuple[str, ...]
    count: int
    lead: str = '\n'

    @classmethod
    def new(cls, letter: str, entries: Sequence[str], trailer: Sequence[str] = (),
            **title_args: str) -> Appendix:
        """Create appendix of ``entries``, with header, or placeholder when there are none."""
        section = SECTIONS[letter]
        if entries:
            lines = (*section.header, *entries)
        else:
            lines = (section.placeholder,)
        return cls(letter=letter,
                   title=section.title.format(**title_args),
                   lines=(*lines, *trailer),
                   count=len(entries),
                   lead=section.lead)


@dataclass(frozen=True)
class TransitionSummary:
    """Tally of every change of derived property value, including from UNASSIGNED."""
    counts: Mapping[tuple[str, str], int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def lines(self) -> list[str]:
        """Return summary lines, sorted by their text, and a line of the total."""
        if not self.counts:
            return ['# No derived property changes detected.']
        changes = sorted(f'# {_code_points(count)} changed from {old} to {new}'
                         for (old, new), count in self.counts.items())
        return [*changes, f'# {_code_points(self.total)} changed in total']


@dataclass(frozen=True)
class ReviewPlan:
    """Result of comparing two snapshots, before any flag is applied."""
    old_version: str
    new_version: str
    appendices: tuple[Appendix, ...]
    transitions: TransitionSummary
    flagged: tuple[FlaggedEntry, ...]
    nonspacing_marks: tuple[int, int]
    changed_decompositions: int

    def appendix(self, letter: str) -> Appendix:
        for appendix in self.appendices:
            if appendix.letter == letter:
                return appendix
        raise KeyError(letter)

    @property
    def nonspacing_mark_increase(self) -> int:
        old_count, new_count = self.nonspacing_marks
        return new_count - old_count

    def to_dict(self) -> dict[str, Any]:
        """Return statistics as plain data, suitable for yaml.safe_dump."""
        return {
            'old_version': self.old_version,
            'new_version': self.new_version,
            'appendix_counts': {appendix.letter: appendix.count
                                for appendix in self.appendices},
            'flagged': len(self.flagged),
            'transitions': [{'old': old, 'new': new, 'count': count}
                            for (old, new), count in sorted(self.transitions.counts.items())],
            'transitions_total': self.transitions.total,
            'nonspacing_marks': {self.old_version: self.nonspacing_marks[0],
                                 self.new_version: self.nonspacing_marks[1]},
            'changed_decompositions': self.changed_decompositions,
        }


def scan(letter: str, old: Snapshot, new: Snapshot,
         reporter: Reporter = NULL_REPORTER) -> list[Finding]:
    """Return findings of appendix ``letter`` for every code point of ``new``, ascending."""
    finder = FINDERS[letter]
    findings: list[Finding] = []
    for ucs in new.codepoints:
        if finding := finder(ucs, old.get(ucs), new[ucs]):
            reporter.echo(finding.log_message)
            findings.append(finding)
    return findings


def count_transitions(old: Snapshot, new: Snapshot) -> TransitionSummary:
    counts = collections.Counter(
        transition for ucs in new.codepoints
        if (transition := derived_transition(old.get(ucs), new[ucs])))
    return TransitionSummary(dict(counts))


def build_plan(old: Snapshot, new: Snapshot, reporter: Reporter = NULL_REPORTER) -> ReviewPlan:
    """
    Compare snapshots ``old`` and ``new`` and return Appendices A through D.

    :param old: snapshot of the earlier release.
    :param new: snapshot of the later release, its code points define the
        extent of the report.
    :param reporter: receives progress and statistics messages.
    """
    reporter.echo(f'Comparing version {old.version} and {new.version}')
    appendices: list[Appendix] = []
    flagged: list[FlaggedEntry] = []

    def add(letter: str, findings: list[Finding], trailer: Sequence[str] = ()) -> None:
        appendices.append(Appendix.new(letter, [f.line for f in findings], trailer))
        flagged.extend(f.flag for f in findings if f.flagged)
        reporter.echo(f'Number of code points in Appendix {letter}: {len(findings)}')

    # Appendix A, with a summary of all changes, even those from UNASSIGNED
    reporter.echo(_SCAN_MESSAGES['A'])
    findings = scan('A', old, new, reporter)
    transitions = count_transitions(old, new)
    add('A', findings, trailer=transitions.lines())
    reporter.echo(f'Count changes in derived property values: {transitions.total}')

    # Appendix B
    reporter.echo(_SCAN_MESSAGES['B'])
    add('B', scan('B', old, new, reporter))

    # Appendix C
    reporter.echo(_SCAN_MESSAGES['C'])
    nonspacing_marks = (old.count_nonspacing_marks(), new.count_nonspacing_marks())
    for snapshot, count in zip((old, new), nonspacing_marks):
        reporter.echo(f'Number of code points with General_Category Mn '
                      f'in version {snapshot.version}: {count}')
    findings = scan('C', old, new, reporter)
    reporter.echo(f'Increase in number of code points with General_Category Mn: '
                  f'{nonspacing_marks[1] - nonspacing_marks[0]}')
    add('C', findings)

    # Appendix D, and diagnostics of changed decompositions
    reporter.echo(_SCAN_MESSAGES['D'])
    changed_decompositions = 0
    for ucs in new.codepoints:
        if message := find_changed_decomposition(ucs, old.get(ucs), new[ucs]):
            reporter.echo(message)
            changed_decompositions += 1
    if not changed_decompositions:
        reporter.echo('No change in NFK')
    add('D', scan('D', old, new, reporter))

    return ReviewPlan(old_version=old.version,
                      new_version=new.version,
                      appendices=tuple(appendices),
                      transitions=transitions,
                      flagged=tuple(flagged),
                      nonspacing_marks=nonspacing_marks,
                      changed_decompositions=changed_decompositions)
