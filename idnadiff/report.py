"""
Compare two snapshots and render the review report.

This is two phases: :func:`~idnadiff.appendix.build_plan` analyses the
snapshots without modifying anything, then the flags are applied to a copy
of the new derived property values, which are compacted into Appendix F.
The report is rendered using jinja2, from ``templates/report.txt.j2``.
"""
from __future__ import annotations

# std imports
import os
from dataclasses import field, dataclass

from typing import Mapping

# 3rd party
import jinja2

# local
from .appendix import Appendix, ReviewPlan, build_plan
from .overrides import apply_overrides
from .ranges import ValueRange, compact_ranges
from .reporter import NULL_REPORTER, Reporter
from .snapshot import Snapshot

JINJA_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(os.path.join(os.path.dirname(__file__), 'templates')),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True)


@dataclass(frozen=True)
class Report:
    """All six appendices of a comparison, and the data they were made of."""
    plan: ReviewPlan
    effective: Mapping[int, str] = field(repr=False)
    ranges: tuple[ValueRange, ...] = field(repr=False)
    appendices: tuple[Appendix, ...] = field(repr=False)

    def appendix(self, letter: str) -> Appendix:
        for appendix in self.appendices:
            if appendix.letter == letter:
                return appendix
        raise KeyError(letter)

    def render(self, template_name: str = 'report.txt.j2') -> str:
        """Return text of report."""
        return JINJA_ENV.get_template(template_name).render(
            old_version=self.plan.old_version,
            new_version=self.plan.new_version,
            appendices=self.appendices)


def compare_snapshots(old: Snapshot, new: Snapshot, reporter: Reporter = NULL_REPORTER) -> Report:
    """
    Return report of changes from snapshot ``old`` to ``new``.

    :param reporter: receives progress and statistics messages.
    """
    plan = build_plan(old, new, reporter)

    overrides = apply_overrides(plan.flagged, new.derived_values())
    reporter.echo(f'Total number of entries in Appendix E (Additions to Exceptions): '
                  f'{len(overrides.lines)}')

    ranges = tuple(compact_ranges(overrides.effective))
    appendices = (
        *plan.appendices,
        Appendix.new('E', overrides.lines),
        Appendix.new('F', [str(value_range) for value_range in ranges], version=new.version),
    )
    return Report(plan=plan, effective=overrides.effective, ranges=ranges, appendices=appendices)
