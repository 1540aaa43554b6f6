"""
idnadiff module.

Compare IDNA derived property values of two Unicode versions, and report code
points to be reviewed.
"""
# re-export the public API from top-level module path, to allow for
# 'from idnadiff import compare_snapshots'.

# local
from .appendix import Appendix, ReviewPlan, TransitionSummary, build_plan
from .classify import (
    Finding,
    FlaggedEntry,
    derived_transition,
    find_derived_change,
    find_category_change,
    find_new_nonspacing_mark,
    find_new_decomposition,
    find_changed_decomposition)
from .exceptions import IdnaDiffError, MissingDataset, MalformedRecord, InvalidVersionLabel
from .loader import load_snapshot
from .overrides import OverrideResult, apply_overrides
from .ranges import ValueRange, compact_ranges, expand_ranges
from .report import Report, compare_snapshots
from .reporter import Reporter
from .snapshot import (
    PVALID,
    UNASSIGNED,
    UNDER_REVIEW,
    NONSPACING_MARK,
    Record,
    Snapshot,
    format_ucs)
from .versions import UnicodeVersion, parse_version_pair

__all__ = ('compare_snapshots', 'build_plan', 'apply_overrides', 'compact_ranges',
           'load_snapshot', 'Snapshot', 'Record', 'Reporter')
__version__ = '0.1.0'
