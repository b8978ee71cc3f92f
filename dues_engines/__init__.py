"""
Module: dues_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure dues
    calculation modules.  This is the canonical import surface for
    dues_services and scripts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import dues_kernel (domain, logging, exceptions) and sibling
    engine modules.  MUST NOT import dues_services or dues_config.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      The reference date is always an explicit parameter.
    - Decimal-only arithmetic: all monetary amounts use ``Decimal``.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from dues_engines import DuesCalculator, PenaltyPolicy
    from dues_engines.periods import build_lease_intervals
    from dues_engines.defaulters import DefaulterCriteria, scan_defaulters
"""

from dues_kernel.logging_config import get_logger

logger = get_logger("engines")

from dues_engines.defaulters import (
    DefaulterCriteria,
    DefaulterEntry,
    scan_defaulters,
)
from dues_engines.dues import (
    DuesCalculator,
    calculate_dues,
    is_current_month_overdue,
)
from dues_engines.months import PendingMonthDue, enumerate_pending_months
from dues_engines.penalty import (
    PenaltyAssessment,
    PenaltyPolicy,
    due_date_for,
    evaluate_penalty,
)
from dues_engines.periods import IntervalSource, LeaseInterval, build_lease_intervals
from dues_engines.report import DuesReport, aggregate_report

__all__ = [
    # Period builder
    "IntervalSource",
    "LeaseInterval",
    "build_lease_intervals",
    # Month enumerator
    "PendingMonthDue",
    "enumerate_pending_months",
    # Penalty evaluator
    "PenaltyAssessment",
    "PenaltyPolicy",
    "due_date_for",
    "evaluate_penalty",
    # Report aggregator
    "DuesReport",
    "aggregate_report",
    # Calculator
    "DuesCalculator",
    "calculate_dues",
    "is_current_month_overdue",
    # Defaulters
    "DefaulterCriteria",
    "DefaulterEntry",
    "scan_defaulters",
]
