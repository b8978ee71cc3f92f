"""
Module: dues_engines.months
Responsibility:
    Walk lease intervals month by month and produce one pending-month record
    per calendar month that is occupied and not yet paid.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import dues_kernel domain values and sibling engine modules.

Invariants enforced:
    - At most one PendingMonthDue per calendar month across all intervals,
      regardless of how the intervals overlap.
    - The first interval (in discovery order) to reach a month wins it and
      fixes its term; later intervals skip it.
    - Months whose label is in the paid-month set are never emitted.
    - Months not yet past their due date are emitted with zero penalty.
    - The walk ends at December of the last representable year, so an
      expiry of 9999-12-31 terminates normally.

Failure modes:
    None.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_engines.penalty import PenaltyPolicy, evaluate_penalty
from dues_engines.periods import IntervalSource, LeaseInterval
from dues_kernel.domain.ledger import PaidMonthSet
from dues_kernel.domain.tenant import TenantRecord
from dues_kernel.domain.values import LeaseTerm, MonthKey
from dues_kernel.logging_config import get_logger

logger = get_logger("engines.months")


@dataclass(frozen=True)
class PendingMonthDue:
    """
    One unpaid month.

    Contract:
        Frozen dataclass; ``term`` is the snapshot taken when the month was
        first reached, so renewals are priced per month.
    """

    month: MonthKey
    term: LeaseTerm
    penalty: Decimal
    due_date: date
    provenance: IntervalSource

    @property
    def month_label(self) -> str:
        return self.month.label

    @property
    def display_label(self) -> str:
        return self.month.display_label

    @property
    def notice_label(self) -> str:
        """Label printed on notices; months of earlier leases are marked."""
        if self.provenance is IntervalSource.HISTORY:
            return f"{self.display_label} (prev)"
        return self.display_label

    @property
    def amount_due(self) -> Decimal:
        """Base rent + GST + penalty for this month."""
        return self.term.rent_base + self.term.gst_amount + self.penalty


def _months_in(interval: LeaseInterval) -> Iterator[MonthKey]:
    """Calendar months from ``interval.start`` through ``interval.end``."""
    cursor = MonthKey.of(interval.start)
    while cursor.first_day <= interval.end:
        yield cursor
        if cursor.year == date.max.year and cursor.month == 12:
            # open-ended sentinel expiries such as 9999-12-31
            logger.debug("month_walk_reached_calendar_end", extra={
                "provenance": interval.provenance.value,
                "interval_end": interval.end.isoformat(),
            })
            return
        cursor = cursor.next()


def enumerate_pending_months(
    intervals: Sequence[LeaseInterval],
    paid_months: PaidMonthSet,
    tenant: TenantRecord,
    as_of_date: date,
    penalty_policy: PenaltyPolicy,
) -> tuple[PendingMonthDue, ...]:
    """
    Collect the unpaid months covered by ``intervals``.

    Args:
        intervals: Output of ``build_lease_intervals``, in discovery order.
        paid_months: ``YYYY-MM`` labels already settled in the ledger.
        tenant: Supplies the payment day and the current term.
        as_of_date: Reference date for penalties.
        penalty_policy: Daily rate and policy implementation date.

    Returns:
        Pending months in emission order.
    """
    seen: set[str] = set()
    pending: list[PendingMonthDue] = []
    skipped_paid = 0

    for interval in intervals:
        term = interval.term if interval.term is not None else tenant.current_term

        for cursor in _months_in(interval):
            label = cursor.label
            if label in seen:
                continue
            if label in paid_months:
                skipped_paid += 1
                continue

            seen.add(label)
            assessment = evaluate_penalty(
                month=cursor,
                payment_day=tenant.payment_day,
                as_of_date=as_of_date,
                policy=penalty_policy,
            )
            pending.append(PendingMonthDue(
                month=cursor,
                term=term,
                penalty=assessment.penalty,
                due_date=assessment.due_date,
                provenance=interval.provenance,
            ))

    logger.debug("pending_months_enumerated", extra={
        "shop_no": tenant.shop_no,
        "interval_count": len(intervals),
        "pending_count": len(pending),
        "paid_skipped": skipped_paid,
    })
    return tuple(pending)
