"""
Module: dues_engines.periods
Responsibility:
    Turn a tenant's lease history and current lease into month-aligned
    occupancy intervals, each carrying the rent term that applied to it.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import dues_kernel domain values and logging.

Invariants enforced:
    - Every emitted interval starts on the first day of a month.
    - Every emitted interval satisfies start <= end.
    - Intervals are emitted in discovery order: history entries in input
      order, then the active lease.  They are never sorted, because the
      month enumerator gives a month to the first interval that reaches it.
    - A lease without a recorded (or parseable) expiry runs to the
      reference date.

Failure modes:
    None.  Entries with a missing or unparseable start, and entries lying
    entirely after their end (e.g. a lease starting in the future), are
    dropped and logged at DEBUG level.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from dues_kernel.domain.tenant import TenantRecord
from dues_kernel.domain.values import LeaseTerm
from dues_kernel.logging_config import get_logger

logger = get_logger("engines.periods")


class IntervalSource(str, Enum):
    """Where a lease interval came from."""

    HISTORY = "history"
    ACTIVE = "active"


@dataclass(frozen=True)
class LeaseInterval:
    """
    One contiguous lease term.

    ``term`` is set for history entries only; the active lease is priced at
    the tenant's current term.
    """

    start: date
    end: date
    provenance: IntervalSource
    term: LeaseTerm | None = None

    def __post_init__(self) -> None:
        if self.start.day != 1:
            raise ValueError("LeaseInterval.start must be the first day of a month")
        if self.start > self.end:
            raise ValueError("LeaseInterval.start cannot be after end")


def _make_interval(
    start: date | None,
    end: date | None,
    as_of_date: date,
    provenance: IntervalSource,
    term: LeaseTerm | None,
    index: int | None = None,
) -> LeaseInterval | None:
    if start is None:
        logger.debug("lease_interval_dropped", extra={
            "provenance": provenance.value,
            "history_index": index,
            "reason": "missing_start",
        })
        return None

    normalized_start = start.replace(day=1)
    effective_end = end if end is not None else as_of_date
    if normalized_start > effective_end:
        logger.debug("lease_interval_dropped", extra={
            "provenance": provenance.value,
            "history_index": index,
            "reason": "start_after_end",
            "start": normalized_start.isoformat(),
            "end": effective_end.isoformat(),
        })
        return None

    return LeaseInterval(
        start=normalized_start,
        end=effective_end,
        provenance=provenance,
        term=term,
    )


def build_lease_intervals(
    tenant: TenantRecord,
    as_of_date: date,
) -> tuple[LeaseInterval, ...]:
    """
    Build the occupancy intervals of ``tenant`` as of ``as_of_date``.

    Args:
        tenant: Tenant whose lease history and active lease are read.
        as_of_date: Reference date; open-ended leases end here.

    Returns:
        Intervals in discovery order (history first, then active).
    """
    intervals: list[LeaseInterval] = []

    for index, entry in enumerate(tenant.lease_history):
        interval = _make_interval(
            start=entry.start,
            end=entry.end,
            as_of_date=as_of_date,
            provenance=IntervalSource.HISTORY,
            term=entry.resolve_term(tenant.current_term),
            index=index,
        )
        if interval is not None:
            intervals.append(interval)

    active = _make_interval(
        start=tenant.active_start,
        end=None,
        as_of_date=as_of_date,
        provenance=IntervalSource.ACTIVE,
        term=None,
    )
    if active is not None:
        intervals.append(active)

    logger.debug("lease_intervals_built", extra={
        "shop_no": tenant.shop_no,
        "history_entries": len(tenant.lease_history),
        "interval_count": len(intervals),
    })
    return tuple(intervals)
