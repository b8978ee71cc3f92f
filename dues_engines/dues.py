"""
Module: dues_engines.dues
Responsibility:
    Outstanding dues calculation for one shop: compose the period builder,
    month enumerator, penalty evaluator and report aggregator.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Receives the paid-month set already extracted from the ledger; the
    service layer owns the ledger lookup and the clock.

Invariants enforced:
    - Purity and determinism: identical inputs give equal reports.
    - Degrade, don't fail: malformed tenant data contributes nothing and
      the calculator always returns a (possibly empty) report.
    - No double counting: one entry per distinct unpaid occupied month.

Failure modes:
    None for data.  Programming errors (e.g. a non-date as_of_date)
    propagate.

Audit relevance:
    Every ``DuesCalculator.calculate`` call is traced via ``@traced_engine``
    with a fingerprint of tenant, paid months, reference date and policy.

Usage:
    from dues_engines.dues import DuesCalculator
    from dues_engines.penalty import PenaltyPolicy

    report = DuesCalculator().calculate(
        tenant=TenantRecord.from_mapping(applicant),
        paid_months=frozenset({"2024-07", "2024-08"}),
        as_of_date=date(2025, 12, 23),
        policy=PenaltyPolicy(Decimal("15"), date(2023, 3, 1)),
    )
    report.grand_total
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from dues_engines.months import enumerate_pending_months
from dues_engines.penalty import PenaltyPolicy
from dues_engines.periods import build_lease_intervals
from dues_engines.report import DuesReport, aggregate_report
from dues_engines.tracer import traced_engine
from dues_kernel.domain.tenant import TenantRecord, coerce_tenant
from dues_kernel.domain.values import MonthKey
from dues_kernel.logging_config import get_logger

logger = get_logger("engines.dues")


class DuesCalculator:
    """
    Calculate outstanding rent dues.

    Contract:
        Pure functions -- no I/O, no database access, no clock.
        All dates and data passed as parameters.
    Guarantees:
        - ``calculate`` returns a report whose grand total is the exact sum
          of base rent, GST and penalty totals.
    Non-goals:
        - Does not fetch payments or persist reports.
    """

    @traced_engine(
        "dues", "1.0",
        fingerprint_fields=("tenant", "paid_months", "as_of_date", "policy"),
    )
    def calculate(
        self,
        *,
        tenant: TenantRecord | Mapping[str, Any],
        paid_months: Iterable[str],
        as_of_date: date,
        policy: PenaltyPolicy,
    ) -> DuesReport:
        """
        Outstanding dues of ``tenant`` as of ``as_of_date``.

        Args:
            tenant: Tenant record or raw applicant mapping.
            paid_months: ``YYYY-MM`` labels already settled.
            as_of_date: Reference ("today") date.
            policy: Daily penalty rate and policy implementation date.

        Returns:
            DuesReport with one detail row per pending month.
        """
        t0 = time.monotonic()
        record = coerce_tenant(tenant)
        paid = frozenset(str(label) for label in paid_months)

        logger.info("dues_calculation_started", extra={
            "shop_no": record.shop_no,
            "as_of_date": as_of_date.isoformat(),
            "paid_month_count": len(paid),
            "history_entries": len(record.lease_history),
        })

        intervals = build_lease_intervals(record, as_of_date)
        pending = enumerate_pending_months(
            intervals=intervals,
            paid_months=paid,
            tenant=record,
            as_of_date=as_of_date,
            penalty_policy=policy,
        )
        report = aggregate_report(record.shop_no, as_of_date, pending)

        duration_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.info("dues_calculation_completed", extra={
            "shop_no": record.shop_no,
            "months_count": report.months_count,
            "grand_total": str(report.grand_total),
            "duration_ms": duration_ms,
        })
        return report


def calculate_dues(
    tenant: TenantRecord | Mapping[str, Any],
    paid_months: Iterable[str],
    as_of_date: date,
    policy: PenaltyPolicy,
) -> DuesReport:
    """Convenience wrapper around ``DuesCalculator().calculate``."""
    return DuesCalculator().calculate(
        tenant=tenant,
        paid_months=paid_months,
        as_of_date=as_of_date,
        policy=policy,
    )


def is_current_month_overdue(
    tenant: TenantRecord | Mapping[str, Any],
    paid_months: Iterable[str],
    as_of_date: date,
) -> bool:
    """
    True when the month of ``as_of_date`` is unpaid and its payment day has
    passed (late-payment warning condition).
    """
    record = coerce_tenant(tenant)
    if MonthKey.of(as_of_date).label in frozenset(paid_months):
        return False
    return as_of_date.day > record.payment_day
