"""
Module: dues_engines.report
Responsibility:
    Sum pending months into a dues report.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Totals use each month's snapshotted term, never the tenant's current
      term.
    - grand_total == base_rent_total + gst_total + penalty_total exactly;
      amounts are only quantized for display in ``to_dict``.
    - months_count == len(monthly_details).

Failure modes:
    None.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dues_engines.months import PendingMonthDue
from dues_engines.periods import IntervalSource
from dues_kernel.domain.values import ZERO

CENT = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DuesReport:
    """
    Outstanding dues of one shop as of one date.

    Contract:
        Frozen dataclass created fresh per calculation.
    Guarantees:
        - grand_total is the exact sum of the three component totals.
    """

    shop_no: str
    as_of_date: date
    base_rent_total: Decimal
    gst_total: Decimal
    penalty_total: Decimal
    grand_total: Decimal
    monthly_details: tuple[PendingMonthDue, ...]
    months_count: int
    history_months_count: int = 0

    @property
    def has_dues(self) -> bool:
        return self.months_count > 0

    @property
    def month_labels(self) -> tuple[str, ...]:
        return tuple(d.month_label for d in self.monthly_details)

    def months_text(self) -> str:
        """Comma-separated month list for notices (``Jul 2023 (prev), Jul 2024``)."""
        return ", ".join(d.notice_label for d in self.monthly_details)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form with two-decimal amount strings."""
        return {
            "shop_no": self.shop_no,
            "as_of_date": self.as_of_date.isoformat(),
            "base_rent_total": _money(self.base_rent_total),
            "gst_total": _money(self.gst_total),
            "penalty_total": _money(self.penalty_total),
            "grand_total": _money(self.grand_total),
            "months_count": self.months_count,
            "history_months_count": self.history_months_count,
            "monthly_details": [
                {
                    "month": d.month_label,
                    "label": d.display_label,
                    "source": d.provenance.value,
                    "due_date": d.due_date.isoformat(),
                    "rent_base": _money(d.term.rent_base),
                    "gst_amount": _money(d.term.gst_amount),
                    "rent_total": _money(d.term.rent_total),
                    "penalty": _money(d.penalty),
                }
                for d in self.monthly_details
            ],
        }


def aggregate_report(
    shop_no: str,
    as_of_date: date,
    pending: Sequence[PendingMonthDue],
) -> DuesReport:
    """Sum ``pending`` into a DuesReport."""
    base_total = ZERO
    gst_total = ZERO
    penalty_total = ZERO
    history_count = 0

    for due in pending:
        base_total += due.term.rent_base
        gst_total += due.term.gst_amount
        penalty_total += due.penalty
        if due.provenance is IntervalSource.HISTORY:
            history_count += 1

    return DuesReport(
        shop_no=shop_no,
        as_of_date=as_of_date,
        base_rent_total=base_total,
        gst_total=gst_total,
        penalty_total=penalty_total,
        grand_total=base_total + gst_total + penalty_total,
        monthly_details=tuple(pending),
        months_count=len(pending),
        history_months_count=history_count,
    )
