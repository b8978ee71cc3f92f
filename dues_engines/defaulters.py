"""
Module: dues_engines.defaulters
Responsibility:
    Pick the shops whose outstanding dues warrant a notice, from a batch of
    dues reports.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A report is listed only when grand_total > threshold AND
      months_count >= min_months.
    - Output is sorted by grand_total descending, then shop number, so the
      order is deterministic for equal dues.

Failure modes:
    - InvalidThresholdError for a negative threshold or min_months.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from dues_engines.report import DuesReport
from dues_engines.tracer import traced_engine
from dues_kernel.domain.values import ZERO
from dues_kernel.exceptions import InvalidThresholdError
from dues_kernel.logging_config import get_logger

logger = get_logger("engines.defaulters")


@dataclass(frozen=True)
class DefaulterCriteria:
    """Thresholds a shop must exceed to be listed as a defaulter."""

    threshold: Decimal = ZERO
    min_months: int = 1

    def __post_init__(self) -> None:
        if self.threshold < ZERO:
            raise InvalidThresholdError("threshold", self.threshold)
        if self.min_months < 0:
            raise InvalidThresholdError("min_months", self.min_months)

    def matches(self, report: DuesReport) -> bool:
        return report.grand_total > self.threshold and report.months_count >= self.min_months


@dataclass(frozen=True)
class DefaulterEntry:
    """One shop listed on the defaulter scan."""

    shop_no: str
    tenant_name: str | None
    report: DuesReport

    @property
    def dues(self) -> Decimal:
        return self.report.grand_total

    @property
    def months_count(self) -> int:
        return self.report.months_count


@traced_engine("defaulters", "1.0", fingerprint_fields=("criteria",))
def scan_defaulters(
    *,
    reports: Iterable[tuple[DuesReport, str | None]],
    criteria: DefaulterCriteria,
) -> tuple[DefaulterEntry, ...]:
    """
    Filter and rank dues reports.

    Args:
        reports: (report, tenant name) pairs, one per shop.
        criteria: Listing thresholds.

    Returns:
        Defaulters, highest dues first.
    """
    entries = [
        DefaulterEntry(shop_no=report.shop_no, tenant_name=name, report=report)
        for report, name in reports
        if criteria.matches(report)
    ]
    entries.sort(key=lambda e: (-e.dues, e.shop_no))

    logger.info("defaulter_scan_completed", extra={
        "threshold": str(criteria.threshold),
        "min_months": criteria.min_months,
        "defaulter_count": len(entries),
    })
    return tuple(entries)
