"""
dues_services.outstanding_dues -- Outstanding dues orchestration.

Responsibility:
    Wire the injectable payment ledger, the clock and the dues policy into
    the pure dues engines: look up a shop's payments, reduce them to the set
    of paid month labels, and run the calculator.

Architecture position:
    Services -- orchestration over engines + kernel.
    The only layer that talks to a PaymentLedger or asks a Clock for today.

Invariants enforced:
    - The ledger is consulted once per shop per calculation; only the
      ``paymentForMonth`` label of each record is used.
    - A reference date passed by the caller always wins over the clock.

Failure modes:
    - Exceptions raised by the ledger implementation propagate unchanged.
    - UnsupportedLedgerEntryError for ledger records of an unknown kind.

Usage:
    service = OutstandingDuesService(
        ledger=PaymentSelector(session),
        config=get_active_policy(),
    )
    report = service.calculate_outstanding_dues(applicant)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from dues_config import get_active_policy
from dues_config.bridges import build_defaulter_criteria, build_penalty_policy
from dues_config.schema import DuesPolicyConfig
from dues_engines.defaulters import DefaulterEntry, scan_defaulters
from dues_engines.dues import DuesCalculator, is_current_month_overdue
from dues_engines.report import DuesReport
from dues_kernel.domain.clock import Clock, SystemClock
from dues_kernel.domain.ledger import PaidMonthSet, PaymentLedger, paid_month_set
from dues_kernel.domain.tenant import TenantRecord, coerce_tenant
from dues_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.outstanding_dues")


class OutstandingDuesService:
    """
    Outstanding dues for shops backed by a payment ledger.

    Contract:
        Stateless apart from its injected collaborators; safe to share across
        calls as long as the ledger is.
    """

    def __init__(
        self,
        ledger: PaymentLedger,
        config: DuesPolicyConfig | None = None,
        clock: Clock | None = None,
        calculator: DuesCalculator | None = None,
    ):
        self._ledger = ledger
        self._config = config if config is not None else get_active_policy()
        self._clock = clock or SystemClock()
        self._calculator = calculator or DuesCalculator()
        self._policy = build_penalty_policy(self._config)

    @property
    def config(self) -> DuesPolicyConfig:
        return self._config

    def _reference_date(self, reference_date: date | None) -> date:
        return reference_date if reference_date is not None else self._clock.today()

    def paid_months_for(self, shop_no: str) -> PaidMonthSet:
        """Month labels settled for ``shop_no`` according to the ledger."""
        return paid_month_set(self._ledger.get_shop_payments(shop_no))

    def calculate_outstanding_dues(
        self,
        tenant: TenantRecord | Mapping[str, Any],
        reference_date: date | None = None,
    ) -> DuesReport:
        """
        Outstanding dues of one tenant.

        Args:
            tenant: Tenant record or raw applicant mapping.
            reference_date: Calculation date; defaults to the clock's today.
        """
        record = coerce_tenant(tenant)
        as_of = self._reference_date(reference_date)

        with LogContext.bind(shop_no=record.shop_no, as_of_date=as_of.isoformat()):
            paid = self.paid_months_for(record.shop_no)
            report = self._calculator.calculate(
                tenant=record,
                paid_months=paid,
                as_of_date=as_of,
                policy=self._policy,
            )
        return report

    def find_defaulters(
        self,
        tenants: Iterable[TenantRecord | Mapping[str, Any]],
        reference_date: date | None = None,
        scan: str = "notice",
    ) -> tuple[DefaulterEntry, ...]:
        """
        Shops whose dues exceed the thresholds of the named scan.

        Raises:
            KeyError: if ``scan`` is not configured.
        """
        criteria = build_defaulter_criteria(self._config, scan)
        as_of = self._reference_date(reference_date)

        reports: list[tuple[DuesReport, str | None]] = []
        for tenant in tenants:
            record = coerce_tenant(tenant)
            reports.append((self.calculate_outstanding_dues(record, as_of), record.name))

        logger.info("defaulter_scan_requested", extra={
            "scan": scan,
            "as_of_date": as_of.isoformat(),
            "tenant_count": len(reports),
        })
        return scan_defaulters(reports=reports, criteria=criteria)

    def is_overdue_this_month(
        self,
        tenant: TenantRecord | Mapping[str, Any],
        reference_date: date | None = None,
    ) -> bool:
        """True when the current month is unpaid and past the payment day."""
        record = coerce_tenant(tenant)
        as_of = self._reference_date(reference_date)
        return is_current_month_overdue(record, self.paid_months_for(record.shop_no), as_of)
