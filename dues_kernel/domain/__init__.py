"""
Pure domain layer.

This module contains immutable value objects and record views with NO
dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock (except the Clock abstraction itself)
- I/O
"""

from dues_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from dues_kernel.domain.ledger import (
    InMemoryPaymentLedger,
    LedgerEntry,
    LedgerEntryKind,
    MonthlyPayment,
    PaidMonthSet,
    PaymentLedger,
    paid_month_set,
    parse_ledger_entry,
)
from dues_kernel.domain.tenant import (
    FIELD_ALIASES,
    LeaseHistoryEntry,
    TenantRecord,
    coerce_tenant,
)
from dues_kernel.domain.values import ZERO, LeaseTerm, MonthKey

__all__ = [
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Values
    "ZERO",
    "LeaseTerm",
    "MonthKey",
    # Tenant
    "FIELD_ALIASES",
    "LeaseHistoryEntry",
    "TenantRecord",
    "coerce_tenant",
    # Ledger
    "InMemoryPaymentLedger",
    "LedgerEntry",
    "LedgerEntryKind",
    "MonthlyPayment",
    "PaidMonthSet",
    "PaymentLedger",
    "paid_month_set",
    "parse_ledger_entry",
]
