"""
Module: dues_kernel.domain.ledger
Responsibility:
    Shapes of payment-ledger entries and the lookup protocol the dues
    calculator uses to find which months of a shop are already settled.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Concrete ledgers (in-memory, SQL)
    implement ``PaymentLedger``; the engines only see the resulting
    ``PaidMonthSet``.

Invariants enforced:
    - Ledger entries form a closed set of shapes tagged by
      ``LedgerEntryKind``.  Today there is exactly one: ``MonthlyPayment``,
      a payment that settles one whole calendar month.  Split or multi-month
      payments need a new explicit variant, not optional fields.
    - A month is either fully paid or fully pending; amounts are never
      compared when deciding whether a month is settled.

Failure modes:
    - UnsupportedLedgerEntryError when a raw record declares an unknown
      ``kind``.
    - Records without a usable month label are skipped (logged WARNING).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, TypeAlias

from dues_kernel.domain.values import ZERO, MonthKey
from dues_kernel.exceptions import InvalidMonthLabelError, UnsupportedLedgerEntryError
from dues_kernel.logging_config import get_logger
from dues_kernel.utils.parsing import (
    first_present,
    is_blank,
    parse_date,
    parse_decimal,
    shop_numbers_match,
)

logger = get_logger("domain.ledger")

PaidMonthSet: TypeAlias = frozenset[str]

_RECORD_ALIASES: dict[str, tuple[str, ...]] = {
    "shop_no": ("shopNo", "shop_no"),
    "month": ("paymentForMonth", "payment_for_month"),
    "payment_date": ("paymentDate", "payment_date"),
    "amount_base": ("amountBase", "amount_base", "rentBase"),
    "amount_gst": ("amountGst", "amount_gst", "gstAmount"),
    "amount_penalty": ("penalty", "amount_penalty"),
    "receipt_id": ("receiptId", "receipt_id"),
}


class LedgerEntryKind(str, Enum):
    """Closed enumeration of ledger entry shapes."""

    MONTHLY = "monthly"  # One payment settles one calendar month


@dataclass(frozen=True)
class MonthlyPayment:
    """A ledger entry settling exactly one calendar month of rent."""

    shop_no: str
    month: MonthKey
    payment_date: date | None = None
    amount_base: Decimal = ZERO
    amount_gst: Decimal = ZERO
    amount_penalty: Decimal = ZERO
    receipt_id: str | None = None

    kind = LedgerEntryKind.MONTHLY

    @property
    def month_label(self) -> str:
        return self.month.label


# Union of every ledger entry shape.  Add new variants here explicitly.
LedgerEntry: TypeAlias = MonthlyPayment


class PaymentLedger(Protocol):
    """Lookup of every ledger record for one shop."""

    def get_shop_payments(self, shop_no: str) -> Sequence[LedgerEntry | Mapping[str, Any]]:
        ...


def _month_from_record(record: Mapping[str, Any]) -> MonthKey | None:
    label = first_present(record, _RECORD_ALIASES["month"])
    if label is not None:
        try:
            return MonthKey.parse(str(label))
        except InvalidMonthLabelError:
            return None

    # Older records only carry the payment date; the month paid for is the
    # month the payment was made in.
    paid_on = first_present(record, _RECORD_ALIASES["payment_date"])
    if isinstance(paid_on, str) and len(paid_on.strip()) >= 7:
        try:
            return MonthKey.parse(paid_on.strip()[:7])
        except InvalidMonthLabelError:
            return None
    paid_on_date = parse_date(paid_on)
    return MonthKey.of(paid_on_date) if paid_on_date else None


def parse_ledger_entry(record: LedgerEntry | Mapping[str, Any]) -> LedgerEntry | None:
    """
    Interpret one raw ledger record.

    Returns:
        The typed entry, or None if the record names no usable month.
    Raises:
        UnsupportedLedgerEntryError: if the record declares an unknown kind.
    """
    if isinstance(record, MonthlyPayment):
        return record

    shop_no = first_present(record, _RECORD_ALIASES["shop_no"])
    kind = record.get("kind")
    if not is_blank(kind) and kind != LedgerEntryKind.MONTHLY.value:
        raise UnsupportedLedgerEntryError(str(kind), None if shop_no is None else str(shop_no))

    month = _month_from_record(record)
    if month is None:
        logger.warning("ledger_record_skipped", extra={
            "shop_no": None if shop_no is None else str(shop_no),
            "reason": "no_month_label",
        })
        return None

    receipt_id = first_present(record, _RECORD_ALIASES["receipt_id"])
    return MonthlyPayment(
        shop_no="" if shop_no is None else str(shop_no).strip(),
        month=month,
        payment_date=parse_date(first_present(record, _RECORD_ALIASES["payment_date"])),
        amount_base=parse_decimal(first_present(record, _RECORD_ALIASES["amount_base"])) or ZERO,
        amount_gst=parse_decimal(first_present(record, _RECORD_ALIASES["amount_gst"])) or ZERO,
        amount_penalty=parse_decimal(first_present(record, _RECORD_ALIASES["amount_penalty"])) or ZERO,
        receipt_id=None if receipt_id is None else str(receipt_id),
    )


def paid_month_set(records: Iterable[LedgerEntry | Mapping[str, Any]]) -> PaidMonthSet:
    """Month labels settled by ``records``."""
    labels: set[str] = set()
    for record in records:
        entry = parse_ledger_entry(record)
        if entry is None:
            continue
        if entry.kind is LedgerEntryKind.MONTHLY:
            labels.add(entry.month_label)
    return frozenset(labels)


class InMemoryPaymentLedger:
    """
    Payment ledger backed by a list of raw records.

    Used by tests, the notice demo script and callers that already hold the
    payment cache in memory.  Shop numbers are matched leniently
    (``"04"`` matches ``"4"``).
    """

    def __init__(self, records: Iterable[LedgerEntry | Mapping[str, Any]] = ()):
        self._records: list[LedgerEntry | Mapping[str, Any]] = list(records)

    def add(self, record: LedgerEntry | Mapping[str, Any]) -> None:
        self._records.append(record)

    def get_shop_payments(self, shop_no: str) -> Sequence[LedgerEntry | Mapping[str, Any]]:
        return [r for r in self._records if shop_numbers_match(_record_shop(r), shop_no)]


def _record_shop(record: LedgerEntry | Mapping[str, Any]) -> Any:
    if isinstance(record, MonthlyPayment):
        return record.shop_no
    return first_present(record, _RECORD_ALIASES["shop_no"])
