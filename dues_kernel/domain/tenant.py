"""
Module: dues_kernel.domain.tenant
Responsibility:
    Read-only view of a shop tenant (applicant) record as consumed by the
    dues engines, built from the raw mapping stored by the surrounding
    application.

Architecture position:
    Kernel > Domain -- pure, zero I/O.

Invariants enforced:
    - Field-name aliases are resolved through one ordered fallback chain per
      logical field (``FIELD_ALIASES``).  Tenant data was migrated across
      several schemas and any alias may carry the value.
    - ``payment_day`` is always within 1..31 (defaults to 1).
    - Malformed dates and amounts degrade to ``None``/zero; construction
      from a mapping never raises for bad data.

Failure modes:
    None for data.  A history collection that is not a list is ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from dues_kernel.domain.values import ZERO, LeaseTerm
from dues_kernel.logging_config import get_logger
from dues_kernel.utils.parsing import (
    first_amount,
    first_present,
    parse_date,
    parse_int,
)

logger = get_logger("domain.tenant")

# Ordered fallback chains; the first alias holding a value wins.
# Rent figures skip zero amounts (see ``lookup_amount``).
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "shop_no": ("shopNo", "shop_no"),
    "name": ("applicantName", "name"),
    "payment_day": ("paymentDay", "payment_day"),
    "rent_base": ("rentBase", "baseRent", "rentAmount"),
    "gst_amount": ("gstAmount", "gst"),
    "rent_total": ("rentTotal", "rent", "totalRent"),
    "active_start": ("rentStartDate", "leaseDate"),
    "lease_history": ("leaseHistory", "rentHistory", "previousLeases"),
    "history_start": ("leaseDate", "rentStartDate", "startDate"),
    "history_end": ("expiryDate", "leaseEndDate", "endDate"),
}

DEFAULT_PAYMENT_DAY = 1
MAX_DUE_DAY = 28


def lookup(data: Mapping[str, Any], field_name: str) -> Any:
    """Resolve a logical field through its alias chain."""
    return first_present(data, FIELD_ALIASES[field_name])


def lookup_amount(data: Mapping[str, Any], field_name: str) -> Decimal | None:
    """Resolve a rent figure; zero or unparseable aliases fall through."""
    return first_amount(data, FIELD_ALIASES[field_name])


def normalize_payment_day(value: Any) -> int:
    """Payment day in 1..31; missing or invalid values become 1."""
    day = parse_int(value)
    if day is None or not 1 <= day <= 31:
        return DEFAULT_PAYMENT_DAY
    return day


@dataclass(frozen=True)
class LeaseHistoryEntry:
    """
    One historical lease of a shop.

    Rent figures are optional per field; a missing or zero figure means "same
    as the tenant's current term" and is resolved by ``resolve_term``.
    """

    start: date | None
    end: date | None = None
    rent_base: Decimal | None = None
    gst_amount: Decimal | None = None
    rent_total: Decimal | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LeaseHistoryEntry:
        return cls(
            start=parse_date(lookup(data, "history_start")),
            end=parse_date(lookup(data, "history_end")),
            rent_base=lookup_amount(data, "rent_base"),
            gst_amount=lookup_amount(data, "gst_amount"),
            rent_total=lookup_amount(data, "rent_total"),
        )

    def resolve_term(self, current: LeaseTerm) -> LeaseTerm:
        """Term of this entry; missing or zero figures come from ``current``."""
        return LeaseTerm(
            rent_base=self.rent_base or current.rent_base,
            gst_amount=self.gst_amount or current.gst_amount,
            rent_total=self.rent_total or current.rent_total,
        )


@dataclass(frozen=True)
class TenantRecord:
    """
    Tenant of one shop.

    Contract:
        Frozen dataclass owned by the caller; the engines only read it.
    Guarantees:
        - ``payment_day`` in 1..31; ``due_day`` in 1..28.
        - ``lease_history`` preserves input order.
    """

    shop_no: str
    payment_day: int = DEFAULT_PAYMENT_DAY
    current_term: LeaseTerm = field(default_factory=LeaseTerm)
    active_start: date | None = None
    lease_history: tuple[LeaseHistoryEntry, ...] = ()
    name: str | None = None

    @property
    def due_day(self) -> int:
        """Day of month rent falls due, clamped to 28 for short months."""
        return min(self.payment_day, MAX_DUE_DAY)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TenantRecord:
        """Build a tenant record from a raw applicant mapping."""
        shop_no = lookup(data, "shop_no")
        current_term = LeaseTerm(
            rent_base=lookup_amount(data, "rent_base") or ZERO,
            gst_amount=lookup_amount(data, "gst_amount") or ZERO,
            rent_total=lookup_amount(data, "rent_total") or ZERO,
        )

        raw_history = lookup(data, "lease_history")
        history: list[LeaseHistoryEntry] = []
        if isinstance(raw_history, (list, tuple)):
            for raw_entry in raw_history:
                if isinstance(raw_entry, Mapping):
                    history.append(LeaseHistoryEntry.from_mapping(raw_entry))
        elif raw_history is not None:
            logger.debug("lease_history_ignored", extra={
                "shop_no": str(shop_no),
                "history_type": type(raw_history).__name__,
            })

        name = lookup(data, "name")
        return cls(
            shop_no="" if shop_no is None else str(shop_no).strip(),
            payment_day=normalize_payment_day(lookup(data, "payment_day")),
            current_term=current_term,
            active_start=parse_date(lookup(data, "active_start")),
            lease_history=tuple(history),
            name=None if name is None else str(name),
        )


def coerce_tenant(tenant: TenantRecord | Mapping[str, Any]) -> TenantRecord:
    """Accept either a ``TenantRecord`` or a raw applicant mapping."""
    if isinstance(tenant, TenantRecord):
        return tenant
    return TenantRecord.from_mapping(tenant)
