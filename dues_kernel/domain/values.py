"""
Module: dues_kernel.domain.values
Responsibility:
    Immutable value objects shared by the dues engines: the rent terms of a
    lease (``LeaseTerm``) and a calendar month (``MonthKey``).

Architecture position:
    Kernel > Domain -- pure, zero I/O.

Invariants enforced:
    - Decimal-only monetary figures.
    - ``MonthKey`` always denotes a real calendar month (1..12).
    - ``MonthKey.label`` is the ``YYYY-MM`` form used by the payment ledger;
      ``display_label`` uses fixed English abbreviations and is never
      localized.

Failure modes:
    - InvalidMonthLabelError from ``MonthKey.parse`` for labels that are not
      ``YYYY-MM``.
    - ValueError from ``MonthKey(...)`` for a month outside 1..12.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_kernel.exceptions import InvalidMonthLabelError

ZERO = Decimal("0")

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_LABEL_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class LeaseTerm:
    """
    Rent figures of one lease.

    Contract:
        Frozen dataclass; GST is carried from input as an amount and never
        re-derived from a rate.
    Non-goals:
        - Does not check that ``rent_total == rent_base + gst_amount``;
          legacy records disagree and the figures are reported as stored.
    """

    rent_base: Decimal = ZERO
    gst_amount: Decimal = ZERO
    rent_total: Decimal = ZERO

    @property
    def base_plus_gst(self) -> Decimal:
        """Base rent plus GST, the amount billed for one month."""
        return self.rent_base + self.gst_amount


@dataclass(frozen=True, order=True)
class MonthKey:
    """A calendar month, ordered chronologically."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def of(cls, day: date) -> MonthKey:
        """Month containing ``day``."""
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, label: str) -> MonthKey:
        """
        Parse a ``YYYY-MM`` ledger label.

        Raises:
            InvalidMonthLabelError: if the label is not a valid month.
        """
        match = _LABEL_PATTERN.match(str(label).strip())
        if match is None:
            raise InvalidMonthLabelError(str(label))
        month = int(match.group(2))
        if not 1 <= month <= 12:
            raise InvalidMonthLabelError(str(label))
        return cls(int(match.group(1)), month)

    @property
    def label(self) -> str:
        """Ledger label, e.g. ``2024-07``."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def display_label(self) -> str:
        """Notice label, e.g. ``Jul 2024``."""
        return f"{_MONTH_ABBREVIATIONS[self.month - 1]} {self.year}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def day(self, day_of_month: int) -> date:
        """Date in this month; the caller keeps ``day_of_month`` valid."""
        return date(self.year, self.month, day_of_month)

    def next(self) -> MonthKey:
        """The following calendar month."""
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def __str__(self) -> str:
        return self.label
