"""
Module: dues_engines.penalty
Responsibility:
    Decide the due date of a rent month and the late-payment penalty owed on
    it as of a reference date.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import dues_kernel domain values and logging.

Invariants enforced:
    - Purity: no clock access; the reference date is a parameter.
    - Decimal-only arithmetic; the penalty is never negative.
    - Due day is clamped to 28 so every month has a due date.
    - Policy cutover: when a month fell due before the late-fee policy was
      implemented, the penalty clock starts on the implementation date and
      never accrues retroactively from the original due date.

Failure modes:
    - InvalidPenaltyRateError when a PenaltyPolicy is built with a negative
      daily rate.  Evaluation itself never raises.

Usage:
    from dues_engines.penalty import PenaltyPolicy, evaluate_penalty

    policy = PenaltyPolicy(
        daily_rate=Decimal("15"),
        implementation_date=date(2023, 3, 1),
    )
    assessment = evaluate_penalty(
        month=MonthKey(2025, 11),
        payment_day=5,
        as_of_date=date(2025, 12, 23),
        policy=policy,
    )
    assessment.penalty  # Decimal("720"): 48 days * 15
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_kernel.domain.tenant import MAX_DUE_DAY
from dues_kernel.domain.values import ZERO, MonthKey
from dues_kernel.exceptions import InvalidPenaltyRateError
from dues_kernel.logging_config import get_logger

logger = get_logger("engines.penalty")


@dataclass(frozen=True)
class PenaltyPolicy:
    """
    Late-fee regime.

    Contract:
        Frozen dataclass supplied by configuration.
    Guarantees:
        - daily_rate >= 0.
    Non-goals:
        - Does not carry a default rate; the configuration layer owns the
          documented default of 15 per day.
    """

    daily_rate: Decimal
    implementation_date: date | None = None

    def __post_init__(self) -> None:
        if self.daily_rate < ZERO:
            raise InvalidPenaltyRateError(self.daily_rate)


@dataclass(frozen=True)
class PenaltyAssessment:
    """Penalty owed on one month and the dates it was derived from."""

    due_date: date
    start_counting: date | None
    days_late: int
    penalty: Decimal

    @property
    def is_late(self) -> bool:
        return self.days_late > 0


def due_date_for(month: MonthKey, payment_day: int) -> date:
    """Due date of ``month`` for a tenant paying on ``payment_day``."""
    return month.day(min(max(payment_day, 1), MAX_DUE_DAY))


def evaluate_penalty(
    month: MonthKey,
    payment_day: int,
    as_of_date: date,
    policy: PenaltyPolicy,
) -> PenaltyAssessment:
    """
    Penalty owed on ``month`` as of ``as_of_date``.

    Postconditions:
        - penalty == 0 when as_of_date <= due date.
        - Otherwise counting starts at max(due date, implementation date)
          and penalty == whole days elapsed since then * daily_rate, or 0
          when as_of_date is not after the start of counting.
    """
    due_date = due_date_for(month, payment_day)

    if as_of_date <= due_date:
        return PenaltyAssessment(
            due_date=due_date, start_counting=None, days_late=0, penalty=ZERO,
        )

    start_counting = due_date
    if policy.implementation_date is not None and policy.implementation_date > due_date:
        start_counting = policy.implementation_date

    if as_of_date <= start_counting:
        return PenaltyAssessment(
            due_date=due_date, start_counting=start_counting, days_late=0, penalty=ZERO,
        )

    # Calendar dates differ by whole days, so no rounding up is needed here.
    days_late = (as_of_date - start_counting).days
    penalty = policy.daily_rate * days_late

    logger.debug("penalty_evaluated", extra={
        "month": month.label,
        "due_date": due_date.isoformat(),
        "start_counting": start_counting.isoformat(),
        "days_late": days_late,
        "penalty": str(penalty),
    })

    return PenaltyAssessment(
        due_date=due_date,
        start_counting=start_counting,
        days_late=days_late,
        penalty=penalty,
    )
