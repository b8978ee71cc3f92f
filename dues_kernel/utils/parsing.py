"""
Module: dues_kernel.utils.parsing
Responsibility:
    Lenient coercion of raw tenant and ledger values (strings from forms,
    numbers from JSON, dates from the database driver) into ``date``,
    ``Decimal`` and ``int``.

Architecture position:
    Kernel > Utils.  No imports from domain/, engines or services.

Invariants enforced:
    - Never raises for malformed data: every helper returns ``None`` when the
      value cannot be interpreted, and the caller decides the fallback.
    - Decimal-only output for monetary figures; floats are converted through
      ``str`` so that ``0.1`` stays ``Decimal("0.1")``.
    - Non-finite decimals (NaN, Infinity) are treated as malformed.

Failure modes:
    None.  Rejected values are logged at DEBUG level under
    ``dues_kernel.utils.parsing``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dues_kernel.logging_config import get_logger

logger = get_logger("utils.parsing")

# currency marks, thousands separators and whitespace
_AMOUNT_NOISE = re.compile(r"[\s,₹$€£]|\b(?:Rs|INR)\b\.?", re.IGNORECASE)
_PLAIN_AMOUNT = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_MONTH_ONLY = re.compile(r"^(\d{4})-(\d{2})$")


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def first_present(data: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """
    Return the value of the first alias present in ``data``.

    Aliases are tried in order; a key counts as present when its value is
    not None and not a blank string.  Returns None if no alias matches.
    """
    for key in aliases:
        value = data.get(key)
        if not is_blank(value):
            return value
    return None


def first_amount(data: Mapping[str, Any], aliases: Sequence[str]) -> Decimal | None:
    """
    Return the first alias in ``data`` holding a non-zero amount.

    Zero and unparseable amounts count as missing and fall through to the
    next alias, so legacy records that stored ``0`` for an unknown figure
    resolve to the next recorded value.  Returns None if no alias matches.
    """
    for key in aliases:
        amount = parse_decimal(data.get(key))
        if amount is not None and amount != 0:
            return amount
    return None


def parse_date(value: Any) -> date | None:
    """
    Interpret ``value`` as a calendar date.

    Accepts ``date``/``datetime`` objects, ISO dates (``2024-07-01``), ISO
    timestamps (``2024-07-01T10:00:00Z``, only the date part is used) and
    bare month labels (``2024-07``, meaning the first of that month).
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        logger.debug("date_rejected", extra={"value": repr(value)})
        return None

    text = value.strip()
    month_only = _MONTH_ONLY.match(text)
    try:
        if month_only:
            return date(int(month_only.group(1)), int(month_only.group(2)), 1)
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug("date_rejected", extra={"value": text})
        return None


def parse_decimal(value: Any) -> Decimal | None:
    """
    Interpret ``value`` as a Decimal amount.

    Currency symbols, thousands separators and whitespace are stripped from
    strings (``"₹ 1,180.00"`` -> ``Decimal("1180.00")``); what remains must
    be a plain decimal number, so exponents and stray letters are rejected.
    Booleans are not amounts.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = _AMOUNT_NOISE.sub("", value)
        if not _PLAIN_AMOUNT.match(cleaned):
            logger.debug("decimal_rejected", extra={"value": value})
            return None
        result = Decimal(cleaned)
    else:
        logger.debug("decimal_rejected", extra={"value": repr(value)})
        return None

    if not result.is_finite():
        logger.debug("decimal_rejected", extra={"value": str(value)})
        return None
    return result


def parse_int(value: Any) -> int | None:
    """Interpret the leading digits of ``value`` as an integer (``"5th"`` -> 5)."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        if not Decimal(str(value)).is_finite():
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        logger.debug("int_rejected", extra={"value": str(value)})
        return None
    return int(match.group(1))


def shop_numbers_match(a: Any, b: Any) -> bool:
    """
    Compare two shop identifiers.

    Identifiers are compared as trimmed strings first, then numerically when
    both are numbers, so ``"04"`` matches ``4`` and ``"4 "``.
    """
    if is_blank(a) or is_blank(b):
        return False
    text_a = str(a).strip()
    text_b = str(b).strip()
    if text_a == text_b:
        return True
    try:
        num_a = Decimal(text_a)
        num_b = Decimal(text_b)
    except InvalidOperation:
        return False
    if not (num_a.is_finite() and num_b.is_finite()):
        return False
    return num_a == num_b
