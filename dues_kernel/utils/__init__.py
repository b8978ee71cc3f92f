"""Utility modules for the dues kernel."""

from dues_kernel.utils.parsing import (
    first_amount,
    first_present,
    is_blank,
    parse_date,
    parse_decimal,
    parse_int,
    shop_numbers_match,
)

__all__ = [
    "first_amount",
    "first_present",
    "is_blank",
    "parse_date",
    "parse_decimal",
    "parse_int",
    "shop_numbers_match",
]
