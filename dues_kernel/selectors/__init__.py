"""Selectors for the dues kernel (read side)."""

from dues_kernel.selectors.payment_selector import PaymentSelector

__all__ = ["PaymentSelector"]
