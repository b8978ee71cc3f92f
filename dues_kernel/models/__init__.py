"""ORM models read by the dues kernel."""

from dues_kernel.models.payment import ShopPayment

__all__ = ["ShopPayment"]
