"""
Module: dues_kernel.models.payment
Responsibility: ORM mapping of the shop payment ledger table as written by the
    surrounding rent-collection application.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - One payment row per (shop_no, payment_for_month): a month is settled by
      a single receipt (uq_shop_payment_month).
    - payment_for_month is the ``YYYY-MM`` label the dues calculator matches
      on; amounts are informational.

Audit relevance:
    Rows are read by PaymentSelector only.  The dues kernel never inserts,
    updates or deletes payments.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dues_kernel.db.base import Base


class ShopPayment(Base):
    """One rent payment received for one shop and one month."""

    __tablename__ = "shop_payments"

    __table_args__ = (
        UniqueConstraint("shop_no", "payment_for_month", name="uq_shop_payment_month"),
        Index("idx_shop_payment_shop", "shop_no"),
    )

    shop_no: Mapped[str] = mapped_column(String(20), nullable=False)

    # Month settled by this payment, e.g. "2024-07"
    payment_for_month: Mapped[str] = mapped_column(String(7), nullable=False)

    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    amount_base: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    amount_gst: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    amount_penalty: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    receipt_id: Mapped[str | None] = mapped_column(String(40), nullable=True)

    def __repr__(self) -> str:
        return f"<ShopPayment {self.shop_no} {self.payment_for_month}>"
