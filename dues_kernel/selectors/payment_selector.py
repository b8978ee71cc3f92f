"""
Payment ledger selector.

Read-only ``PaymentLedger`` implementation over the ``shop_payments`` table.

Key design decisions:
- Returns ``MonthlyPayment`` DTOs (frozen dataclasses), not ORM models
- Uses the caller's Session, never creates its own
- Shop numbers match leniently ("04" and "4" are the same shop), the way the
  rent-collection application compares them
- Rows with a malformed ``payment_for_month`` are skipped, not raised
"""

from collections.abc import Sequence

from sqlalchemy import distinct, select

from dues_kernel.domain.ledger import MonthlyPayment
from dues_kernel.domain.values import MonthKey
from dues_kernel.exceptions import InvalidMonthLabelError
from dues_kernel.logging_config import get_logger
from dues_kernel.models.payment import ShopPayment
from dues_kernel.selectors.base import BaseSelector
from dues_kernel.utils.parsing import shop_numbers_match

logger = get_logger("selectors.payment")


class PaymentSelector(BaseSelector[ShopPayment]):
    """Selector for shop payment ledger queries."""

    def _matching_shop_numbers(self, shop_no: str) -> list[str]:
        stored = self.session.execute(select(distinct(ShopPayment.shop_no))).scalars()
        return [s for s in stored if shop_numbers_match(s, shop_no)]

    def get_shop_payments(self, shop_no: str) -> Sequence[MonthlyPayment]:
        """
        All payments recorded for ``shop_no``, oldest month first.

        Args:
            shop_no: Shop identifier as held on the tenant record.

        Returns:
            List of MonthlyPayment DTOs.
        """
        shop_numbers = self._matching_shop_numbers(shop_no)
        if not shop_numbers:
            return []

        rows = self.session.execute(
            select(ShopPayment)
            .where(ShopPayment.shop_no.in_(shop_numbers))
            .order_by(ShopPayment.payment_for_month)
        ).scalars()

        payments: list[MonthlyPayment] = []
        for row in rows:
            try:
                month = MonthKey.parse(row.payment_for_month)
            except InvalidMonthLabelError:
                logger.warning("payment_row_skipped", extra={
                    "shop_no": row.shop_no,
                    "payment_for_month": row.payment_for_month,
                    "payment_id": str(row.id),
                })
                continue
            payments.append(self._to_dto(row, month))

        logger.debug("shop_payments_loaded", extra={
            "shop_no": shop_no,
            "payment_count": len(payments),
        })
        return payments

    def _to_dto(self, row: ShopPayment, month: MonthKey) -> MonthlyPayment:
        return MonthlyPayment(
            shop_no=row.shop_no,
            month=month,
            payment_date=row.payment_date,
            amount_base=row.amount_base,
            amount_gst=row.amount_gst,
            amount_penalty=row.amount_penalty,
            receipt_id=row.receipt_id,
        )
