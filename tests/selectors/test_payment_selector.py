"""
Tests for PaymentSelector against an in-memory SQLite ledger.

Covers:
- DTO mapping and month ordering
- Lenient shop number matching
- Malformed month labels
- Use as the dues service ledger
"""

from datetime import date
from decimal import Decimal

from dues_kernel.domain.ledger import MonthlyPayment, paid_month_set
from dues_kernel.domain.values import MonthKey
from dues_kernel.models import ShopPayment
from dues_kernel.selectors import PaymentSelector


def _add(session, shop_no, month, **fields):
    session.add(ShopPayment(shop_no=shop_no, payment_for_month=month, **fields))


class TestPaymentSelector:
    """Tests for get_shop_payments."""

    def test_returns_dtos_oldest_first(self, sqlite_session):
        _add(sqlite_session, "04", "2024-08", payment_date=date(2024, 8, 3),
             amount_base=Decimal("1000"), amount_gst=Decimal("180"), receipt_id="R-2")
        _add(sqlite_session, "04", "2024-07", payment_date=date(2024, 7, 4),
             amount_base=Decimal("1000"), amount_gst=Decimal("180"), receipt_id="R-1")
        sqlite_session.commit()

        payments = PaymentSelector(sqlite_session).get_shop_payments("04")

        assert [p.month_label for p in payments] == ["2024-07", "2024-08"]
        first = payments[0]
        assert isinstance(first, MonthlyPayment)
        assert first.month == MonthKey(2024, 7)
        assert first.payment_date == date(2024, 7, 4)
        assert first.amount_base == Decimal("1000")
        assert first.amount_penalty == Decimal("0")
        assert first.receipt_id == "R-1"

    def test_shop_numbers_match_numerically(self, sqlite_session):
        _add(sqlite_session, "04", "2024-07")
        _add(sqlite_session, "4", "2024-08")
        _add(sqlite_session, "40", "2024-09")
        sqlite_session.commit()

        payments = PaymentSelector(sqlite_session).get_shop_payments("4")

        assert paid_month_set(payments) == frozenset({"2024-07", "2024-08"})

    def test_unknown_shop_returns_empty(self, sqlite_session):
        _add(sqlite_session, "04", "2024-07")
        sqlite_session.commit()

        assert PaymentSelector(sqlite_session).get_shop_payments("99") == []

    def test_malformed_month_rows_skipped(self, sqlite_session):
        _add(sqlite_session, "04", "2024-7")
        _add(sqlite_session, "04", "2024-08")
        sqlite_session.commit()

        payments = PaymentSelector(sqlite_session).get_shop_payments("04")

        assert [p.month_label for p in payments] == ["2024-08"]
