#!/usr/bin/env python3
"""
Outstanding dues demo for a single shop.

Computes the dues a notice would list for one shop, either from a JSON data
file or from a built-in sample tenant with two earlier leases and eight paid
months.

The data file holds two lists:
    {"applicants": [{"shopNo": "04", "paymentDay": "5", ...}],
     "payments":   [{"shopNo": "04", "paymentForMonth": "2024-07"}, ...]}

Usage:
    python3 scripts/notice_demo.py --shop 04
    python3 scripts/notice_demo.py --shop 04 --today 2025-12-23 --impl 2023-03-01
    python3 scripts/notice_demo.py --shop 04 --data testdata.json --rate 15
    python3 scripts/notice_demo.py --shop 04 --db sqlite:///payments.db
    python3 scripts/notice_demo.py --json      # machine-readable report
"""

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from dues_engines.dues import DuesCalculator  # noqa: E402
from dues_engines.penalty import PenaltyPolicy  # noqa: E402
from dues_kernel.db import create_tables, get_session, init_engine_from_url  # noqa: E402
from dues_kernel.domain.ledger import (  # noqa: E402
    InMemoryPaymentLedger,
    PaidMonthSet,
    paid_month_set,
)
from dues_kernel.domain.tenant import TenantRecord  # noqa: E402
from dues_kernel.logging_config import configure_logging  # noqa: E402
from dues_kernel.selectors import PaymentSelector  # noqa: E402
from dues_kernel.utils.parsing import shop_numbers_match  # noqa: E402

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_TODAY = date(2025, 12, 23)
DEFAULT_IMPLEMENTATION = date(2023, 3, 1)
DEFAULT_RATE = "15"

SAMPLE_PAYMENTS = [
    {"paymentForMonth": label}
    for label in (
        "2024-07", "2024-08", "2024-09", "2024-10",
        "2024-11", "2024-12", "2025-01", "2025-02",
    )
]


def sample_applicant(shop_no: str) -> dict:
    return {
        "shopNo": shop_no,
        "applicantName": "Test Renter",
        "paymentDay": "5",
        "rentBase": "1000",
        "gstAmount": "180",
        "rentTotal": "1180",
        "rentStartDate": "2024-07-01",
        "leaseDate": "2024-07-01",
        "leaseHistory": [
            {"leaseDate": "2023-01-01", "expiryDate": "2023-06-30",
             "rentBase": "900", "gstAmount": "162", "rentTotal": "1062"},
            {"leaseDate": "2023-07-01", "expiryDate": "2023-12-31",
             "rentBase": "950", "gstAmount": "171", "rentTotal": "1121"},
        ],
    }


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}")


def _parse_rate_arg(value: str) -> Decimal:
    try:
        rate = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not rate.is_finite() or rate < 0:
        raise argparse.ArgumentTypeError(f"rate must be a non-negative number: {value!r}")
    return rate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Outstanding dues for one shop")
    parser.add_argument("--shop", "-s", default="04", help="Shop number (default: 04)")
    parser.add_argument("--today", type=_parse_date_arg, default=DEFAULT_TODAY,
                        help="Reference date, YYYY-MM-DD (default: 2025-12-23)")
    parser.add_argument("--impl", type=_parse_date_arg, default=DEFAULT_IMPLEMENTATION,
                        help="Penalty policy implementation date (default: 2023-03-01)")
    parser.add_argument("--rate", "-r", type=_parse_rate_arg, default=Decimal(DEFAULT_RATE),
                        help="Penalty per day of delay (default: 15)")
    parser.add_argument("--data", "-d", type=Path, default=None,
                        help="JSON file with 'applicants' and 'payments' lists")
    parser.add_argument("--db", default=None, metavar="URL",
                        help="SQLAlchemy URL of a payment ledger; replaces the sample payments")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Emit engine logs to stderr")
    return parser


def load_data(path: Path | None) -> tuple[list[dict], list[dict] | None]:
    """Applicants and payments from ``path``; payments is None when absent."""
    if path is None:
        return [], None
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    applicants = data.get("applicants") if isinstance(data.get("applicants"), list) else []
    payments = data.get("payments") if isinstance(data.get("payments"), list) else None
    return applicants, payments


def paid_months_from_db(url: str, shop_no: str) -> PaidMonthSet:
    """Paid months of ``shop_no`` read from the ``shop_payments`` table at ``url``."""
    init_engine_from_url(url)
    # an empty database is a ledger with no payments
    create_tables()
    session = get_session()
    try:
        return paid_month_set(PaymentSelector(session).get_shop_payments(shop_no))
    finally:
        session.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging(level=logging.DEBUG, json_format=False)

    try:
        applicants, payments = load_data(args.data)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Failed to read data file: {exc}", file=sys.stderr)
        return 1

    applicant = next(
        (a for a in applicants if shop_numbers_match(a.get("shopNo"), args.shop)),
        None,
    ) or sample_applicant(args.shop)

    if args.db:
        try:
            paid = paid_months_from_db(args.db, args.shop)
        except SQLAlchemyError as exc:
            print(f"Failed to read payment ledger: {exc}", file=sys.stderr)
            return 1
    else:
        if payments is None:
            payments = [dict(p, shopNo=args.shop) for p in SAMPLE_PAYMENTS]
        paid = paid_month_set(InMemoryPaymentLedger(payments).get_shop_payments(args.shop))

    report = DuesCalculator().calculate(
        tenant=TenantRecord.from_mapping(applicant),
        paid_months=paid,
        as_of_date=args.today,
        policy=PenaltyPolicy(daily_rate=args.rate, implementation_date=args.impl),
    )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0

    summary = report.to_dict()
    print(f"Shop: {args.shop}")
    print(f"Date (today): {args.today.isoformat()}")
    print(f"Penalty rate: {args.rate}")
    print(f"Implementation date: {args.impl.isoformat()}")
    print("---\nResult summary:")
    print(f"Months count: {report.months_count}")
    print(f"Base rent total: ₹{summary['base_rent_total']}")
    print(f"GST total: ₹{summary['gst_total']}")
    print(f"Penalty total: ₹{summary['penalty_total']}")
    print(f"Grand total: ₹{summary['grand_total']}")
    print("\nDetails:")
    for row in summary["monthly_details"]:
        marker = " (prev)" if row["source"] == "history" else ""
        print(f"{row['label']}{marker}  | Rent: ₹{row['rent_total']}  | Penalty: ₹{row['penalty']}")

    includes_2023 = any(d.month.year == 2023 for d in report.monthly_details)
    print(f"\nIncludes 2023-months? {'Yes' if includes_2023 else 'No'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
