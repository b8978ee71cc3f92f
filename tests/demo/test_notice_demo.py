"""
Tests for the notice demo script (scripts/notice_demo.py).

Run the script itself with:
    python3 scripts/notice_demo.py --shop 04
"""

import json

import pytest

from dues_kernel.db import create_tables, get_session, init_engine_from_url, reset_engine
from dues_kernel.models import ShopPayment
from scripts.notice_demo import main


class TestBuiltInSample:
    """The sample tenant has two 2023 leases and July 2024 - Feb 2025 paid."""

    def test_json_report(self, capsys):
        assert main(["--json"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert report["shop_no"] == "04"
        assert report["as_of_date"] == "2025-12-23"
        assert report["months_count"] == 22
        assert report["history_months_count"] == 12
        assert report["monthly_details"][0]["month"] == "2023-01"
        assert report["monthly_details"][6]["rent_base"] == "950.00"

    def test_text_summary(self, capsys):
        assert main([]) == 0

        out = capsys.readouterr().out
        assert "Months count: 22" in out
        assert "Jan 2023 (prev)" in out
        assert "Includes 2023-months? Yes" in out

    def test_rate_option(self, capsys):
        main(["--json", "--rate", "0"])

        report = json.loads(capsys.readouterr().out)
        assert report["penalty_total"] == "0.00"

    def test_reference_date_option(self, capsys):
        main(["--json", "--today", "2025-03-01"])

        report = json.loads(capsys.readouterr().out)
        assert report["monthly_details"][-1]["month"] == "2025-03"


class TestDataFile:
    """Tenants and payments read from a JSON file."""

    def test_applicant_and_payments_from_file(self, tmp_path, capsys):
        data = {
            "applicants": [{
                "shopNo": "7",
                "paymentDay": "10",
                "rentBase": "500",
                "gstAmount": "90",
                "rentTotal": "590",
                "rentStartDate": "2025-10-01",
            }],
            "payments": [{"shopNo": "07", "paymentForMonth": "2025-10"}],
        }
        path = tmp_path / "data.json"
        path.write_text(json.dumps(data))

        assert main(["--shop", "07", "--data", str(path), "--json"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert [d["month"] for d in report["monthly_details"]] == ["2025-11", "2025-12"]
        assert report["base_rent_total"] == "1000.00"

    def test_unreadable_file(self, tmp_path, capsys):
        assert main(["--data", str(tmp_path / "missing.json")]) == 1
        assert "Failed to read data file" in capsys.readouterr().err



class TestPaymentDatabase:
    """Payments read through the SQL ledger selector."""

    def setup_method(self):
        reset_engine()

    def teardown_method(self):
        reset_engine()

    def test_paid_months_from_database(self, tmp_path, capsys):
        url = f"sqlite:///{tmp_path / 'payments.db'}"
        init_engine_from_url(url)
        create_tables()
        session = get_session()
        session.add(ShopPayment(shop_no="4", payment_for_month="2024-07"))
        session.add(ShopPayment(shop_no="05", payment_for_month="2024-08"))
        session.commit()
        session.close()

        assert main(["--db", url, "--json"]) == 0

        report = json.loads(capsys.readouterr().out)
        months = [d["month"] for d in report["monthly_details"]]
        assert report["months_count"] == 29
        assert "2024-07" not in months
        assert "2024-08" in months

    def test_empty_database_has_no_payments(self, tmp_path, capsys):
        url = f"sqlite:///{tmp_path / 'empty.db'}"

        assert main(["--db", url, "--json"]) == 0

        assert json.loads(capsys.readouterr().out)["months_count"] == 30

    def test_unusable_url(self, capsys):
        assert main(["--db", "nosuchdialect:///x"]) == 1
        assert "Failed to read payment ledger" in capsys.readouterr().err


class TestArguments:
    @pytest.mark.parametrize("argv", [["--rate", "-1"], ["--rate", "abc"], ["--today", "23/12/2025"]])
    def test_invalid_arguments_rejected(self, argv):
        with pytest.raises(SystemExit):
            main(argv)
