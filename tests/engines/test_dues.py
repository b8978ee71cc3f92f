"""
Tests for the outstanding dues calculator.

Covers:
- Reference scenarios (no payments, partial payments, earlier leases)
- Report totals and round-trip consistency
- Determinism
- Malformed tenant data
- Current-month overdue warning
"""

from datetime import date
from decimal import Decimal

from dues_engines.dues import DuesCalculator, calculate_dues, is_current_month_overdue
from dues_engines.periods import IntervalSource
from dues_kernel.domain.tenant import TenantRecord


class TestActiveLeaseNoPayments:
    """Active lease from July 2024, nothing paid, evaluated 23 Dec 2025."""

    def setup_method(self):
        self.calculator = DuesCalculator()

    def test_totals(self, active_only_applicant, as_of, policy):
        report = self.calculator.calculate(
            tenant=active_only_applicant,
            paid_months=frozenset(),
            as_of_date=as_of,
            policy=policy,
        )

        assert report.months_count == 18
        assert report.base_rent_total == Decimal("18000")
        assert report.gst_total == Decimal("3240")
        # 4981 late days across the 18 months at 15 per day
        assert report.penalty_total == Decimal("74715")
        assert report.grand_total == Decimal("95955")
        assert report.history_months_count == 0

    def test_individual_penalties(self, active_only_applicant, as_of, policy):
        report = self.calculator.calculate(
            tenant=active_only_applicant,
            paid_months=frozenset(),
            as_of_date=as_of,
            policy=policy,
        )
        by_label = {d.month_label: d for d in report.monthly_details}

        assert by_label["2025-12"].penalty == Decimal("270")
        assert by_label["2025-11"].penalty == Decimal("720")
        assert by_label["2024-07"].penalty == Decimal("8040")

    def test_months_listed_in_order(self, active_only_applicant, as_of, policy):
        report = self.calculator.calculate(
            tenant=active_only_applicant,
            paid_months=frozenset(),
            as_of_date=as_of,
            policy=policy,
        )

        assert report.month_labels[:3] == ("2024-07", "2024-08", "2024-09")
        assert report.month_labels[-1] == "2025-12"


class TestActiveLeasePartialPayments:
    """Same tenant with July 2024 to February 2025 paid."""

    def test_totals(self, active_only_applicant, paid_july_to_february, as_of, policy):
        report = calculate_dues(active_only_applicant, paid_july_to_february, as_of, policy)

        assert report.months_count == 10
        assert report.month_labels[0] == "2025-03"
        assert report.base_rent_total == Decimal("10000")
        assert report.gst_total == Decimal("1800")
        assert report.penalty_total == Decimal("23295")
        assert report.grand_total == Decimal("35095")

    def test_paid_months_absent(self, active_only_applicant, paid_july_to_february, as_of, policy):
        report = calculate_dues(active_only_applicant, paid_july_to_february, as_of, policy)

        assert not set(report.month_labels) & paid_july_to_february


class TestEarlierLease:
    """Active lease plus an expired lease from January to June 2023."""

    def setup_method(self):
        self.calculator = DuesCalculator()

    def _report(self, applicant, as_of, policy):
        return self.calculator.calculate(
            tenant=applicant,
            paid_months=frozenset(),
            as_of_date=as_of,
            policy=policy,
        )

    def test_history_months_included(self, applicant_with_history, as_of, policy):
        report = self._report(applicant_with_history, as_of, policy)

        assert report.months_count == 24
        assert report.history_months_count == 6
        assert report.month_labels[:6] == (
            "2023-01", "2023-02", "2023-03", "2023-04", "2023-05", "2023-06",
        )

    def test_gap_between_leases_not_billed(self, applicant_with_history, as_of, policy):
        report = self._report(applicant_with_history, as_of, policy)

        assert "2023-07" not in report.month_labels
        assert "2024-06" not in report.month_labels

    def test_history_months_priced_at_history_term(self, applicant_with_history, as_of, policy):
        report = self._report(applicant_with_history, as_of, policy)

        assert report.base_rent_total == Decimal("23400")
        assert report.gst_total == Decimal("4212")
        first = report.monthly_details[0]
        assert first.term.rent_base == Decimal("900")
        assert first.provenance is IntervalSource.HISTORY

    def test_months_before_cutover_count_from_implementation_date(
        self, applicant_with_history, as_of, policy,
    ):
        """January and February 2023 both accrue from 1 March 2023."""
        report = self._report(applicant_with_history, as_of, policy)
        by_label = {d.month_label: d for d in report.monthly_details}

        assert by_label["2023-01"].penalty == Decimal("15420")
        assert by_label["2023-02"].penalty == Decimal("15420")
        assert by_label["2023-03"].penalty == Decimal("15360")

    def test_notice_text_marks_history(self, applicant_with_history, as_of, policy):
        report = self._report(applicant_with_history, as_of, policy)

        assert report.months_text().startswith("Jan 2023 (prev), Feb 2023 (prev)")
        assert report.months_text().endswith("Nov 2025, Dec 2025")


class TestReportConsistency:
    """Round-trip and determinism properties on concrete inputs."""

    def test_grand_total_equals_sum_of_details(self, applicant_with_history, as_of, policy):
        report = calculate_dues(applicant_with_history, frozenset(), as_of, policy)

        assert report.grand_total == sum(
            (d.amount_due for d in report.monthly_details), Decimal("0"),
        )
        assert report.grand_total == (
            report.base_rent_total + report.gst_total + report.penalty_total
        )
        assert report.months_count == len(report.monthly_details)

    def test_identical_inputs_identical_reports(self, applicant_with_history, as_of, policy):
        first = calculate_dues(applicant_with_history, frozenset({"2025-01"}), as_of, policy)
        second = calculate_dues(applicant_with_history, frozenset({"2025-01"}), as_of, policy)

        assert first == second

    def test_mapping_and_record_give_same_report(self, applicant_with_history, as_of, policy):
        record = TenantRecord.from_mapping(applicant_with_history)

        assert calculate_dues(record, (), as_of, policy) == calculate_dues(
            applicant_with_history, (), as_of, policy,
        )

    def test_paid_months_accept_any_iterable(self, active_only_applicant, as_of, policy):
        as_list = calculate_dues(active_only_applicant, ["2025-12", "2025-12"], as_of, policy)

        assert "2025-12" not in as_list.month_labels
        assert as_list.months_count == 17

    def test_inputs_not_mutated(self, applicant_with_history, as_of, policy):
        snapshot = repr(applicant_with_history)

        calculate_dues(applicant_with_history, frozenset(), as_of, policy)

        assert repr(applicant_with_history) == snapshot


class TestMalformedTenantData:
    """Bad data degrades to an empty or partial report, never an error."""

    def test_empty_mapping(self, as_of, policy):
        report = calculate_dues({}, frozenset(), as_of, policy)

        assert report.months_count == 0
        assert report.grand_total == Decimal("0")
        assert report.shop_no == ""
        assert not report.has_dues

    def test_non_numeric_rent_counts_as_zero(self, as_of, policy):
        report = calculate_dues(
            {"shopNo": "9", "rentStartDate": "2025-12-01", "rentBase": "abc", "paymentDay": "5"},
            frozenset(), as_of, policy,
        )

        assert report.months_count == 1
        assert report.base_rent_total == Decimal("0")
        assert report.penalty_total == Decimal("270")

    def test_missing_gst_counts_as_zero(self, as_of, policy):
        report = calculate_dues(
            {"shopNo": "9", "rentStartDate": "2025-12-01", "rentBase": "1000", "paymentDay": "5"},
            frozenset(), as_of, policy,
        )

        assert report.gst_total == Decimal("0")

    def test_invalid_payment_day_defaults_to_first(self, as_of, policy):
        report = calculate_dues(
            {"shopNo": "9", "rentStartDate": "2025-12-01", "paymentDay": "someday"},
            frozenset(), as_of, policy,
        )

        assert report.monthly_details[0].due_date == date(2025, 12, 1)
        assert report.penalty_total == Decimal("330")

    def test_bad_history_entries_skipped(self, active_only_applicant, as_of, policy):
        applicant = {
            **active_only_applicant,
            "leaseHistory": [
                "not a mapping",
                {"leaseDate": "garbage", "expiryDate": "2023-06-30"},
                None,
            ],
        }

        report = calculate_dues(applicant, frozenset(), as_of, policy)

        assert report.months_count == 18
        assert report.history_months_count == 0

    def test_future_tenant_has_no_dues(self, active_only_applicant, as_of, policy):
        applicant = {**active_only_applicant, "rentStartDate": "2026-03-01"}

        report = calculate_dues(applicant, frozenset(), as_of, policy)

        assert report.months_count == 0


class TestCurrentMonthOverdue:
    """Tests for the late-payment warning predicate."""

    def test_unpaid_after_payment_day(self, active_only_applicant):
        assert is_current_month_overdue(active_only_applicant, frozenset(), date(2025, 12, 23))

    def test_paid_current_month(self, active_only_applicant):
        assert not is_current_month_overdue(
            active_only_applicant, frozenset({"2025-12"}), date(2025, 12, 23),
        )

    def test_on_payment_day(self, active_only_applicant):
        assert not is_current_month_overdue(active_only_applicant, frozenset(), date(2025, 12, 5))

    def test_before_payment_day(self, active_only_applicant):
        assert not is_current_month_overdue(active_only_applicant, frozenset(), date(2025, 12, 2))
