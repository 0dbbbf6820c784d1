from dataclasses import replace
from decimal import Decimal

import pytest

from subsidy_calc.engine.errors import InvalidAmount, InvalidTerm, SubsidyExceedsBankRate
from subsidy_calc.engine.schedule import generate_schedule, yearly_schedule_summary
from subsidy_calc.engine.subsidy import calculate, monthly_rate
from subsidy_calc.models.calculator import CalculationInput

CENT = Decimal("0.01")


def _closed_form_balance(amount: Decimal, annual_pct: Decimal, n: int, k: int) -> Decimal:
    """Remaining balance after k payments of an n-month annuity."""
    r = monthly_rate(annual_pct)
    return amount * ((1 + r) ** n - (1 + r) ** k) / ((1 + r) ** n - 1)


class TestGenerateSchedule:
    def test_entry_count(self, canonical_input):
        entries = generate_schedule(canonical_input)
        assert len(entries) == 60
        assert [e.month for e in entries] == list(range(1, 61))

    def test_first_payment_mostly_interest(self):
        entries = generate_schedule(
            CalculationInput(Decimal("400000"), 360, Decimal("7"), Decimal("0"))
        )
        first = entries[0]
        # 400000 * 7 / 12 / 100 = 2333.33
        assert first.interest_before == Decimal("2333.33")
        assert first.principal_before == Decimal("327.88")
        assert first.payment_before == Decimal("2661.21")

    def test_payments_match_summary(self, canonical_input):
        result = calculate(canonical_input)
        for entry in generate_schedule(canonical_input):
            assert entry.payment_before == result.monthly_payment_before
            assert entry.payment_after == result.monthly_payment_after

    def test_payment_splits_into_principal_and_interest(self, canonical_input):
        for entry in generate_schedule(canonical_input):
            assert abs(entry.principal_before + entry.interest_before - entry.payment_before) <= CENT
            assert abs(entry.principal_after + entry.interest_after - entry.payment_after) <= CENT

    def test_balances_non_increasing(self, canonical_input):
        entries = generate_schedule(canonical_input)
        for prev, cur in zip(entries, entries[1:]):
            assert cur.balance_before <= prev.balance_before
            assert cur.balance_after <= prev.balance_after
        assert all(e.balance_before >= 0 and e.balance_after >= 0 for e in entries)

    def test_final_balance_zero(self, canonical_input):
        last = generate_schedule(canonical_input)[-1]
        assert last.balance_before <= CENT
        assert last.balance_after <= CENT

    def test_final_balance_zero_at_max_term(self, long_term_input):
        entries = generate_schedule(long_term_input)
        assert len(entries) == 360
        assert entries[-1].balance_before <= CENT
        assert entries[-1].balance_after <= CENT

    def test_principal_sums_to_loan_amount(self, long_term_input):
        entries = generate_schedule(long_term_input)
        tolerance = CENT * long_term_input.loan_term_months
        assert abs(sum(e.principal_before for e in entries) - long_term_input.loan_amount) <= tolerance
        assert abs(sum(e.principal_after for e in entries) - long_term_input.loan_amount) <= tolerance

    @pytest.mark.parametrize("month", [1, 120, 240, 359])
    def test_balance_matches_closed_form(self, long_term_input, month):
        """Unrounded carry-forward keeps every balance within a cent of exact math."""
        entry = generate_schedule(long_term_input)[month - 1]
        expected = _closed_form_balance(
            long_term_input.loan_amount, long_term_input.bank_rate, 360, month
        )
        assert abs(entry.balance_before - expected) <= CENT

    def test_zero_rate_exact_balances(self):
        entries = generate_schedule(
            CalculationInput(Decimal("1200000"), 12, Decimal("0"), Decimal("0"))
        )
        for entry in entries:
            assert entry.interest_before == Decimal("0")
            assert entry.principal_before == Decimal("100000.00")
            assert entry.balance_before == Decimal("1200000") - Decimal("100000") * entry.month

    def test_subsidized_interest_lower(self, canonical_input):
        for entry in generate_schedule(canonical_input):
            assert entry.interest_after <= entry.interest_before

    def test_single_month(self):
        entries = generate_schedule(
            CalculationInput(Decimal("100000"), 1, Decimal("12"), Decimal("2"))
        )
        assert len(entries) == 1
        assert entries[0].interest_before == Decimal("1000.00")
        assert entries[0].principal_before == Decimal("100000.00")
        assert entries[0].balance_before == Decimal("0")

    def test_validates_input(self, canonical_input):
        with pytest.raises(SubsidyExceedsBankRate):
            generate_schedule(replace(canonical_input, subsidy_rate=Decimal("21")))
        with pytest.raises(InvalidTerm):
            generate_schedule(replace(canonical_input, loan_term_months=361))
        with pytest.raises(InvalidAmount):
            generate_schedule(replace(canonical_input, loan_amount=Decimal("1e27")))


class TestYearlyScheduleSummary:
    def test_year_count(self, canonical_input):
        yearly = yearly_schedule_summary(generate_schedule(canonical_input))
        assert len(yearly) == 5
        assert [int(y["year"]) for y in yearly] == [1, 2, 3, 4, 5]

    def test_partial_last_year(self, canonical_input):
        entries = generate_schedule(replace(canonical_input, loan_term_months=30))
        yearly = yearly_schedule_summary(entries)
        assert len(yearly) == 3
        assert yearly[-1]["payment_before"] == entries[0].payment_before * 6

    def test_totals_match_entries(self, canonical_input):
        entries = generate_schedule(canonical_input)
        yearly = yearly_schedule_summary(entries)
        assert sum(y["interest_before"] for y in yearly) == sum(e.interest_before for e in entries)
        assert sum(y["principal_after"] for y in yearly) == sum(e.principal_after for e in entries)

    def test_year_payments_equal_12_months(self, canonical_input):
        entries = generate_schedule(canonical_input)
        for y in yearly_schedule_summary(entries):
            assert y["payment_before"] == entries[0].payment_before * 12
            assert y["savings"] == y["payment_before"] - y["payment_after"]

    def test_closing_balances(self, canonical_input):
        entries = generate_schedule(canonical_input)
        yearly = yearly_schedule_summary(entries)
        assert yearly[0]["balance_before"] == entries[11].balance_before
        assert yearly[-1]["balance_after"] == entries[-1].balance_after

    def test_empty_schedule(self):
        assert yearly_schedule_summary([]) == []
