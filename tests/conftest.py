"""Canonical test fixtures used across calculator tests.

Scenario: 50M tenge loan, 60 months, 20.5% bank rate, 8.2 p.p. subsidy.
Program: the seeded SME rate-subsidy program (1M-500M tenge, up to 84 months).
"""

import pytest
from decimal import Decimal

from subsidy_calc.models.calculator import CalculationInput, ProgramCalculatorData


@pytest.fixture
def canonical_input() -> CalculationInput:
    """50M tenge over 5 years with an 8.2 p.p. subsidy."""
    return CalculationInput(
        loan_amount=Decimal("50000000"),
        loan_term_months=60,
        bank_rate=Decimal("20.5"),
        subsidy_rate=Decimal("8.2"),
    )


@pytest.fixture
def zero_rate_input() -> CalculationInput:
    return CalculationInput(
        loan_amount=Decimal("1000000"),
        loan_term_months=12,
        bank_rate=Decimal("0"),
        subsidy_rate=Decimal("0"),
    )


@pytest.fixture
def long_term_input() -> CalculationInput:
    """Maximum term at a high rate."""
    return CalculationInput(
        loan_amount=Decimal("400000000"),
        loan_term_months=360,
        bank_rate=Decimal("24"),
        subsidy_rate=Decimal("10"),
    )


@pytest.fixture
def sme_program() -> ProgramCalculatorData:
    return ProgramCalculatorData(
        program_id=1,
        program_title="Программа субсидирования процентной ставки для МСБ",
        bank_rate=Decimal("20.5"),
        subsidy_rate=Decimal("8.2"),
        max_loan_term_months=84,
        min_loan_amount=Decimal("1000000"),
        max_loan_amount=Decimal("500000000"),
        calculator_enabled=True,
    )
