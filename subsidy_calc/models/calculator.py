"""Value types for the subsidy calculator.

All amounts are in tenge; rates are annual percentages (20.5 means 20.5 %).
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CalculationInput:
    loan_amount: Decimal
    loan_term_months: int
    bank_rate: Decimal  # Nominal annual %, 0..100
    subsidy_rate: Decimal  # Percentage points subtracted from bank_rate


@dataclass(frozen=True)
class CalculationResult:
    input: CalculationInput
    effective_rate: Decimal

    monthly_payment_before: Decimal
    monthly_payment_after: Decimal
    monthly_savings: Decimal
    total_savings: Decimal

    total_payment_before: Decimal
    total_payment_after: Decimal
    total_interest_before: Decimal
    total_interest_after: Decimal


@dataclass(frozen=True)
class ScheduleEntry:
    month: int

    payment_before: Decimal
    payment_after: Decimal
    principal_before: Decimal
    principal_after: Decimal
    interest_before: Decimal
    interest_after: Decimal
    balance_before: Decimal
    balance_after: Decimal


@dataclass(frozen=True)
class ProgramCalculatorData:
    """Calculator-relevant slice of a business support program.

    Any limit left as None is not enforced.
    """
    program_id: int
    program_title: str
    bank_rate: Decimal | None = None
    subsidy_rate: Decimal | None = None
    max_loan_term_months: int | None = None
    min_loan_amount: Decimal | None = None
    max_loan_amount: Decimal | None = None
    calculator_enabled: bool = False
