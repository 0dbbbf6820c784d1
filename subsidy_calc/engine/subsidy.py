"""Subsidized loan comparison: bank rate vs. bank rate minus subsidy.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal

from subsidy_calc.config import settings
from subsidy_calc.engine.errors import (
    AmountOutOfRange,
    InvalidAmount,
    InvalidBankRate,
    InvalidSubsidyRate,
    InvalidTerm,
    MissingRates,
    SubsidyExceedsBankRate,
    TermExceeded,
)
from subsidy_calc.engine.formatting import format_currency, round_money, to_decimal
from subsidy_calc.models.calculator import (
    CalculationInput,
    CalculationResult,
    ProgramCalculatorData,
)


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Annual percent -> monthly fraction (20.5 -> 0.0170833...)."""
    return to_decimal(annual_rate_percent) / 12 / 100


def annuity_payment(principal: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Fixed monthly payment that fully amortizes ``principal``. Unrounded.

    PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    """
    if term_months < 1:
        raise InvalidTerm(term_range_message())
    principal = to_decimal(principal)
    annual_rate_percent = to_decimal(annual_rate_percent)

    if annual_rate_percent == 0:
        return principal / term_months

    r = monthly_rate(annual_rate_percent)
    factor = (1 + r) ** term_months
    return principal * (r * factor) / (factor - 1)


def term_range_message() -> str:
    return f"Срок кредита должен быть от 1 до {settings.max_loan_term_months} месяцев"


def validate(calc_input: CalculationInput) -> None:
    """Raise the first violated rule, in a fixed order. Returns None if valid."""
    amount = to_decimal(calc_input.loan_amount)
    term = calc_input.loan_term_months
    bank_rate = to_decimal(calc_input.bank_rate)
    subsidy_rate = to_decimal(calc_input.subsidy_rate)

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount("Сумма кредита должна быть положительной")
    if amount > settings.max_loan_amount:
        raise InvalidAmount(
            f"Сумма кредита не может превышать {format_currency(settings.max_loan_amount)}"
        )
    if isinstance(term, bool) or not isinstance(term, int) or not 1 <= term <= settings.max_loan_term_months:
        raise InvalidTerm(term_range_message())
    if not bank_rate.is_finite() or not 0 <= bank_rate <= settings.max_rate_percent:
        raise InvalidBankRate(
            f"Ставка банка должна быть от 0 до {settings.max_rate_percent}%"
        )
    if not subsidy_rate.is_finite() or subsidy_rate < 0:
        raise InvalidSubsidyRate("Ставка субсидии не может быть отрицательной")
    if subsidy_rate > bank_rate:
        raise SubsidyExceedsBankRate("Ставка субсидии не может превышать ставку банка")


def calculate(calc_input: CalculationInput) -> CalculationResult:
    """Compare annuity payments with and without the subsidy.

    Every monetary field is rounded half-up to 2 places. Derived totals are
    computed from unrounded values first, so ``total_savings`` may differ from
    ``monthly_savings * term`` by up to half a cent per month.
    """
    validate(calc_input)

    amount = to_decimal(calc_input.loan_amount)
    term = calc_input.loan_term_months
    bank_rate = to_decimal(calc_input.bank_rate)
    effective_rate = bank_rate - to_decimal(calc_input.subsidy_rate)

    payment_before = annuity_payment(amount, bank_rate, term)
    payment_after = annuity_payment(amount, effective_rate, term)

    monthly_savings = payment_before - payment_after
    total_savings = monthly_savings * term

    total_payment_before = payment_before * term
    total_payment_after = payment_after * term

    return CalculationResult(
        input=calc_input,
        effective_rate=round_money(effective_rate),
        monthly_payment_before=round_money(payment_before),
        monthly_payment_after=round_money(payment_after),
        monthly_savings=round_money(monthly_savings),
        total_savings=round_money(total_savings),
        total_payment_before=round_money(total_payment_before),
        total_payment_after=round_money(total_payment_after),
        total_interest_before=round_money(total_payment_before - amount),
        total_interest_after=round_money(total_payment_after - amount),
    )


def resolve_program_input(
    program: ProgramCalculatorData,
    loan_amount: Decimal,
    term_months: int,
    bank_rate: Decimal | None = None,
    subsidy_rate: Decimal | None = None,
) -> CalculationInput:
    """Apply a program's defaults and limits, returning the input to calculate.

    Explicit rates override the program's defaults. A zero limit counts as
    unset, matching how the portal stores "no limit".
    """
    bank_rate = bank_rate if bank_rate is not None else program.bank_rate
    subsidy_rate = subsidy_rate if subsidy_rate is not None else program.subsidy_rate
    if bank_rate is None or subsidy_rate is None:
        raise MissingRates("Для данной программы не указаны ставки кредитования")

    loan_amount = to_decimal(loan_amount)
    if program.min_loan_amount and loan_amount < program.min_loan_amount:
        raise AmountOutOfRange(
            f"Минимальная сумма кредита: {format_currency(program.min_loan_amount)}"
        )
    if program.max_loan_amount and loan_amount > program.max_loan_amount:
        raise AmountOutOfRange(
            f"Максимальная сумма кредита: {format_currency(program.max_loan_amount)}"
        )
    if program.max_loan_term_months and term_months > program.max_loan_term_months:
        raise TermExceeded(
            f"Максимальный срок кредита: {program.max_loan_term_months} месяцев"
        )

    return CalculationInput(
        loan_amount=loan_amount,
        loan_term_months=term_months,
        bank_rate=to_decimal(bank_rate),
        subsidy_rate=to_decimal(subsidy_rate),
    )


def calculate_with_program_constraints(
    program: ProgramCalculatorData,
    loan_amount: Decimal,
    term_months: int,
    bank_rate: Decimal | None = None,
    subsidy_rate: Decimal | None = None,
) -> CalculationResult:
    """``calculate`` guarded by the program's rate defaults and loan limits."""
    calc_input = resolve_program_input(program, loan_amount, term_months, bank_rate, subsidy_rate)
    return calculate(calc_input)
