"""Month-by-month amortization schedule for both rate regimes.

Balances carry forward at full precision; only the emitted entries are
rounded. Rounding each period's balance would compound error over a
360-month term.
"""

from decimal import Decimal

from subsidy_calc.engine.formatting import round_money, to_decimal
from subsidy_calc.engine.subsidy import annuity_payment, monthly_rate, validate
from subsidy_calc.models.calculator import CalculationInput, ScheduleEntry

ZERO = Decimal("0")


def generate_schedule(calc_input: CalculationInput) -> list[ScheduleEntry]:
    """Generate the full schedule, one entry per month of the term."""
    validate(calc_input)

    amount = to_decimal(calc_input.loan_amount)
    term = calc_input.loan_term_months
    bank_rate = to_decimal(calc_input.bank_rate)
    effective_rate = bank_rate - to_decimal(calc_input.subsidy_rate)

    payment_before = annuity_payment(amount, bank_rate, term)
    payment_after = annuity_payment(amount, effective_rate, term)
    rate_before = monthly_rate(bank_rate)
    rate_after = monthly_rate(effective_rate)

    balance_before = amount
    balance_after = amount
    entries: list[ScheduleEntry] = []

    for month in range(1, term + 1):
        interest_before = balance_before * rate_before
        interest_after = balance_after * rate_after

        principal_before = payment_before - interest_before
        principal_after = payment_after - interest_after

        balance_before = max(ZERO, balance_before - principal_before)
        balance_after = max(ZERO, balance_after - principal_after)

        entries.append(ScheduleEntry(
            month=month,
            payment_before=round_money(payment_before),
            payment_after=round_money(payment_after),
            principal_before=round_money(principal_before),
            principal_after=round_money(principal_after),
            interest_before=round_money(interest_before),
            interest_after=round_money(interest_after),
            balance_before=round_money(balance_before),
            balance_after=round_money(balance_after),
        ))

    return entries


def yearly_schedule_summary(entries: list[ScheduleEntry]) -> list[dict[str, Decimal]]:
    """Aggregate a schedule by loan year (12 months; the last year may be short).

    Returns list of dicts with keys: year, payment_before, payment_after,
    principal_before, principal_after, interest_before, interest_after,
    savings, balance_before, balance_after
    """
    yearly: list[dict[str, Decimal]] = []
    sums = _empty_year()

    for entry in entries:
        sums["payment_before"] += entry.payment_before
        sums["payment_after"] += entry.payment_after
        sums["principal_before"] += entry.principal_before
        sums["principal_after"] += entry.principal_after
        sums["interest_before"] += entry.interest_before
        sums["interest_after"] += entry.interest_after

        if entry.month % 12 == 0 or entry.month == len(entries):
            yearly.append({
                "year": Decimal((entry.month - 1) // 12 + 1),
                **sums,
                "savings": sums["payment_before"] - sums["payment_after"],
                "balance_before": entry.balance_before,
                "balance_after": entry.balance_after,
            })
            sums = _empty_year()

    return yearly


def _empty_year() -> dict[str, Decimal]:
    return {
        "payment_before": ZERO,
        "payment_after": ZERO,
        "principal_before": ZERO,
        "principal_after": ZERO,
        "interest_before": ZERO,
        "interest_after": ZERO,
    }
