"""Pydantic schemas for API request/response models.

JSON uses the portal's camelCase field names; Python code uses snake_case.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Amounts go out as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Request schemas ----

class CalculateRequest(CamelModel):
    loan_amount: Decimal = Field(..., description="Loan amount, tenge")
    loan_term_months: int = Field(..., description="Term in months (1-360)")
    bank_rate: Decimal = Field(..., description="Bank's annual rate, %")
    subsidy_rate: Decimal = Field(..., description="Subsidy, percentage points off the bank rate")


class ProgramCalculateRequest(CamelModel):
    loan_amount: Decimal
    loan_term_months: int

    # Optional overrides of the program's default rates
    custom_bank_rate: Decimal | None = None
    custom_subsidy_rate: Decimal | None = None


# ---- Response schemas ----

class CalculationInputResponse(CamelModel):
    loan_amount: Money
    loan_term_months: int
    bank_rate: Money
    subsidy_rate: Money


class CalculationResultResponse(CamelModel):
    input: CalculationInputResponse
    effective_rate: Money
    monthly_payment_before: Money
    monthly_payment_after: Money
    monthly_savings: Money
    total_savings: Money
    total_payment_before: Money
    total_payment_after: Money
    total_interest_before: Money
    total_interest_after: Money


class ScheduleEntryResponse(CamelModel):
    month: int
    payment_before: Money
    payment_after: Money
    principal_before: Money
    principal_after: Money
    interest_before: Money
    interest_after: Money
    balance_before: Money
    balance_after: Money


class ProgramInfoResponse(CamelModel):
    id: int
    title: str
    default_bank_rate: Money | None = None
    default_subsidy_rate: Money | None = None
    max_loan_term_months: int | None = None
    min_loan_amount: Money | None = None
    max_loan_amount: Money | None = None


class ProgramCalculatorDataResponse(CamelModel):
    program_id: int
    program_title: str
    bank_rate: Money | None = None
    subsidy_rate: Money | None = None
    max_loan_term_months: int | None = None
    min_loan_amount: Money | None = None
    max_loan_amount: Money | None = None
    calculator_enabled: bool = False


class ProgramCalculation(CamelModel):
    program: ProgramInfoResponse
    calculation: CalculationResultResponse


class ScheduleWithSummary(CamelModel):
    schedule: list[ScheduleEntryResponse]
    summary: CalculationResultResponse


# ---- Envelopes ----

class CalculateResponse(BaseModel):
    success: bool = True
    data: CalculationResultResponse


class ProgramCalculationResponse(BaseModel):
    success: bool = True
    data: ProgramCalculation


class ProgramDataResponse(BaseModel):
    success: bool = True
    data: ProgramCalculatorDataResponse


class ScheduleResponse(BaseModel):
    success: bool = True
    data: ScheduleWithSummary


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str | None = None
    details: list[dict] | None = None
