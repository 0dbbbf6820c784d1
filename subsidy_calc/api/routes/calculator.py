"""Subsidy calculator routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from subsidy_calc.api.deps import get_program_repository
from subsidy_calc.api.schemas import (
    CalculateRequest,
    CalculateResponse,
    CalculationInputResponse,
    CalculationResultResponse,
    ErrorResponse,
    ProgramCalculateRequest,
    ProgramCalculation,
    ProgramCalculationResponse,
    ProgramCalculatorDataResponse,
    ProgramDataResponse,
    ProgramInfoResponse,
    ScheduleEntryResponse,
    ScheduleResponse,
    ScheduleWithSummary,
)
from subsidy_calc.data.programs import ProgramRepository
from subsidy_calc.engine.schedule import generate_schedule
from subsidy_calc.engine.subsidy import calculate, calculate_with_program_constraints
from subsidy_calc.models.calculator import CalculationInput, CalculationResult, ProgramCalculatorData

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/calculator",
    tags=["calculator"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

PROGRAM_NOT_FOUND = "Программа не найдена"
CALCULATOR_DISABLED = "Калькулятор не доступен для данной программы"


def _to_input(req: CalculateRequest) -> CalculationInput:
    return CalculationInput(
        loan_amount=req.loan_amount,
        loan_term_months=req.loan_term_months,
        bank_rate=req.bank_rate,
        subsidy_rate=req.subsidy_rate,
    )


def _result_to_response(result: CalculationResult) -> CalculationResultResponse:
    """Convert engine CalculationResult to API response."""
    i = result.input
    return CalculationResultResponse(
        input=CalculationInputResponse(
            loan_amount=i.loan_amount,
            loan_term_months=i.loan_term_months,
            bank_rate=i.bank_rate,
            subsidy_rate=i.subsidy_rate,
        ),
        effective_rate=result.effective_rate,
        monthly_payment_before=result.monthly_payment_before,
        monthly_payment_after=result.monthly_payment_after,
        monthly_savings=result.monthly_savings,
        total_savings=result.total_savings,
        total_payment_before=result.total_payment_before,
        total_payment_after=result.total_payment_after,
        total_interest_before=result.total_interest_before,
        total_interest_after=result.total_interest_after,
    )


async def _load_program(repo: ProgramRepository, program_id: int) -> ProgramCalculatorData:
    program = await repo.get_calculator_data(program_id)
    if program is None:
        raise HTTPException(status_code=404, detail=PROGRAM_NOT_FOUND)
    return program


@router.post("/calculate", response_model=CalculateResponse)
async def calculate_subsidy(req: CalculateRequest):
    """Compare payments with and without the subsidy, no program attached."""
    result = calculate(_to_input(req))
    return CalculateResponse(data=_result_to_response(result))


@router.post("/program/{program_id}", response_model=ProgramCalculationResponse)
async def calculate_for_program(
    program_id: int,
    req: ProgramCalculateRequest,
    repo: ProgramRepository = Depends(get_program_repository),
):
    """Calculate using a program's default rates and loan limits."""
    program = await _load_program(repo, program_id)
    if not program.calculator_enabled:
        logger.info("Calculator requested for program %s with calculator disabled", program_id)
        raise HTTPException(status_code=400, detail=CALCULATOR_DISABLED)

    result = calculate_with_program_constraints(
        program,
        req.loan_amount,
        req.loan_term_months,
        bank_rate=req.custom_bank_rate,
        subsidy_rate=req.custom_subsidy_rate,
    )

    return ProgramCalculationResponse(data=ProgramCalculation(
        program=ProgramInfoResponse(
            id=program.program_id,
            title=program.program_title,
            default_bank_rate=program.bank_rate,
            default_subsidy_rate=program.subsidy_rate,
            max_loan_term_months=program.max_loan_term_months,
            min_loan_amount=program.min_loan_amount,
            max_loan_amount=program.max_loan_amount,
        ),
        calculation=_result_to_response(result),
    ))


@router.get("/program/{program_id}/data", response_model=ProgramDataResponse)
async def get_program_calculator_data(
    program_id: int,
    repo: ProgramRepository = Depends(get_program_repository),
):
    """Program defaults and limits, for pre-filling the calculator form."""
    program = await _load_program(repo, program_id)
    return ProgramDataResponse(data=ProgramCalculatorDataResponse(
        program_id=program.program_id,
        program_title=program.program_title,
        bank_rate=program.bank_rate,
        subsidy_rate=program.subsidy_rate,
        max_loan_term_months=program.max_loan_term_months,
        min_loan_amount=program.min_loan_amount,
        max_loan_amount=program.max_loan_amount,
        calculator_enabled=program.calculator_enabled,
    ))


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: CalculateRequest):
    """Full month-by-month schedule plus the summary."""
    calc_input = _to_input(req)
    entries = generate_schedule(calc_input)
    summary = calculate(calc_input)

    return ScheduleResponse(data=ScheduleWithSummary(
        schedule=[
            ScheduleEntryResponse(
                month=e.month,
                payment_before=e.payment_before,
                payment_after=e.payment_after,
                principal_before=e.principal_before,
                principal_after=e.principal_after,
                interest_before=e.interest_before,
                interest_after=e.interest_after,
                balance_before=e.balance_before,
                balance_after=e.balance_after,
            )
            for e in entries
        ],
        summary=_result_to_response(summary),
    ))
