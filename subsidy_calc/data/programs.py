"""Program lookup for the calculator.

Reads the calculator fields of a business program and hands the engine an
already-fetched ``ProgramCalculatorData``. Read-only.
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subsidy_calc.models.calculator import ProgramCalculatorData
from subsidy_calc.models.db import BusinessProgramRecord

logger = logging.getLogger(__name__)


def record_to_program(record: BusinessProgramRecord) -> ProgramCalculatorData:
    return ProgramCalculatorData(
        program_id=record.id,
        program_title=record.title,
        bank_rate=_decimal_or_none(record.bank_rate),
        subsidy_rate=_decimal_or_none(record.subsidy_rate),
        max_loan_term_months=record.max_loan_term_months or None,
        min_loan_amount=_decimal_or_none(record.min_loan_amount),
        max_loan_amount=_decimal_or_none(record.max_loan_amount),
        calculator_enabled=bool(record.calculator_enabled),
    )


def _decimal_or_none(value) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


def sample_program() -> BusinessProgramRecord:
    """The interest-rate subsidy program the portal seeds when none has a calculator."""
    return BusinessProgramRecord(
        title="Программа субсидирования процентной ставки для МСБ",
        description=(
            "Государственная программа субсидирования процентной ставки по кредитам "
            "для субъектов малого и среднего предпринимательства."
        ),
        organization="АО «Фонд развития предпринимательства «Даму»",
        program_type="Субсидия",
        is_active=True,
        min_loan_amount=Decimal("1000000"),
        max_loan_amount=Decimal("500000000"),
        bank_rate=Decimal("20.5"),
        subsidy_rate=Decimal("8.2"),
        max_loan_term_months=84,
        calculator_enabled=True,
    )


class ProgramRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_calculator_data(self, program_id: int) -> ProgramCalculatorData | None:
        result = await self.session.execute(
            select(BusinessProgramRecord).where(BusinessProgramRecord.id == program_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            logger.warning("Program %s not found", program_id)
            return None
        return record_to_program(record)

    async def ensure_sample_program(self) -> int | None:
        """Insert the sample program if no program has the calculator enabled.

        Returns the new program id, or None if nothing was inserted.
        """
        result = await self.session.execute(
            select(BusinessProgramRecord.id)
            .where(BusinessProgramRecord.calculator_enabled.is_(True))
            .limit(1)
        )
        if result.scalar_one_or_none() is not None:
            logger.info("Calculator-enabled program already present, skipping seed")
            return None

        record = sample_program()
        self.session.add(record)
        await self.session.commit()
        logger.info("Seeded sample calculator program %s", record.id)
        return record.id
