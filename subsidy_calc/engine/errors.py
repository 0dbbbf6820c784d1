"""Validation errors raised by the calculator engine.

Every error is caller-correctable input; none are retryable. Messages are in
Russian because they are shown to portal users verbatim.
"""


class CalculatorValidationError(ValueError):
    code = "validation_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(CalculatorValidationError):
    code = "invalid_amount"


class InvalidTerm(CalculatorValidationError):
    code = "invalid_term"


class InvalidBankRate(CalculatorValidationError):
    code = "invalid_bank_rate"


class InvalidSubsidyRate(CalculatorValidationError):
    code = "invalid_subsidy_rate"


class SubsidyExceedsBankRate(CalculatorValidationError):
    code = "subsidy_exceeds_bank_rate"


class MissingRates(CalculatorValidationError):
    code = "missing_rates"


class AmountOutOfRange(CalculatorValidationError):
    code = "amount_out_of_range"


class TermExceeded(CalculatorValidationError):
    code = "term_exceeded"
