"""Business-rule validation for new loan applications"""

import math
from typing import Any, Optional

from tredgate_loan.domain.exceptions import ValidationError
from tredgate_loan.domain.models import CreateLoanInput

APPLICANT_NAME_REQUIRED = "Applicant name is required"
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0"
TERM_NOT_POSITIVE = "Term months must be greater than 0"
INTEREST_RATE_INVALID = "Interest rate is required and cannot be negative"


def _as_number(value: Any) -> Optional[float]:
    """Blank, non-numeric and non-finite values all count as missing"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_loan_input(data: CreateLoanInput) -> CreateLoanInput:
    """
    Check a creation request against the business rules.

    Rules run in a fixed order and stop at the first failure, so a request
    missing both name and amount only reports the name:
    1. applicant name (trimmed) is non-empty
    2. amount is present and > 0
    3. term months is present, whole and > 0
    4. interest rate is present and >= 0

    Returns:
        Normalised copy of the request (name trimmed, numbers coerced)

    Raises:
        ValidationError: carrying the message of the first failing rule
    """
    name = data.applicant_name.strip() if isinstance(data.applicant_name, str) else ""
    if not name:
        raise ValidationError(APPLICANT_NAME_REQUIRED)

    amount = _as_number(data.amount)
    if amount is None or amount <= 0:
        raise ValidationError(AMOUNT_NOT_POSITIVE)

    term = _as_number(data.term_months)
    if term is None or term <= 0 or not term.is_integer():
        raise ValidationError(TERM_NOT_POSITIVE)

    rate = _as_number(data.interest_rate)
    if rate is None or rate < 0:
        raise ValidationError(INTEREST_RATE_INVALID)

    return CreateLoanInput(
        applicant_name=name,
        amount=amount,
        term_months=int(term),
        interest_rate=rate,
    )
