"""Persisted record shape for the loan collection"""

import json
from datetime import datetime
from typing import List, Sequence

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from tredgate_loan.domain.exceptions import PersistenceError
from tredgate_loan.domain.models import LoanApplication, LoanStatus


class LoanRecord(BaseModel):
    """One stored loan: {id, applicantName, amount, termMonths, interestRate, status, createdAt}"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    applicant_name: str = Field(..., alias="applicantName")
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    term_months: int = Field(..., alias="termMonths", gt=0)
    interest_rate: float = Field(..., alias="interestRate", ge=0, allow_inf_nan=False)
    status: LoanStatus
    created_at: datetime = Field(..., alias="createdAt")

    @field_validator("applicant_name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("applicantName must not be blank")
        return value

    @classmethod
    def from_domain(cls, loan: LoanApplication) -> "LoanRecord":
        return cls(
            id=loan.id,
            applicant_name=loan.applicant_name,
            amount=loan.amount,
            term_months=loan.term_months,
            interest_rate=loan.interest_rate,
            status=loan.status,
            created_at=loan.created_at,
        )

    def to_domain(self) -> LoanApplication:
        return LoanApplication(
            id=self.id,
            applicant_name=self.applicant_name,
            amount=self.amount,
            term_months=self.term_months,
            interest_rate=self.interest_rate,
            status=self.status,
            created_at=self.created_at,
        )


_records_adapter = TypeAdapter(List[LoanRecord])


def encode_loans(loans: Sequence[LoanApplication]) -> str:
    """Serialize the whole collection, preserving order"""
    return json.dumps(
        [LoanRecord.from_domain(loan).model_dump(mode="json", by_alias=True) for loan in loans]
    )


def decode_loans(payload: str) -> List[LoanApplication]:
    """
    Parse a stored payload back into loans.

    The payload is all-or-nothing: any malformed record, or two records
    sharing an id, rejects the whole collection.

    Raises:
        PersistenceError: payload is not a valid loan collection
    """
    try:
        records = _records_adapter.validate_json(payload)
    except pydantic.ValidationError as e:
        raise PersistenceError(f"Malformed loan data in store: {e.error_count()} error(s)") from e

    loans = [record.to_domain() for record in records]

    ids = [loan.id for loan in loans]
    if len(ids) != len(set(ids)):
        raise PersistenceError("Malformed loan data in store: duplicate loan ids")

    return loans
