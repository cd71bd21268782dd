"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tredgate_loan.domain.models import CreateLoanInput, LoanApplication, LoanStatus, LoanSummary
from tredgate_loan.domain.payments import round_currency


class LoanCreateRequest(BaseModel):
    """Request body for POST /v1/loans

    Fields are untyped and optional so blank or non-numeric form inputs reach
    the ordered business-rule validator and get its messages instead of a
    schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    applicant_name: Optional[Any] = Field(None, alias="applicantName")
    amount: Optional[Any] = None
    term_months: Optional[Any] = Field(None, alias="termMonths")
    interest_rate: Optional[Any] = Field(None, alias="interestRate")

    def to_domain(self) -> CreateLoanInput:
        return CreateLoanInput(
            applicant_name=self.applicant_name,
            amount=self.amount,
            term_months=self.term_months,
            interest_rate=self.interest_rate,
        )


class LoanResponse(BaseModel):
    """Single loan application"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    applicant_name: str = Field(..., alias="applicantName")
    amount: float
    term_months: int = Field(..., alias="termMonths")
    interest_rate: float = Field(..., alias="interestRate")
    status: LoanStatus
    created_at: datetime = Field(..., alias="createdAt")
    monthly_payment: float = Field(..., alias="monthlyPayment")

    @classmethod
    def from_domain(cls, loan: LoanApplication, monthly_payment: float) -> "LoanResponse":
        return cls(
            id=loan.id,
            applicant_name=loan.applicant_name,
            amount=loan.amount,
            term_months=loan.term_months,
            interest_rate=loan.interest_rate,
            status=loan.status,
            created_at=loan.created_at,
            monthly_payment=round_currency(monthly_payment),
        )


class LoanListResponse(BaseModel):
    """Response for GET /v1/loans (insertion order)"""

    loans: List[LoanResponse]


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    pending: int
    approved: int
    rejected: int
    total_approved_amount: float = Field(..., alias="totalApprovedAmount")

    @classmethod
    def from_domain(cls, summary: LoanSummary) -> "SummaryResponse":
        return cls(
            total=summary.total,
            pending=summary.pending,
            approved=summary.approved,
            rejected=summary.rejected,
            total_approved_amount=summary.total_approved_amount,
        )
