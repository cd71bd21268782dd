"""Domain models - pure Python dataclasses representing loan applications"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class LoanStatus(str, Enum):
    """Lifecycle state of a loan application"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    """Formula used to derive the monthly payment"""

    AMORTIZED = "amortized"
    FLAT = "flat"


@dataclass
class CreateLoanInput:
    """Creation request as submitted by the loan form (fields may be blank)"""

    applicant_name: Optional[str] = None
    amount: Optional[float] = None
    term_months: Optional[int] = None
    interest_rate: Optional[float] = None


@dataclass(frozen=True)
class LoanApplication:
    """Loan application tracked from submission to decision"""

    id: str
    applicant_name: str
    amount: float
    term_months: int
    interest_rate: float  # annual, 0.08 = 8%
    status: LoanStatus
    created_at: datetime

    @property
    def is_pending(self) -> bool:
        return self.status is LoanStatus.PENDING


@dataclass
class LoanSummary:
    """Aggregate statistics over the current collection"""

    total: int
    pending: int
    approved: int
    rejected: int
    total_approved_amount: float
