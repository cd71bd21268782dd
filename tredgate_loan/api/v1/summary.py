"""GET /v1/summary - Aggregate loan statistics"""

from fastapi import APIRouter, Depends

from tredgate_loan.api.dependencies import get_loan_service
from tredgate_loan.api.v1.schemas import SummaryResponse
from tredgate_loan.services.loans import LoanService

router = APIRouter()


@router.get("/summary", response_model=SummaryResponse)
def get_summary(service: LoanService = Depends(get_loan_service)):
    """
    Counts per status plus the total amount of approved loans.

    Returns:
        total, pending, approved, rejected, totalApprovedAmount
    """
    return SummaryResponse.from_domain(service.summarize())
