"""Loan application endpoints - create, list, decide, delete

Domain errors propagate to the handlers registered in api.main:
ValidationError → 422, LoanNotFoundError → 404,
InvalidTransitionError → 409, PersistenceError → 503.
"""

from fastapi import APIRouter, Depends, Response

from tredgate_loan.api.dependencies import get_loan_service
from tredgate_loan.api.v1.schemas import LoanCreateRequest, LoanListResponse, LoanResponse
from tredgate_loan.domain.decisions import Decision
from tredgate_loan.domain.models import LoanApplication
from tredgate_loan.services.loans import LoanService

router = APIRouter()


def _to_response(service: LoanService, loan: LoanApplication) -> LoanResponse:
    return LoanResponse.from_domain(loan, service.monthly_payment(loan))


@router.post("/loans", response_model=LoanResponse, status_code=201)
def create_loan(request_body: LoanCreateRequest, service: LoanService = Depends(get_loan_service)):
    """
    Submit a new loan application.

    Returns the created pending loan, or 422 with the first failing
    business rule as detail.
    """
    loan = service.create(request_body.to_domain())
    return _to_response(service, loan)


@router.get("/loans", response_model=LoanListResponse)
def list_loans(service: LoanService = Depends(get_loan_service)):
    """All loan applications in submission order"""
    return LoanListResponse(loans=[_to_response(service, loan) for loan in service.list()])


@router.get("/loans/{loan_id}", response_model=LoanResponse)
def get_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    return _to_response(service, service.get(loan_id))


@router.post("/loans/{loan_id}/approve", response_model=LoanResponse)
def approve_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    return _to_response(service, service.decide(loan_id, Decision.APPROVE))


@router.post("/loans/{loan_id}/reject", response_model=LoanResponse)
def reject_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    return _to_response(service, service.decide(loan_id, Decision.REJECT))


@router.post("/loans/{loan_id}/auto-decide", response_model=LoanResponse)
def auto_decide_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    """Approve when amount <= 100,000 and term <= 60 months, reject otherwise"""
    return _to_response(service, service.decide(loan_id, Decision.AUTO))


@router.delete("/loans/{loan_id}", status_code=204)
def delete_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    """Remove a loan application whatever its status"""
    service.delete(loan_id)
    return Response(status_code=204)
