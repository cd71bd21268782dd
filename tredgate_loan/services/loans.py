"""Loan actions exposed to the presentation layer"""

import logging
from typing import Tuple

from tredgate_loan.domain.decisions import Decision, transition_for
from tredgate_loan.domain.exceptions import ValidationError
from tredgate_loan.domain.models import CreateLoanInput, LoanApplication, LoanSummary, PaymentMethod
from tredgate_loan.domain.payments import monthly_payment
from tredgate_loan.domain.summary import summarize
from tredgate_loan.domain.validation import validate_loan_input
from tredgate_loan.infrastructure.database.repositories import LoanRepository
from tredgate_loan.infrastructure.observability.logging import log_loan_event
from tredgate_loan.infrastructure.observability.metrics import (
    loans_created_counter,
    loans_deleted_counter,
    record_decision,
    validation_failure_counter,
)

logger = logging.getLogger(__name__)


class LoanService:
    """Validates, decides and persists loans through a single repository"""

    def __init__(self, repository: LoanRepository, payment_method: PaymentMethod = PaymentMethod.AMORTIZED):
        self.repository = repository
        self.payment_method = payment_method

    def create(self, data: CreateLoanInput) -> LoanApplication:
        """
        Validate and store a new pending loan.

        Raises:
            ValidationError: first failing business rule; nothing is stored
            PersistenceError: store write failed; nothing is stored
        """
        try:
            valid = validate_loan_input(data)
        except ValidationError as e:
            validation_failure_counter.inc()
            logger.info(f"Loan rejected by validation: {e.message}")
            raise

        loan = self.repository.create(valid)
        loans_created_counter.inc()
        log_loan_event(
            "created",
            loan.id,
            amount=loan.amount,
            term_months=loan.term_months,
            interest_rate=loan.interest_rate,
        )
        return loan

    def decide(self, loan_id: str, decision: Decision) -> LoanApplication:
        """Apply approve / reject / auto-decide to a pending loan"""
        decision = Decision(decision)
        loan = self.repository.apply_transition(loan_id, transition_for(decision))
        record_decision(decision.value, loan.status.value)
        log_loan_event("decided", loan.id, operation=decision.value, status=loan.status.value)
        return loan

    def approve(self, loan_id: str) -> LoanApplication:
        return self.decide(loan_id, Decision.APPROVE)

    def reject(self, loan_id: str) -> LoanApplication:
        return self.decide(loan_id, Decision.REJECT)

    def auto_decide(self, loan_id: str) -> LoanApplication:
        return self.decide(loan_id, Decision.AUTO)

    def delete(self, loan_id: str) -> LoanApplication:
        # Pending-only deletion is left to the caller
        loan = self.repository.delete(loan_id)
        loans_deleted_counter.inc()
        log_loan_event("deleted", loan.id, status=loan.status.value)
        return loan

    def get(self, loan_id: str) -> LoanApplication:
        return self.repository.get(loan_id)

    def list(self) -> Tuple[LoanApplication, ...]:
        return self.repository.list()

    def summarize(self) -> LoanSummary:
        return summarize(self.repository.list())

    def monthly_payment(self, loan: LoanApplication) -> float:
        return monthly_payment(loan.amount, loan.term_months, loan.interest_rate, self.payment_method)
