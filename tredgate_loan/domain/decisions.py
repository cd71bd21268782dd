"""Decision engine - status transitions and the auto-decide rule"""

from dataclasses import replace
from enum import Enum
from typing import Callable, Dict

from tredgate_loan.domain.models import LoanApplication, LoanStatus
from tredgate_loan.domain.exceptions import InvalidTransitionError

# Auto-approval ceilings (inclusive)
AUTO_APPROVE_MAX_AMOUNT = 100_000
AUTO_APPROVE_MAX_TERM_MONTHS = 60

Transition = Callable[[LoanApplication], LoanApplication]


class Decision(str, Enum):
    """Operations a caller can request on a pending loan"""

    APPROVE = "approve"
    REJECT = "reject"
    AUTO = "auto_decide"


def should_auto_approve(amount: float, term_months: int) -> bool:
    """
    Rule-based decision for auto-decide.

    Approve when amount <= 100,000 AND term <= 60 months; reject otherwise.
    Both bounds are inclusive: 100000/60 approves, 100001/60 and 100000/61 reject.
    """
    return amount <= AUTO_APPROVE_MAX_AMOUNT and term_months <= AUTO_APPROVE_MAX_TERM_MONTHS


def _transition(loan: LoanApplication, target: LoanStatus, operation: str) -> LoanApplication:
    # approved and rejected are terminal; only pending loans move
    if not loan.is_pending:
        raise InvalidTransitionError(loan.id, loan.status.value, operation)
    return replace(loan, status=target)


def approve(loan: LoanApplication) -> LoanApplication:
    """pending → approved"""
    return _transition(loan, LoanStatus.APPROVED, Decision.APPROVE.value)


def reject(loan: LoanApplication) -> LoanApplication:
    """pending → rejected"""
    return _transition(loan, LoanStatus.REJECTED, Decision.REJECT.value)


def auto_decide(loan: LoanApplication) -> LoanApplication:
    """pending → approved or rejected according to should_auto_approve"""
    target = (
        LoanStatus.APPROVED
        if should_auto_approve(loan.amount, loan.term_months)
        else LoanStatus.REJECTED
    )
    return _transition(loan, target, Decision.AUTO.value)


_TRANSITIONS: Dict[Decision, Transition] = {
    Decision.APPROVE: approve,
    Decision.REJECT: reject,
    Decision.AUTO: auto_decide,
}


def transition_for(decision: Decision) -> Transition:
    """Look up the transition function for a requested decision"""
    return _TRANSITIONS[Decision(decision)]
