"""Summary statistics derived from the loan collection"""

from typing import Iterable

from tredgate_loan.domain.models import LoanApplication, LoanStatus, LoanSummary


def summarize(loans: Iterable[LoanApplication]) -> LoanSummary:
    """
    Count loans per status and total the approved amounts.

    Recomputed from the collection on every call so the counts can never
    drift from the data: pending + approved + rejected == total.
    Pending and rejected amounts are excluded from the approved total.
    """
    counts = {status: 0 for status in LoanStatus}
    total_approved = 0.0

    for loan in loans:
        counts[loan.status] += 1
        if loan.status is LoanStatus.APPROVED:
            total_approved += loan.amount

    return LoanSummary(
        total=sum(counts.values()),
        pending=counts[LoanStatus.PENDING],
        approved=counts[LoanStatus.APPROVED],
        rejected=counts[LoanStatus.REJECTED],
        total_approved_amount=total_approved,
    )
