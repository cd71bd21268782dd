"""Monthly payment calculation for loan applications"""

import math
from decimal import Decimal, ROUND_HALF_UP

from tredgate_loan.domain.models import PaymentMethod


def amortized_payment(amount: float, term_months: int, interest_rate: float) -> float:
    """
    Fixed monthly payment that fully repays principal plus interest.

    Standard annuity formula with the annual rate spread over 12 periods:
        r = interest_rate / 12
        payment = amount * r * (1 + r)^n / ((1 + r)^n - 1)

    Evaluated as amount * r / (1 - (1 + r)^-n) through expm1/log1p, which
    stays finite for tiny rates (→ amount / n) and very long terms (→ amount * r).
    A zero rate degenerates to an even split of the principal.

    Example:
        50000 over 24 months at 8% p.a. → ~2261.36
    """
    monthly_rate = interest_rate / 12
    if monthly_rate == 0:
        return amount / term_months

    return amount * monthly_rate / -math.expm1(-term_months * math.log1p(monthly_rate))


def flat_rate_payment(amount: float, term_months: int, interest_rate: float) -> float:
    """
    Monthly payment with one year's interest charged flat on the principal.

    Example:
        (50000 * 1.08) / 24 = 2250
        (10000 * 1.1) / 10 = 1100
    """
    return amount * (1 + interest_rate) / term_months


_CALCULATORS = {
    PaymentMethod.AMORTIZED: amortized_payment,
    PaymentMethod.FLAT: flat_rate_payment,
}


def monthly_payment(
    amount: float,
    term_months: int,
    interest_rate: float,
    method: PaymentMethod = PaymentMethod.AMORTIZED,
) -> float:
    """Dispatch to the calculator for the given method (unrounded result)"""
    return _CALCULATORS[PaymentMethod(method)](amount, term_months, interest_rate)


def round_currency(value: float) -> float:
    """Round half-up to whole cents for display"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
