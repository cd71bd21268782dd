"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Creation request broke a business rule; carries one human-readable message"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTransitionError(DomainException):
    """Status transition attempted on a loan that is no longer pending"""

    def __init__(self, loan_id: str, current_status: str, operation: str):
        super().__init__(f"Cannot {operation} loan {loan_id}: status is already {current_status}")
        self.loan_id = loan_id
        self.current_status = current_status
        self.operation = operation


class LoanNotFoundError(DomainException):
    """No loan with the given id exists in the collection"""

    def __init__(self, loan_id: str):
        super().__init__(f"Loan {loan_id} not found")
        self.loan_id = loan_id


class PersistenceError(DomainException):
    """Durable store could not be read or written, or held malformed data"""

    pass
