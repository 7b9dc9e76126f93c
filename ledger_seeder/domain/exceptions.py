"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Run request or template input is malformed or out of range"""

    pass


class ResolutionError(DomainException):
    """Category or account identifier could not be resolved for an item"""

    def __init__(self, payee: str, reason: str):
        super().__init__(f"{payee}: {reason}")
        self.payee = payee
        self.reason = reason


class RemoteError(DomainException):
    """Ledger API returned an error, was unreachable, or sent malformed data"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(RemoteError):
    """Ledger API rejected the credentials"""

    pass
