"""
Settlement exception hierarchy.

All domain errors inherit from SettlementError. They are terminal: callers
surface them directly instead of retrying. Database errors are never wrapped
in these classes.
"""


class SettlementError(Exception):
    """Base exception for all settlement errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConflictError(SettlementError):
    """Raised when the settlement state forbids the operation (already finalized)"""
    pass


class ForbiddenError(SettlementError):
    """Raised when the caller lacks the privilege or household scope"""
    pass


class NotFoundError(SettlementError):
    """Raised when a settlement is not visible in the caller's household"""
    pass
