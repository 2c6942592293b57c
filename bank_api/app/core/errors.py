class BankError(Exception):
    """Base class for failures reported by the account store."""


class AccountNotFoundError(BankError):
    """Raised when no account matches the requested id or number."""


class InvalidArgumentError(BankError, ValueError):
    """Raised when an input is malformed or out of range."""


class ConflictError(BankError):
    """Raised when a unique constraint keeps rejecting a new account."""


class InsufficientFundsError(BankError):
    """Raised when a transfer would drop the source balance below zero."""


class UnavailableError(BankError):
    """Raised when the database cannot be reached or a lock wait times out."""
