"""
Banking Errors

Validation errors are the caller's fault and are raised immediately.
Invalid-state errors signal an operation invoked before its preconditions
were established. Insufficient funds is not an error: see TransactionResult.
"""


class BankingError(Exception):
    """Base class for all retail banking errors"""


class ValidationError(BankingError, ValueError):
    """An argument was rejected (null client, out-of-range rate, unknown role...)"""


class InvalidStateError(BankingError, RuntimeError):
    """An operation was invoked before the object was ready for it"""
