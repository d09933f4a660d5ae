"""
Monetary Amount Helpers

Balances, rates and payments are Decimal throughout. NEVER uses float for
stored monetary values; floats passed in by callers are converted via str().
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Optional, Union

from .exceptions import ValidationError

# Set global decimal context for financial precision
getcontext().prec = 28

Numeric = Union[Decimal, int, float, str]

ZERO = Decimal('0')


def to_amount(value: Numeric) -> Decimal:
    """
    Coerce a numeric value to Decimal.
    
    Args:
        value: Decimal, int, float or numeric string
        
    Returns:
        Decimal representation of value
        
    Raises:
        ValidationError: if value is not numeric, or is NaN or infinite
    """
    if isinstance(value, bool):
        raise ValidationError(f"Not a monetary amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"Not a monetary amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Amount must be a finite number: {value!r}")
    return amount


def format_amount(amount: Decimal, symbol: Optional[str] = None, precision: int = 2) -> str:
    """Format for display, e.g. '1,250.50 ₸'. Rounding applies to display only."""
    quantum = Decimal('0.1') ** precision
    rounded = to_amount(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{precision}f}"
    if symbol:
        return f"{text} {symbol}"
    return text
