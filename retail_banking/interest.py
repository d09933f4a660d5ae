"""
Interest Module

Interest is computed by a swappable strategy applied to an account's
current balance. Built-in strategies apply a flat annual rate; any callable
``strategy(account) -> Decimal`` can be used in their place. Calculating
interest never changes the account; crediting it is up to the caller.
"""

from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Union
import logging

from .config import get_config
from .currency import to_amount
from .exceptions import InvalidStateError, ValidationError


logger = logging.getLogger("retail_banking.interest")


class InterestStrategy(Enum):
    """Built-in flat annual rate strategies"""
    SAVINGS = "savings"  # 3% annual
    VIP = "vip"          # 5% annual
    LOAN = "loan"        # 7% annual

    @property
    def rate(self) -> Decimal:
        """Annual rate as a fraction, e.g. Decimal('0.03')"""
        settings = get_config()
        return to_amount(getattr(settings, f"{self.value}_interest_rate"))

    def calculate(self, account) -> Decimal:
        return account.balance * self.rate

    __call__ = calculate


StrategyLike = Union[InterestStrategy, Callable[[object], Decimal]]


class InterestCalculator:
    """Holds the active strategy and runs it against accounts"""

    def __init__(self, strategy: Optional[StrategyLike] = None):
        self._strategy: Optional[StrategyLike] = None
        if strategy is not None:
            self.set_strategy(strategy)

    @property
    def strategy(self) -> Optional[StrategyLike]:
        return self._strategy

    def set_strategy(self, strategy: StrategyLike) -> None:
        if not callable(strategy):
            raise ValidationError(f"Interest strategy must be callable, got {strategy!r}")
        self._strategy = strategy

    def execute(self, account) -> Decimal:
        """
        Calculate interest for account with the active strategy.

        Raises:
            InvalidStateError: if no strategy has been set
        """
        if self._strategy is None:
            raise InvalidStateError("Interest strategy is not set!")
        interest = to_amount(self._strategy(account))
        logger.debug(f"Interest {interest} calculated with {self._strategy!r} on balance {account.balance}")
        return interest
