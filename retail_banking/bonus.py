"""
Bonus Composition Module

An account's additional bonus percentage is the sum of a list of bonus
rules. Each rule is a plain callable ``rule(account) -> int`` that inspects
an account snapshot (``account_type`` and ``balance``). The base rule always
contributes 0; type-specific rules are layered on top of it.

The chain is evaluated once, when the account is opened, and the result is
added to the account's base bonus. At that moment the balance is still 0,
so the balance thresholds below never contribute for accounts opened the
normal way.
"""

from decimal import Decimal
from typing import Callable, Iterable, List, Tuple

from .account_types import AccountType


BonusRule = Callable[[object], int]

# (exclusive lower bound, contribution), highest bound first
SAVINGS_BONUS_TIERS: Tuple[Tuple[Decimal, int], ...] = (
    (Decimal('100000'), 2),
    (Decimal('50000'), 1),
)

DEPOSIT_BONUS_TIERS: Tuple[Tuple[Decimal, int], ...] = (
    (Decimal('500000'), 2),
    (Decimal('250000'), 1),
)


def _tiered_contribution(balance: Decimal, tiers: Tuple[Tuple[Decimal, int], ...]) -> int:
    for threshold, contribution in tiers:
        if balance > threshold:
            return contribution
    return 0


def base_bonus(account) -> int:
    """Undecorated bonus calculator"""
    return 0


def savings_balance_bonus(account) -> int:
    """+2 above 100,000, +1 above 50,000. Savings accounts only."""
    if account.account_type != AccountType.SAVINGS:
        return 0
    return _tiered_contribution(account.balance, SAVINGS_BONUS_TIERS)


def deposit_balance_bonus(account) -> int:
    """+2 above 500,000, +1 above 250,000. Deposit accounts only."""
    if account.account_type != AccountType.DEPOSIT:
        return 0
    return _tiered_contribution(account.balance, DEPOSIT_BONUS_TIERS)


# Rule wired around the base calculator for each account type
TYPE_BONUS_RULES = {
    AccountType.SAVINGS: savings_balance_bonus,
    AccountType.DEPOSIT: deposit_balance_bonus,
}


class BonusChain:
    """
    Ordered composition of bonus rules, summed on evaluation.

    Chains are immutable; ``wrap`` returns a new chain with one more rule.
    """

    def __init__(self, rules: Iterable[BonusRule] = ()):
        self._rules: Tuple[BonusRule, ...] = (base_bonus,) + tuple(rules)

    @property
    def rules(self) -> List[BonusRule]:
        return list(self._rules)

    def wrap(self, rule: BonusRule) -> 'BonusChain':
        """Return a new chain with rule layered on top of this one"""
        return BonusChain(self._rules[1:] + (rule,))

    def additional_bonus(self, account) -> int:
        """Sum of every rule's contribution for this account snapshot"""
        return sum(rule(account) for rule in self._rules)

    __call__ = additional_bonus

    @classmethod
    def for_account_type(cls, account_type: AccountType) -> 'BonusChain':
        """Base calculator plus the single rule matching the account type"""
        chain = cls()
        rule = TYPE_BONUS_RULES.get(account_type)
        if rule is not None:
            chain = chain.wrap(rule)
        return chain

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        names = ", ".join(getattr(rule, "__name__", repr(rule)) for rule in self._rules)
        return f"BonusChain([{names}])"
