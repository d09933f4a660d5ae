"""
Account Management Module

Bank accounts owned by a client. Balances change only through deposit,
withdraw and pay; every accepted change is broadcast through the
NotificationHub. The bonus percentage applied to payments is fixed when
the account is opened.
"""

from decimal import Decimal
from dataclasses import dataclass
from itertools import count
from threading import Lock
from typing import TYPE_CHECKING, Optional
import logging

from .account_types import AccountType
from .bonus import BonusChain
from .config import get_config
from .currency import Numeric, ZERO, to_amount, format_amount
from .exceptions import ValidationError
from .logging_config import log_action
from .notifications import NotificationHub, format_transaction

if TYPE_CHECKING:
    from .clients import Client


logger = logging.getLogger("retail_banking.accounts")

_account_ids = count(1)
_account_ids_lock = Lock()


def _next_account_id() -> int:
    with _account_ids_lock:
        return next(_account_ids)


@dataclass(frozen=True)
class TransactionResult:
    """
    Outcome of a balance operation.

    Refusals (insufficient funds) and ignored non-positive amounts are not
    errors: accepted is False, the balance is unchanged and nothing was
    broadcast.
    """
    operation: str
    amount: Decimal
    accepted: bool
    balance: Decimal
    bonus_amount: Optional[Decimal] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.accepted


class Account:
    """
    Savings, deposit or credit account.

    Opening an account assigns the next process-wide id, starts the balance
    at 0 and the bonus at the configured base (1.0), then adds the bonus
    chain's contribution evaluated against the new, empty account.
    """

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    PAYMENT = "payment"

    def __init__(
        self,
        client: 'Client',
        account_type: AccountType,
        name: str,
        hub: Optional[NotificationHub] = None,
        bonus_chain: Optional[BonusChain] = None
    ):
        if client is None:
            raise ValidationError("Account requires a client")
        if not isinstance(account_type, AccountType):
            raise ValidationError(f"Unsupported account type: {account_type!r}")

        hub = hub if hub is not None else getattr(client, "hub", None)
        if hub is None:
            raise ValidationError("Account requires a notification hub")

        self._account_id = _next_account_id()
        self._client = client
        self._account_type = account_type
        self._name = name
        self._hub = hub
        self._balance = ZERO
        self._bonus = to_amount(get_config().base_bonus_percentage)

        self._bonus_chain = bonus_chain or BonusChain.for_account_type(account_type)
        self._bonus += Decimal(self._bonus_chain.additional_bonus(self))

        logger.debug(
            f"Opened {account_type.description} account {self._account_id} "
            f"'{name}' for {client.display_name} with bonus {self._bonus}%"
        )

    @property
    def account_id(self) -> int:
        return self._account_id

    @property
    def client(self) -> 'Client':
        return self._client

    @property
    def client_name(self) -> str:
        return self._client.display_name

    @property
    def account_type(self) -> AccountType:
        return self._account_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def bonus_percentage(self) -> Decimal:
        return self._bonus

    @property
    def hub(self) -> NotificationHub:
        return self._hub

    def deposit(self, amount: Numeric) -> TransactionResult:
        """
        Add amount to the balance and broadcast the change.

        Non-positive amounts are ignored.
        """
        amount = to_amount(amount)
        if amount <= ZERO:
            return self._ignored(self.DEPOSIT, amount)

        self._commit(self.DEPOSIT, amount, self._balance + amount)
        return TransactionResult(self.DEPOSIT, amount, True, self._balance)

    def withdraw(self, amount: Numeric) -> TransactionResult:
        """
        Remove amount from the balance if funds allow.

        Insufficient funds is refused, not raised.
        """
        amount = to_amount(amount)
        if amount <= ZERO:
            return self._ignored(self.WITHDRAW, amount)

        if self._balance < amount:
            return self._refused(self.WITHDRAW, amount, "Insufficient funds for withdrawal.")

        self._commit(self.WITHDRAW, amount, self._balance - amount)
        return TransactionResult(self.WITHDRAW, amount, True, self._balance)

    def pay(self, amount: Numeric) -> TransactionResult:
        """
        Pay amount out of the balance and credit the payment bonus.

        bonus_amount = amount * bonus_percentage / 100, so the balance
        becomes balance - amount + bonus_amount.
        """
        amount = to_amount(amount)
        if amount <= ZERO:
            return self._ignored(self.PAYMENT, amount)

        if self._balance < amount:
            return self._refused(self.PAYMENT, amount, "Insufficient funds for payment.")

        bonus_amount = amount * self._bonus / Decimal('100')
        self._commit(self.PAYMENT, amount, self._balance - amount + bonus_amount, bonus_amount)
        return TransactionResult(self.PAYMENT, amount, True, self._balance,
                                 bonus_amount=bonus_amount)

    def describe(self) -> str:
        """Multi-line account summary"""
        settings = get_config()
        rule = "─" * 46
        return "\n".join([
            "──────────────── Account Info ────────────────",
            f"Client: {self.client_name}",
            f"ID: {self._account_id}",
            f"Type: {self._account_type.description}",
            f"Name: {self._name}",
            f"Balance: {format_amount(self._balance, settings.currency_symbol, settings.amount_precision)}",
            f"Bonus: {self._bonus:.1f}%",
            rule,
        ])

    def _commit(self, operation: str, amount: Decimal, new_balance: Decimal,
                bonus_amount: Optional[Decimal] = None) -> None:
        # Message is built first so a formatting failure leaves the balance untouched
        message = format_transaction(self.client_name, self._name, operation,
                                     amount, new_balance, bonus_amount)
        self._balance = new_balance
        self._hub.broadcast(message)
        self._log_accepted(operation, amount, bonus_amount)

    def _ignored(self, operation: str, amount: Decimal) -> TransactionResult:
        logger.debug(f"Ignored {operation} of non-positive amount {amount} on account {self._account_id}")
        return TransactionResult(operation, amount, False, self._balance)

    def _refused(self, operation: str, amount: Decimal, message: str) -> TransactionResult:
        log_action(
            logger, "warning", message,
            action=operation,
            resource=f"account:{self._account_id}",
            extra={"amount": str(amount), "balance": str(self._balance)}
        )
        return TransactionResult(operation, amount, False, self._balance, message=message)

    def _log_accepted(self, operation: str, amount: Decimal,
                      bonus_amount: Optional[Decimal] = None) -> None:
        extra = {"amount": str(amount), "balance": str(self._balance)}
        if bonus_amount is not None:
            extra["bonus_amount"] = str(bonus_amount)
        log_action(
            logger, "info", f"{operation} accepted on account {self._account_id}",
            action=operation,
            resource=f"account:{self._account_id}",
            extra=extra
        )

    def __repr__(self) -> str:
        return (f"Account(id={self._account_id}, type={self._account_type.name}, "
                f"name={self._name!r}, balance={self._balance})")
