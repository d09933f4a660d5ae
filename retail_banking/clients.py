"""
Client Module

Bank customers: identity, owned accounts and the devices they receive
notifications on. Devices are registered with the client's NotificationHub.
"""

from itertools import count
from threading import Lock
from typing import TYPE_CHECKING, List, Optional
import logging

from .exceptions import ValidationError
from .notifications import NotificationHub, NotificationSink

if TYPE_CHECKING:
    from .accounts import Account


logger = logging.getLogger("retail_banking.clients")

_client_ids = count(1)
_client_ids_lock = Lock()


def _next_client_id() -> int:
    with _client_ids_lock:
        return next(_client_ids)


class Client:
    """
    Customer with immutable identity and an ordered list of accounts
    """

    def __init__(self, last_name: str, first_name: str, email: str, phone: str,
                 hub: Optional[NotificationHub] = None):
        self._client_id = _next_client_id()
        self._last_name = last_name
        self._first_name = first_name
        self._email = email
        self._phone = phone
        self._accounts: List['Account'] = []
        self.hub = hub

    @property
    def client_id(self) -> int:
        return self._client_id

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def display_name(self) -> str:
        """Surname followed by given name"""
        return f"{self._last_name} {self._first_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def phone(self) -> str:
        return self._phone

    @property
    def accounts(self) -> List['Account']:
        """Owned accounts in the order they were added (copy)"""
        return list(self._accounts)

    def add_account(self, account: 'Account') -> None:
        self._accounts.append(account)

    def remove_account(self, account: 'Account') -> bool:
        """Remove account if owned. Returns False when there was nothing to remove."""
        if not self._accounts:
            logger.info(f"No account to delete for {self.display_name}")
            return False
        try:
            self._accounts.remove(account)
        except ValueError:
            return False
        return True

    # Devices

    def _require_hub(self) -> NotificationHub:
        if self.hub is None:
            raise ValidationError(f"Client {self.display_name} is not connected to a notification hub")
        return self.hub

    def add_device(self, device: NotificationSink) -> None:
        self._require_hub().register(device)

    def remove_device(self, device: NotificationSink) -> bool:
        return self._require_hub().unregister(device)

    def list_devices(self) -> List[str]:
        return self._require_hub().describe_sinks()

    # Rendering

    def describe(self) -> str:
        return "\n".join([
            "──────────────── Client Info ────────────────",
            f"ID: {self._client_id}",
            f"Name: {self.display_name}",
            f"Email: {self._email}",
            f"Phone: {self._phone}",
            "─" * 45,
        ])

    def describe_accounts(self) -> str:
        if not self._accounts:
            return f"[ACCOUNTS] No accounts yet for {self.display_name}."
        lines = [f"[ACCOUNTS] Accounts for {self.display_name}:"]
        lines.extend(account.describe() for account in self._accounts)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Client(id={self._client_id}, name={self.display_name!r})"
