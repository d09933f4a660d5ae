"""
Notification Hub Module

Broadcasts transaction summaries to every registered sink (mobile phone,
laptop, log...) using the Observer pattern. One hub is created by the
composition root and handed to every account and client that needs it.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple
import logging
from threading import RLock

from .config import get_config
from .currency import format_amount


class NotificationSink(ABC):
    """Anything capable of receiving a broadcast text message"""

    @abstractmethod
    def update(self, message: str) -> None:
        """Receive one message. Return value and failures are ignored by the hub."""
        pass


class ConsoleSink(NotificationSink):
    """Sink that prints each message under a device heading"""

    label = "Console"

    def update(self, message: str) -> None:
        print(f"{self.label} notification:\n{message}")

    def __str__(self) -> str:
        return self.label


class MobilePhoneSink(ConsoleSink):
    """Mobile phone device"""

    label = "Mobile phone"


class LaptopSink(ConsoleSink):
    """Laptop device"""

    label = "Laptop"


class LogSink(NotificationSink):
    """Routes notifications into the logging system instead of the terminal"""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("retail_banking.notifications.sink")
        self.level = level

    def update(self, message: str) -> None:
        self.logger.log(self.level, message)

    def __str__(self) -> str:
        return f"Log ({self.logger.name})"


def format_transaction(client_name: str, account_name: str, operation: str,
                       amount: Decimal, balance: Decimal,
                       bonus_amount: Optional[Decimal] = None) -> str:
    """
    Build the one-line transaction summary sent to sinks.

    The bonus field is only present for payments.
    """
    settings = get_config()
    symbol = settings.currency_symbol
    precision = settings.amount_precision

    fields = [
        f"Client: {client_name}",
        f"Account: {account_name}",
        f"Operation: {operation}",
        f"Amount: {format_amount(amount, symbol, precision)}",
    ]
    if bonus_amount is not None:
        fields.append(f"Bonus: +{format_amount(bonus_amount, symbol, precision)}")
    fields.append(f"Balance left: {format_amount(balance, symbol, precision)}")
    return " | ".join(fields)


class NotificationHub:
    """
    Ordered registry of sinks with synchronous broadcast.

    Registration order is delivery order. The same sink may be registered
    more than once and then receives each message once per registration.
    """

    def __init__(self):
        self._sinks: List[NotificationSink] = []
        self._lock = RLock()  # Thread-safe access
        self.logger = logging.getLogger("retail_banking.notifications")

    def register(self, sink: NotificationSink) -> None:
        """Append a sink to the registry"""
        with self._lock:
            self._sinks.append(sink)
            self.logger.debug(f"Registered sink {sink} at position {len(self._sinks)}")

    def unregister(self, sink: NotificationSink) -> bool:
        """Remove the first registration of sink. Returns False if it was not registered."""
        with self._lock:
            try:
                self._sinks.remove(sink)
            except ValueError:
                self.logger.debug(f"Sink {sink} was not registered")
                return False
            self.logger.debug(f"Unregistered sink {sink}")
            return True

    def list_sinks(self) -> List[Tuple[int, NotificationSink]]:
        """1-based enumeration of registered sinks in registration order"""
        with self._lock:
            return list(enumerate(self._sinks, start=1))

    def describe_sinks(self) -> List[str]:
        """Human-readable listing, one line per registered sink"""
        return [f"Device: {position} {sink}" for position, sink in self.list_sinks()]

    def broadcast(self, message: str) -> int:
        """
        Deliver message to every registered sink in registration order.

        A failing sink is logged and skipped; later sinks still receive the
        message.

        Returns:
            Number of sinks that accepted the message without raising
        """
        delivered = 0
        with self._lock:
            self.logger.debug(f"Broadcasting to {len(self._sinks)} sink(s): {message}")
            for sink in list(self._sinks):
                try:
                    sink.update(message)
                    delivered += 1
                except Exception as e:
                    self.logger.error(f"Error delivering notification to sink {sink}: {e}")
        return delivered

    def balance_change(self, client_name: str, account_name: str, operation: str,
                       amount: Decimal, balance: Decimal,
                       bonus_amount: Optional[Decimal] = None) -> int:
        """Format a transaction summary and broadcast it"""
        message = format_transaction(client_name, account_name, operation,
                                     amount, balance, bonus_amount)
        return self.broadcast(message)

    def clear(self) -> None:
        """Remove all sinks"""
        with self._lock:
            self._sinks.clear()
            self.logger.info("All notification sinks cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sinks)

    def __contains__(self, sink: NotificationSink) -> bool:
        with self._lock:
            return sink in self._sinks
