"""
Tests for Notification Hub Module

Tests sink registration, ordered broadcast, failure isolation and message
formatting.
"""

import logging
import pytest
from decimal import Decimal
from unittest.mock import Mock, call

from retail_banking.notifications import (
    NotificationHub, NotificationSink, ConsoleSink, MobilePhoneSink,
    LaptopSink, LogSink, format_transaction
)


class RecordingSink(NotificationSink):
    """Sink that appends (name, message) to a shared journal"""

    def __init__(self, name, journal):
        self.name = name
        self.journal = journal

    def update(self, message: str) -> None:
        self.journal.append((self.name, message))

    def __str__(self) -> str:
        return self.name


class FailingSink(NotificationSink):
    def update(self, message: str) -> None:
        raise RuntimeError("device offline")


@pytest.fixture
def hub():
    return NotificationHub()


@pytest.fixture
def journal():
    return []


class TestRegistry:
    """Test register, unregister and listing"""

    def test_register_preserves_order(self, hub, journal):
        """Test sinks are listed 1-based in registration order"""
        a, b, c = (RecordingSink(n, journal) for n in "ABC")
        hub.register(a)
        hub.register(b)
        hub.register(c)

        assert hub.list_sinks() == [(1, a), (2, b), (3, c)]
        assert len(hub) == 3
        assert b in hub

    def test_duplicate_registration_allowed(self, hub, journal):
        """Test no duplicate detection"""
        a = RecordingSink("A", journal)
        hub.register(a)
        hub.register(a)

        hub.broadcast("hello")

        assert journal == [("A", "hello"), ("A", "hello")]

    def test_unregister_removes_first_match(self, hub, journal):
        """Test only the first registration is removed"""
        a = RecordingSink("A", journal)
        b = RecordingSink("B", journal)
        hub.register(a)
        hub.register(b)
        hub.register(a)

        assert hub.unregister(a) is True
        assert hub.list_sinks() == [(1, b), (2, a)]

    def test_unregister_absent_is_noop(self, hub, journal):
        """Test removing an unknown sink changes nothing"""
        a = RecordingSink("A", journal)
        hub.register(a)

        assert hub.unregister(RecordingSink("X", journal)) is False
        assert hub.list_sinks() == [(1, a)]

    def test_describe_sinks(self, hub):
        """Test device listing text"""
        hub.register(MobilePhoneSink())
        hub.register(LaptopSink())

        assert hub.describe_sinks() == ["Device: 1 Mobile phone", "Device: 2 Laptop"]

    def test_clear(self, hub, journal):
        hub.register(RecordingSink("A", journal))
        hub.clear()
        assert len(hub) == 0


class TestBroadcast:
    """Test message delivery"""

    def test_broadcast_in_registration_order(self, hub, journal):
        """Test A, then B, then C receive the message"""
        for name in "ABC":
            hub.register(RecordingSink(name, journal))

        delivered = hub.broadcast("m")

        assert delivered == 3
        assert journal == [("A", "m"), ("B", "m"), ("C", "m")]

    def test_unregister_between_broadcasts(self, hub, journal):
        """Test an unregistered sink misses only later broadcasts"""
        a, b, c = (RecordingSink(n, journal) for n in "ABC")
        for sink in (a, b, c):
            hub.register(sink)

        hub.broadcast("first")
        hub.unregister(b)
        hub.broadcast("second")

        assert journal == [
            ("A", "first"), ("B", "first"), ("C", "first"),
            ("A", "second"), ("C", "second"),
        ]

    def test_broadcast_without_sinks(self, hub):
        """Test broadcasting to nobody is harmless"""
        assert hub.broadcast("nobody listens") == 0

    def test_failing_sink_does_not_stop_delivery(self, hub, journal):
        """Test later sinks still receive the message"""
        hub.register(RecordingSink("A", journal))
        hub.register(FailingSink())
        hub.register(RecordingSink("C", journal))

        delivered = hub.broadcast("m")

        assert delivered == 2
        assert journal == [("A", "m"), ("C", "m")]

    def test_mock_sink_receives_each_message(self, hub):
        """Test sinks are called once per broadcast"""
        sink = Mock(spec=NotificationSink)
        hub.register(sink)

        hub.broadcast("one")
        hub.broadcast("two")

        assert sink.update.call_args_list == [call("one"), call("two")]

    def test_balance_change_formats_and_broadcasts(self, hub, journal):
        """Test the transaction summary entry point"""
        hub.register(RecordingSink("A", journal))

        hub.balance_change("Doe John", "Main", "deposit", Decimal('10'), Decimal('110'))

        assert journal == [("A", "Client: Doe John | Account: Main | Operation: deposit | "
                                 "Amount: 10.00 ₸ | Balance left: 110.00 ₸")]


class TestFormatting:
    """Test message formats"""

    def test_five_field_summary(self):
        message = format_transaction("Doe John", "Main", "withdraw",
                                     Decimal('1234.5'), Decimal('0'))
        assert message == ("Client: Doe John | Account: Main | Operation: withdraw | "
                           "Amount: 1,234.50 ₸ | Balance left: 0.00 ₸")

    def test_six_field_summary(self):
        message = format_transaction("Doe John", "Main", "payment",
                                     Decimal('100'), Decimal('901'), Decimal('1'))
        assert message == ("Client: Doe John | Account: Main | Operation: payment | "
                           "Amount: 100.00 ₸ | Bonus: +1.00 ₸ | Balance left: 901.00 ₸")


class TestSinks:
    """Test reference sink implementations"""

    def test_console_sinks_print(self, capsys):
        MobilePhoneSink().update("hello")
        LaptopSink().update("world")

        out = capsys.readouterr().out
        assert "Mobile phone notification:\nhello" in out
        assert "Laptop notification:\nworld" in out

    def test_sink_names(self):
        assert str(MobilePhoneSink()) == "Mobile phone"
        assert str(LaptopSink()) == "Laptop"
        assert str(ConsoleSink()) == "Console"

    def test_log_sink(self, caplog):
        logger = logging.getLogger("tests.log_sink")
        sink = LogSink(logger)

        with caplog.at_level(logging.INFO, logger="tests.log_sink"):
            sink.update("logged message")

        assert "logged message" in caplog.text
