"""
Tests for configuration and logging setup
"""

import json
import logging
import pytest
from decimal import Decimal

from retail_banking import config as config_module
from retail_banking.config import RetailBankingConfig, get_config, reload_config
from retail_banking.interest import InterestStrategy
from retail_banking.logging_config import JSONFormatter, setup_logging, log_action


@pytest.fixture
def restore_config():
    yield
    reload_config()


class TestConfig:
    """Test pydantic-settings configuration"""

    def test_defaults(self):
        settings = RetailBankingConfig()
        assert settings.log_level == "INFO"
        assert settings.currency_symbol == "₸"
        assert settings.base_bonus_percentage == "1.0"
        assert settings.default_loan_purpose == "General purpose"
        assert settings.agreement_number_prefix == "LOAN"

    def test_environment_override(self, restore_config, monkeypatch):
        monkeypatch.setenv("RETAIL_BANKING_SAVINGS_INTEREST_RATE", "0.04")
        monkeypatch.setenv("RETAIL_BANKING_LOG_FORMAT", "text")

        settings = reload_config()

        assert settings is get_config()
        assert config_module.config is settings
        assert settings.log_format == "text"
        assert InterestStrategy.SAVINGS.rate == Decimal('0.04')


class TestLogging:
    """Test structured logging helpers"""

    def test_json_formatter(self):
        record = logging.LogRecord("retail_banking.accounts", logging.INFO, __file__, 1,
                                   "deposit accepted", (), None)
        record.action = "deposit"
        record.extra = {"amount": "10"}

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "deposit accepted"
        assert entry["action"] == "deposit"
        assert entry["extra"] == {"amount": "10"}
        assert "correlation_id" not in entry

    def test_setup_logging_replaces_handlers(self):
        logger = setup_logging("DEBUG", logger_name="retail_banking.test_setup", fmt="json")
        logger = setup_logging("WARNING", logger_name="retail_banking.test_setup", fmt="text")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_log_action_attaches_fields(self):
        logger = logging.getLogger("retail_banking.test_log_action")
        logger.setLevel(logging.INFO)
        records = []

        class Collector(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = Collector()
        logger.addHandler(handler)
        try:
            log_action(logger, "info", "paid", action="payment", resource="account:1",
                       correlation_id="abc", extra={"amount": "5"})
            log_action(logger, "debug", "suppressed")
        finally:
            logger.removeHandler(handler)

        assert len(records) == 1
        assert records[0].action == "payment"
        assert records[0].resource == "account:1"
        assert records[0].correlation_id == "abc"
        assert records[0].extra == {"amount": "5"}
