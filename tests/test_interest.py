"""
Test suite for interest module

Tests built-in strategies, strategy swapping and the calculator's
missing-strategy error.
"""

import pytest
from decimal import Decimal

from retail_banking.accounts import Account, AccountType
from retail_banking.clients import Client
from retail_banking.exceptions import InvalidStateError, ValidationError
from retail_banking.interest import InterestCalculator, InterestStrategy
from retail_banking.notifications import NotificationHub


@pytest.fixture
def account():
    client = Client("Sabulla", "Diana", "diana@bank.kz", "+77009890450", hub=NotificationHub())
    account = Account(client, AccountType.SAVINGS, "Dream account")
    account.deposit(Decimal('120000'))
    return account


class TestInterestStrategy:
    """Test built-in strategies"""

    def test_rates(self):
        """Test the configured annual rates"""
        assert InterestStrategy.SAVINGS.rate == Decimal('0.03')
        assert InterestStrategy.VIP.rate == Decimal('0.05')
        assert InterestStrategy.LOAN.rate == Decimal('0.07')

    @pytest.mark.parametrize("strategy,expected", [
        (InterestStrategy.SAVINGS, Decimal('3600')),
        (InterestStrategy.VIP, Decimal('6000')),
        (InterestStrategy.LOAN, Decimal('8400')),
    ])
    def test_calculate(self, account, strategy, expected):
        """Test interest is balance times rate"""
        assert strategy.calculate(account) == expected

    def test_calculation_does_not_mutate(self, account):
        """Test calculating interest leaves the balance alone"""
        InterestStrategy.LOAN.calculate(account)
        assert account.balance == Decimal('120000')


class TestInterestCalculator:
    """Test the strategy context"""

    def test_execute_without_strategy(self, account):
        """Test a missing strategy is an invalid-state error"""
        calculator = InterestCalculator()
        with pytest.raises(InvalidStateError, match="not set"):
            calculator.execute(account)

    def test_execute_savings(self, account):
        """Test execute returns exactly balance x 0.03"""
        calculator = InterestCalculator()
        calculator.set_strategy(InterestStrategy.SAVINGS)

        assert calculator.execute(account) == account.balance * Decimal('0.03')

    def test_swap_strategy(self, account):
        """Test the active strategy can be replaced at any time"""
        calculator = InterestCalculator(InterestStrategy.SAVINGS)
        assert calculator.execute(account) == Decimal('3600')

        calculator.set_strategy(InterestStrategy.VIP)
        assert calculator.strategy is InterestStrategy.VIP
        assert calculator.execute(account) == Decimal('6000')

    def test_function_strategy(self, account):
        """Test any callable can serve as a strategy"""
        calculator = InterestCalculator(lambda acc: acc.balance / 100)
        assert calculator.execute(account) == Decimal('1200')

    def test_non_callable_strategy_rejected(self):
        """Test strategies must be callable"""
        with pytest.raises(ValidationError):
            InterestCalculator().set_strategy(0.03)

    def test_zero_balance(self):
        """Test an empty account earns nothing"""
        client = Client("Ivanov", "Ivan", "ivan@bank.kz", "+77001234567", hub=NotificationHub())
        empty = Account(client, AccountType.DEPOSIT, "Empty")
        assert InterestCalculator(InterestStrategy.VIP).execute(empty) == Decimal('0')
