"""Account type enumeration shared by accounts and bonus rules."""

from enum import Enum


class AccountType(Enum):
    """Banking product types"""
    SAVINGS = "savings"
    DEPOSIT = "deposit"
    CREDIT = "credit"

    @property
    def description(self) -> str:
        return self.value.capitalize()
