"""
Loan Agreement Module

Loan agreements are assembled step by step with LoanAgreementBuilder and
frozen once built. LoanAgreementDirector drives a fresh builder with the
bank's standard product presets (personal, mortgage, car, business).
"""

from decimal import Decimal
from datetime import date
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional
import logging
import random

from .config import get_config
from .currency import Numeric, ZERO, to_amount
from .exceptions import InvalidStateError, ValidationError
from .logging_config import log_action

if TYPE_CHECKING:
    from .clients import Client


logger = logging.getLogger("retail_banking.loans")

MAX_INTEREST_RATE = Decimal('100')


def generate_agreement_number(on: Optional[date] = None, prefix: Optional[str] = None) -> str:
    """Format: LOAN-YYYYMMDD-XXXX where XXXX is a random 4-digit number"""
    on = on or date.today()
    prefix = prefix or get_config().agreement_number_prefix
    return f"{prefix}-{on:%Y%m%d}-{random.randint(1000, 9999)}"


@dataclass(frozen=True)
class LoanAgreement:
    """
    Immutable loan agreement.

    Payments are derived from the terms on demand and never stored.
    """
    client: 'Client'
    amount: Decimal                # Principal
    interest_rate: Decimal         # Annual rate in percent, e.g. 7.5
    term_months: int
    agreement_number: str
    start_date: date
    purpose: str = "General purpose"
    insurance_required: bool = False

    def __post_init__(self):
        if self.client is None:
            raise ValidationError("Client cannot be null")
        if self.amount <= ZERO:
            raise ValidationError("Loan amount must be positive")
        if self.interest_rate < ZERO or self.interest_rate > MAX_INTEREST_RATE:
            raise ValidationError("Interest rate must be between 0 and 100")
        if self.term_months <= 0:
            raise ValidationError("Term must be positive")

    @property
    def monthly_rate(self) -> Decimal:
        return self.interest_rate / Decimal('100') / Decimal('12')

    @property
    def monthly_payment(self) -> Decimal:
        """
        Standard amortizing payment: P * r(1+r)^n / ((1+r)^n - 1)

        An interest-free loan is repaid in equal parts of the principal.
        """
        rate = self.monthly_rate
        if rate == ZERO:
            return self.amount / Decimal(self.term_months)
        factor = (Decimal('1') + rate) ** self.term_months
        return self.amount * (rate * factor) / (factor - Decimal('1'))

    @property
    def total_payment(self) -> Decimal:
        return self.monthly_payment * Decimal(self.term_months)

    @property
    def total_interest(self) -> Decimal:
        return self.total_payment - self.amount

    def describe(self) -> str:
        """Multi-line agreement summary"""
        return "\n".join([
            "╔════════════════════════════════════════════════════╗",
            "║          LOAN AGREEMENT DETAILS                    ║",
            "╚════════════════════════════════════════════════════╝",
            f"[DOC] Agreement Number: {self.agreement_number}",
            f"[CLIENT] Client: {self.client.display_name}",
            f"[AMOUNT] Loan Amount: ${self.amount:,.2f}",
            f"[RATE] Interest Rate: {self.interest_rate}%",
            f"[TERM] Term: {self.term_months} months ({self.term_months // 12} years)",
            f"[DATE] Start Date: {self.start_date:%d.%m.%Y}",
            f"[PURPOSE] Purpose: {self.purpose}",
            f"[INSURANCE] Insurance: {'Required' if self.insurance_required else 'Not Required'}",
            "─" * 51,
            f"[PAYMENT] Monthly Payment: ${self.monthly_payment:,.2f}",
            f"[TOTAL] Total Payment: ${self.total_payment:,.2f}",
            f"[INTEREST] Total Interest: ${self.total_interest:,.2f}",
            "═" * 52,
        ])

    def __str__(self) -> str:
        return (f"LoanAgreement{{agreementNumber='{self.agreement_number}', "
                f"client={self.client.display_name}, amount={self.amount}, "
                f"interestRate={self.interest_rate}, termMonths={self.term_months}}}")


class LoanAgreementBuilder:
    """
    Accumulates loan terms and produces a LoanAgreement.

    Each setter validates its own field immediately and returns the builder
    for chaining. Optional fields start with defaults: a generated agreement
    number, today's date, the configured default purpose and no insurance.

    Usage:
        loan = (LoanAgreementBuilder()
                .set_client(client)
                .set_amount(500_000)
                .set_interest_rate(7.5)
                .set_term_months(60)
                .build())
    """

    def __init__(self):
        # Required fields
        self.client: Optional['Client'] = None
        self.amount: Optional[Decimal] = None
        self.interest_rate: Optional[Decimal] = None
        self.term_months: Optional[int] = None

        # Optional fields with default values
        self.agreement_number: str = generate_agreement_number()
        self.start_date: date = date.today()
        self.purpose: str = get_config().default_loan_purpose
        self.insurance_required: bool = False

    def set_client(self, client: 'Client') -> 'LoanAgreementBuilder':
        if client is None:
            raise ValidationError("Client cannot be null")
        self.client = client
        return self

    def set_amount(self, amount: Numeric) -> 'LoanAgreementBuilder':
        amount = to_amount(amount)
        if amount <= ZERO:
            raise ValidationError("Loan amount must be positive")
        self.amount = amount
        return self

    def set_interest_rate(self, interest_rate: Numeric) -> 'LoanAgreementBuilder':
        """Annual rate as a percentage (7.5 means 7.5%)"""
        interest_rate = to_amount(interest_rate)
        if interest_rate < ZERO or interest_rate > MAX_INTEREST_RATE:
            raise ValidationError("Interest rate must be between 0 and 100")
        self.interest_rate = interest_rate
        return self

    def set_term_months(self, term_months: int) -> 'LoanAgreementBuilder':
        if isinstance(term_months, bool) or not isinstance(term_months, int):
            raise ValidationError(f"Term must be a whole number of months, got {term_months!r}")
        if term_months <= 0:
            raise ValidationError("Term must be positive")
        self.term_months = term_months
        return self

    def set_agreement_number(self, agreement_number: str) -> 'LoanAgreementBuilder':
        if not isinstance(agreement_number, str) or not agreement_number.strip():
            raise ValidationError("Agreement number cannot be null or empty")
        self.agreement_number = agreement_number
        return self

    def set_start_date(self, start_date: date) -> 'LoanAgreementBuilder':
        if not isinstance(start_date, date):
            raise ValidationError(f"Start date must be a date, got {start_date!r}")
        self.start_date = start_date
        return self

    def set_purpose(self, purpose: str) -> 'LoanAgreementBuilder':
        if not isinstance(purpose, str) or not purpose.strip():
            raise ValidationError("Purpose cannot be null or empty")
        self.purpose = purpose
        return self

    def set_insurance_required(self, insurance_required: bool) -> 'LoanAgreementBuilder':
        if not isinstance(insurance_required, bool):
            raise ValidationError(f"Insurance flag must be True or False, got {insurance_required!r}")
        self.insurance_required = insurance_required
        return self

    def build(self) -> LoanAgreement:
        """
        Build the agreement.

        Raises:
            InvalidStateError: if a required field was never set
        """
        self._validate_required_fields()
        agreement = LoanAgreement(
            client=self.client,
            amount=self.amount,
            interest_rate=self.interest_rate,
            term_months=self.term_months,
            agreement_number=self.agreement_number,
            start_date=self.start_date,
            purpose=self.purpose,
            insurance_required=self.insurance_required
        )
        log_action(
            logger, "info", f"Loan agreement {agreement.agreement_number} built",
            action="build_loan",
            resource=f"loan:{agreement.agreement_number}",
            extra={
                "client": self.client.display_name,
                "amount": str(self.amount),
                "interest_rate": str(self.interest_rate),
                "term_months": self.term_months,
                "purpose": self.purpose,
                "insurance_required": self.insurance_required
            }
        )
        return agreement

    def _validate_required_fields(self) -> None:
        if self.client is None:
            raise InvalidStateError("Client must be set before building")
        if self.amount is None or self.amount <= ZERO:
            raise InvalidStateError("Loan amount must be set before building")
        if self.interest_rate is None or self.interest_rate < ZERO:
            raise InvalidStateError("Interest rate must be set before building")
        if self.term_months is None or self.term_months <= 0:
            raise InvalidStateError("Term months must be set before building")


BuilderFactory = Callable[[], LoanAgreementBuilder]


class LoanAgreementDirector:
    """
    Named loan presets over the builder.

    Each preset runs on a fresh builder from builder_factory so that every
    agreement gets its own generated agreement number.
    """

    def __init__(self, builder_factory: BuilderFactory = LoanAgreementBuilder):
        self._builder_factory = builder_factory

    def set_builder_factory(self, builder_factory: BuilderFactory) -> None:
        self._builder_factory = builder_factory

    def _preset(self, client: 'Client', amount: Numeric, interest_rate: Numeric,
                term_months: int, purpose: str, insurance_required: bool) -> LoanAgreement:
        return (self._builder_factory()
                .set_client(client)
                .set_amount(amount)
                .set_interest_rate(interest_rate)
                .set_term_months(term_months)
                .set_purpose(purpose)
                .set_insurance_required(insurance_required)
                .build())

    def construct_standard_loan(self, client: 'Client', amount: Numeric) -> LoanAgreement:
        """Personal loan: 7.5%, 60 months, no insurance"""
        return self._preset(client, amount, Decimal('7.5'), 60, "Personal loan", False)

    def construct_mortgage_loan(self, client: 'Client', amount: Numeric) -> LoanAgreement:
        """Mortgage: 6.8%, 360 months, insurance required"""
        return self._preset(client, amount, Decimal('6.8'), 360, "Real Estate Purchase", True)

    def construct_car_loan(self, client: 'Client', amount: Numeric) -> LoanAgreement:
        """Car loan: 8.5%, 60 months, insurance required"""
        return self._preset(client, amount, Decimal('8.5'), 60, "Vehicle Purchase", True)

    def construct_business_loan(self, client: 'Client', amount: Numeric) -> LoanAgreement:
        """Business loan: 9.0%, 120 months, no insurance"""
        return self._preset(client, amount, Decimal('9.0'), 120, "Business Development", False)

    def construct_custom_loan(self, client: 'Client', amount: Numeric, interest_rate: Numeric,
                              term_months: int, purpose: str,
                              insurance_required: bool = False) -> LoanAgreement:
        return self._preset(client, amount, interest_rate, term_months, purpose, insurance_required)
