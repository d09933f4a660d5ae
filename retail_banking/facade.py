"""
Banking Facade Module

Single entry point sequencing calls into accounts, interest, loans,
reports and notifications for simple front-ends.
"""

from decimal import Decimal
from typing import Optional
import logging
import uuid

from .accounts import Account, TransactionResult
from .clients import Client
from .config import get_config
from .currency import Numeric
from .interest import InterestCalculator, StrategyLike
from .loans import LoanAgreement, LoanAgreementBuilder
from .logging_config import log_action
from .notifications import NotificationHub
from .reports import ReportFactory


logger = logging.getLogger("retail_banking.facade")


class BankingFacade:
    """Unified interface to the banking subsystems"""

    def __init__(self, hub: NotificationHub, report_factory: Optional[ReportFactory] = None):
        self.hub = hub
        self.report_factory = report_factory or ReportFactory()

    def transfer(self, source: Account, target: Account, amount: Numeric) -> TransactionResult:
        """
        Move amount from source to target.

        The target is credited only if the source withdrawal was accepted.

        Returns:
            The withdrawal result
        """
        correlation_id = str(uuid.uuid4())
        withdrawal = source.withdraw(amount)
        if withdrawal.accepted:
            target.deposit(withdrawal.amount)

        log_action(
            logger, "info" if withdrawal.accepted else "warning",
            f"Transfer {'completed' if withdrawal.accepted else 'refused'}",
            action="transfer",
            resource=f"account:{source.account_id}->account:{target.account_id}",
            correlation_id=correlation_id,
            extra={"amount": str(withdrawal.amount), "message": withdrawal.message}
        )
        return withdrawal

    def generate_report(self, role: str) -> str:
        """Report text for role (client, bank or audit)"""
        return self.report_factory.generate_report(role)

    def apply_interest(self, account: Account, strategy: StrategyLike) -> Decimal:
        """Calculate interest with strategy and deposit it into account"""
        interest = InterestCalculator(strategy).execute(account)
        account.deposit(interest)
        return interest

    def create_loan(self, client: Client, amount: Numeric) -> LoanAgreement:
        """Standard personal loan: 7.5%, 60 months"""
        return (LoanAgreementBuilder()
                .set_client(client)
                .set_amount(amount)
                .set_interest_rate(Decimal('7.5'))
                .set_term_months(60)
                .set_purpose("Personal Loan")
                .build())

    def notify_clients(self, message: str) -> int:
        """Broadcast a bank notice to every connected device"""
        return self.hub.broadcast(f"{get_config().broadcast_notice_prefix}{message}")
