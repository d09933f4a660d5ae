"""
Reports Module

Role-based reports produced by a factory keyed on the requesting role.
Report bodies are fixed illustrative text.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Type

from .exceptions import ValidationError


class ReportRole(Enum):
    """Roles that may request a report"""
    CLIENT = "client"
    BANK = "bank"
    AUDIT = "audit"


def _boxed(title: str, lines) -> str:
    return "\n".join([
        "╔════════════════════════════════════════════╗",
        f"║        {title:<36}║",
        "╚════════════════════════════════════════════╝",
        *lines,
        "═" * 47,
    ])


class Report(ABC):
    """A generated report"""

    report_type: str = "Report"

    @abstractmethod
    def generate(self) -> str:
        """Return the report body"""
        pass


class ClientReport(Report):
    """Account information and recent transactions for the client"""

    report_type = "Client Account Report"

    def generate(self) -> str:
        return _boxed("CLIENT ACCOUNT REPORT", [
            "[STATS] Account Balance: $10,500.00",
            "[CARD] Recent Transactions:",
            "  - Deposit: +$5,000.00",
            "  - Withdrawal: -$1,500.00",
            "  - Payment: -$200.00",
            "[BONUS] Bonus Balance: $125.50",
        ])


class BankReport(Report):
    """Portfolio statistics for bank managers"""

    report_type = "Bank Operations Report"

    def generate(self) -> str:
        return _boxed("BANK MANAGEMENT REPORT", [
            "[BANK] Total Accounts: 1,547",
            "[MONEY] Total Deposits: $45,780,250.00",
            "[CASH] Total Withdrawals: $12,340,150.00",
            "[GROWTH] Net Growth: +15.3%",
            "[USERS] Active Clients: 892",
            "[TARGET] Loan Portfolio: $23,500,000.00",
        ])


class AuditReport(Report):
    """Compliance and security summary for auditors"""

    report_type = "Audit & Compliance Report"

    def generate(self) -> str:
        return _boxed("AUDIT & COMPLIANCE REPORT", [
            "[OK] Compliance Status: PASSED",
            "[WARNING] Flagged Transactions: 3",
            "[SECURITY] Security Incidents: 0",
            "[CHECKLIST] Regulatory Requirements: 100% Met",
            "[REVIEW] Reviewed Accounts: 245",
            "[NOTE] Notes: All AML checks completed successfully",
        ])


class ReportFactory:
    """Creates the report matching a role"""

    _reports: Dict[ReportRole, Type[Report]] = {
        ReportRole.CLIENT: ClientReport,
        ReportRole.BANK: BankReport,
        ReportRole.AUDIT: AuditReport,
    }

    @classmethod
    def resolve_role(cls, role: str) -> ReportRole:
        """Case-insensitive role lookup"""
        if role is None or not str(role).strip():
            raise ValidationError("User role cannot be null or empty")
        try:
            return ReportRole(str(role).strip().lower())
        except ValueError:
            supported = ", ".join(r.value for r in ReportRole)
            raise ValidationError(f"Unknown user role: {role}. Supported roles: {supported}")

    @classmethod
    def get_report(cls, role: str) -> Report:
        return cls._reports[cls.resolve_role(role)]()

    @classmethod
    def generate_report(cls, role: str) -> str:
        return cls.get_report(role).generate()
