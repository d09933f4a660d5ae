"""
Test suite for reports module
"""

import pytest

from retail_banking.exceptions import ValidationError
from retail_banking.reports import (
    AuditReport, BankReport, ClientReport, ReportFactory, ReportRole
)


class TestReportFactory:
    """Test role-based report creation"""

    @pytest.mark.parametrize("role,report_class", [
        ("client", ClientReport),
        ("bank", BankReport),
        ("audit", AuditReport),
    ])
    def test_known_roles(self, role, report_class):
        assert isinstance(ReportFactory.get_report(role), report_class)

    def test_role_is_case_insensitive(self):
        assert ReportFactory.resolve_role("  BANK ") == ReportRole.BANK

    @pytest.mark.parametrize("role", ["", "   ", None])
    def test_empty_role(self, role):
        with pytest.raises(ValidationError, match="cannot be null or empty"):
            ReportFactory.get_report(role)

    def test_unknown_role(self):
        with pytest.raises(ValidationError, match="Unknown user role: teller"):
            ReportFactory.get_report("teller")

    def test_generate_report(self):
        text = ReportFactory.generate_report("audit")
        assert "AUDIT & COMPLIANCE REPORT" in text
        assert "Compliance Status: PASSED" in text


class TestReports:
    """Test report bodies"""

    def test_report_types(self):
        assert ClientReport().report_type == "Client Account Report"
        assert BankReport().report_type == "Bank Operations Report"
        assert AuditReport().report_type == "Audit & Compliance Report"

    def test_bodies_are_distinct(self):
        bodies = {report().generate() for report in (ClientReport, BankReport, AuditReport)}
        assert len(bodies) == 3
