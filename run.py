#!/usr/bin/env python3
"""
Retail Banking Demo Entry Point

Wires a notification hub, devices, accounts and loans together and walks
through the main operations on the console.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from retail_banking.accounts import Account, AccountType
from retail_banking.clients import Client
from retail_banking.facade import BankingFacade
from retail_banking.interest import InterestCalculator, InterestStrategy
from retail_banking.loans import LoanAgreementBuilder, LoanAgreementDirector
from retail_banking.logging_config import setup_logging
from retail_banking.notifications import LaptopSink, MobilePhoneSink, NotificationHub
from retail_banking.reports import ReportFactory


def main():
    setup_logging(level="WARNING", fmt="text")
    hub = NotificationHub()

    print("=== [BANK] Welcome to our Bank System ===\n")

    client = Client("Sabulla", "Diana", "diana@bank.kz", "+77009890450", hub=hub)
    print(client.describe())

    client.add_device(MobilePhoneSink())
    client.add_device(LaptopSink())
    print(f"{client.display_name} logged in:\n")
    print("\n".join(client.list_devices()))

    savings = Account(client, AccountType.SAVINGS, "Dream account")
    deposit = Account(client, AccountType.DEPOSIT, "Big goal deposit")
    client.add_account(savings)
    client.add_account(deposit)
    print(client.describe_accounts())

    print("\n=== [OPERATIONS] Performing operations ===")
    savings.deposit(120000)
    deposit.deposit(300000)
    savings.pay(20000)
    result = deposit.withdraw(1000000)
    if not result:
        print(result.message)

    print("\n=== [STATS] Final account info ===")
    print(client.describe_accounts())

    print("\n=== [REPORTS] ===")
    for role in ("client", "bank", "audit"):
        report = ReportFactory.get_report(role)
        print(f"\n>>> Generating: {report.report_type}")
        print(report.generate())

    print("\n=== [LOANS] ===")
    simple_loan = (LoanAgreementBuilder()
                   .set_client(client)
                   .set_amount(500_000)
                   .set_interest_rate(7.5)
                   .set_term_months(60)
                   .build())
    print(simple_loan.describe())

    director = LoanAgreementDirector()
    for loan in (director.construct_standard_loan(client, 300_000),
                 director.construct_mortgage_loan(client, 2_500_000),
                 director.construct_car_loan(client, 800_000)):
        print(loan.describe())

    print("\n=== [INTEREST] ===")
    calculator = InterestCalculator()
    for strategy, account in ((InterestStrategy.SAVINGS, savings),
                              (InterestStrategy.VIP, deposit),
                              (InterestStrategy.LOAN, savings)):
        calculator.set_strategy(strategy)
        print(f"[{strategy.name}] Interest ({strategy.rate:.0%}): +{calculator.execute(account):,.2f}")

    print("\n=== [FACADE] ===")
    facade = BankingFacade(hub)
    facade.apply_interest(savings, InterestStrategy.SAVINGS)
    facade.apply_interest(deposit, InterestStrategy.VIP)
    facade.transfer(savings, deposit, 50000)
    print(facade.create_loan(client, 400_000).describe())
    print(facade.generate_report("bank"))
    facade.notify_clients("System maintenance tonight at 23:00.")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n👋 Shutting down...")
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
