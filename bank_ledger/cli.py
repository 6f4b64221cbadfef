"""Command-line front end for the ledger.

Examples
--------
    bank-ledger --data-dir data customer add "Asha Rao" asha@example.com 9876543210 "12 MG Road Pune"
    bank-ledger account open 1001 Savings 1000
    bank-ledger deposit 5001 500
    bank-ledger transfer 5001 5002 300
    bank-ledger history 5001
    bank-ledger seed --customers 20 --seed 42
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable

from bank_ledger.config import LedgerConfig
from bank_ledger.engine import open_ledger
from bank_ledger.exceptions import ConfigurationError, LedgerError, PersistenceError
from bank_ledger.generators import AccountDraftGenerator, CustomerGenerator
from bank_ledger.logging import setup_logging
from bank_ledger.models import (
    Account,
    AccountOpening,
    AccountType,
    BalanceInfo,
    Customer,
    DashboardSummary,
    Posting,
    Transaction,
    TransferReceipt,
)
from bank_ledger.persistence.serialization import format_timestamp
from bank_ledger.service import LedgerService, OperationResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PERSISTENCE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bank-ledger",
        description="Manage customers, accounts and transactions in a flat-file ledger.",
    )
    parser.add_argument("--data-dir", type=Path, help="Directory holding the ledger files")
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=["standard", "json"], help="Log format")

    sub = parser.add_subparsers(dest="command", required=True)

    customer = sub.add_parser("customer", help="Customer management").add_subparsers(
        dest="action", required=True
    )
    add = customer.add_parser("add", help="Register a customer")
    add.add_argument("name")
    add.add_argument("email")
    add.add_argument("phone")
    add.add_argument("address")
    customer.add_parser("list", help="List customers")
    owned = customer.add_parser("accounts", help="List a customer's accounts")
    owned.add_argument("customer_id")

    account = sub.add_parser("account", help="Account management").add_subparsers(
        dest="action", required=True
    )
    open_ = account.add_parser("open", help="Open an account")
    open_.add_argument("customer_id")
    open_.add_argument("account_type", help=" or ".join(t.value for t in AccountType))
    open_.add_argument("initial_deposit", nargs="?", default="0")
    account.add_parser("list", help="List accounts")

    deposit = sub.add_parser("deposit", help="Deposit into an account")
    deposit.add_argument("account_id")
    deposit.add_argument("amount")

    withdraw = sub.add_parser("withdraw", help="Withdraw from an account")
    withdraw.add_argument("account_id")
    withdraw.add_argument("amount")

    transfer = sub.add_parser("transfer", help="Transfer between accounts")
    transfer.add_argument("source_id")
    transfer.add_argument("destination_id")
    transfer.add_argument("amount")

    balance = sub.add_parser("balance", help="Show an account's balance")
    balance.add_argument("account_id")

    history = sub.add_parser("history", help="Show an account's transactions")
    history.add_argument("account_id")

    sub.add_parser("dashboard", help="Show ledger totals")

    seed = sub.add_parser("seed", help="Populate the ledger with sample customers")
    seed.add_argument("--customers", type=int, default=10)
    seed.add_argument("--max-accounts", type=int, default=2)
    seed.add_argument("--seed", type=int, help="Random seed (default: SEED)")
    seed.add_argument("--locale", help="Faker locale (default: FAKER_LOCALE or en_IN)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = LedgerConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error (configuration): {exc}", file=sys.stderr)
        return EXIT_FAILED
    if args.data_dir is not None:
        config.storage.data_dir = args.data_dir
    setup_logging(args.log_level or config.log_level, args.log_format or config.log_format)

    try:
        service = LedgerService(open_ledger(config))
    except PersistenceError as exc:
        print(f"Error: could not load ledger: {exc}", file=sys.stderr)
        return EXIT_PERSISTENCE

    if args.command == "seed":
        return _seed(service, config, args)

    operation, render = _dispatch(service, args)
    return _report(operation(), render)


def _dispatch(
    service: LedgerService, args: argparse.Namespace
) -> tuple[Callable[[], OperationResult], Callable[[Any], None]]:
    command = args.command
    if command == "customer":
        if args.action == "add":
            return (
                lambda: service.create_customer(args.name, args.email, args.phone, args.address),
                lambda c: print(f"Customer added successfully! ID: {c.customer_id}"),
            )
        if args.action == "list":
            return service.list_customers, _print_customers
        return lambda: service.list_customer_accounts(args.customer_id), _print_accounts
    if command == "account":
        if args.action == "open":
            return (
                lambda: service.create_account(
                    args.customer_id, args.account_type, args.initial_deposit
                ),
                _print_opening,
            )
        return service.list_accounts, _print_accounts
    if command == "deposit":
        return lambda: service.deposit(args.account_id, args.amount), _print_posting
    if command == "withdraw":
        return lambda: service.withdraw(args.account_id, args.amount), _print_posting
    if command == "transfer":
        return (
            lambda: service.transfer(args.source_id, args.destination_id, args.amount),
            _print_transfer,
        )
    if command == "balance":
        return lambda: service.check_balance(args.account_id), _print_balance
    if command == "history":
        return lambda: service.get_history(args.account_id), _print_history
    return service.get_dashboard_summary, _print_dashboard


def _report(result: OperationResult, render: Callable[[Any], None]) -> int:
    if result.ok:
        render(result.value)
        return EXIT_OK
    if result.committed:
        render(result.value)
        print(
            f"Warning: change applied but not saved, durability uncertain: {result.message}",
            file=sys.stderr,
        )
        return EXIT_PERSISTENCE
    print(f"Error ({result.error_kind}): {result.message}", file=sys.stderr)
    return EXIT_FAILED


def _seed(service: LedgerService, config: LedgerConfig, args: argparse.Namespace) -> int:
    seed = args.seed if args.seed is not None else config.seed
    locale = args.locale or config.faker_locale
    customers = CustomerGenerator(seed=seed, locale=locale, delimiter=config.storage.delimiter)
    accounts = AccountDraftGenerator(seed=seed, locale=locale)

    engine = service.engine
    opened = 0
    try:
        for draft in customers.generate_batch(args.customers):
            customer = engine.create_customer(draft.name, draft.email, draft.phone, draft.address)
            for account in accounts.generate_for_customer(args.max_accounts):
                engine.create_account(
                    customer.customer_id, account.account_type, account.initial_deposit
                )
                opened += 1
    except LedgerError as exc:
        print(f"Error ({exc.kind}): {exc}", file=sys.stderr)
        return EXIT_PERSISTENCE if isinstance(exc, PersistenceError) else EXIT_FAILED

    logger.info("Seeded %d customers and %d accounts", args.customers, opened)
    print(f"Seeded {args.customers} customers and {opened} accounts")
    return EXIT_OK


def _print_customers(customers: list[Customer]) -> None:
    for c in customers:
        print(f"{c.customer_id}\t{c.name}\t{c.email}\t{c.phone}\t{c.address}")


def _print_accounts(accounts: list[Account]) -> None:
    for a in accounts:
        print(
            f"{a.account_id}\t{a.customer_id}\t{a.account_type.value}\t{a.balance:.2f}\t"
            f"{a.status}\t{format_timestamp(a.created_date)}"
        )


def _print_opening(opening: AccountOpening) -> None:
    print(f"Account created successfully! ID: {opening.account.account_id}")


def _print_posting(posting: Posting) -> None:
    label = posting.transaction.transaction_type.value.capitalize()
    print(f"{label} of {posting.transaction.amount:.2f} successful.")
    print(f"New Balance: {posting.new_balance:.2f}")


def _print_transfer(receipt: TransferReceipt) -> None:
    print(f"Transfer of {receipt.amount:.2f} successful.")
    print(f"Source New Balance: {receipt.debit.balance_after:.2f}")
    print(f"Dest New Balance: {receipt.credit.balance_after:.2f}")


def _print_balance(info: BalanceInfo) -> None:
    print(f"Account ID: {info.account_id}")
    print(f"Customer: {info.customer_name or 'N/A'} (ID: {info.customer_id})")
    print(f"Type: {info.account_type.value}")
    print(f"Status: {info.status}")
    print(f"Created: {format_timestamp(info.created_date)}")
    print(f"Current Balance: {info.balance:.2f}")


def _print_history(transactions: list[Transaction]) -> None:
    if not transactions:
        print("No transactions found.")
        return
    for t in transactions:
        sign = "+" if t.transaction_type.is_credit else "-"
        print(
            f"{t.transaction_id}\t{t.transaction_type.value}\t{sign}{t.amount:.2f}\t"
            f"{t.balance_after:.2f}\t{format_timestamp(t.date)}\t{t.description}"
        )


def _print_dashboard(summary: DashboardSummary) -> None:
    print(f"Total Customers: {summary.total_customers}")
    print(f"Total Accounts: {summary.total_accounts}")
    print(f"Active Accounts: {summary.active_accounts}")
    print(f"Total Transactions: {summary.total_transactions}")
    print(f"Total Balance: {summary.total_balance:.2f}")
    print(f"Average Balance: {summary.average_balance:.2f}")


if __name__ == "__main__":
    sys.exit(main())
