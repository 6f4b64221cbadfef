"""Flat-file ledger engine for customer accounts and transactions."""

from bank_ledger.engine import LedgerEngine, open_ledger
from bank_ledger.service import LedgerService, OperationResult

__version__ = "0.1.0"

__all__ = ["LedgerEngine", "LedgerService", "OperationResult", "open_ledger"]
