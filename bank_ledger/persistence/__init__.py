"""Persistence adapters for ledger records."""

from bank_ledger.persistence.flat_file import FlatFileStore

__all__ = ["FlatFileStore"]
