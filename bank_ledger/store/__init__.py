"""In-memory record store and id allocation."""

from bank_ledger.store.ids import START_IDS, IdAllocator
from bank_ledger.store.records import RecordStore

__all__ = ["START_IDS", "IdAllocator", "RecordStore"]
