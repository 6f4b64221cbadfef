"""Sequential identifier allocation per record kind."""

from dataclasses import dataclass, field

from bank_ledger.models import RecordKind
from bank_ledger.store.records import RecordStore

START_IDS: dict[RecordKind, int] = {
    RecordKind.CUSTOMERS: 1001,
    RecordKind.ACCOUNTS: 5001,
    RecordKind.TRANSACTIONS: 10001,
}


@dataclass
class IdAllocator:
    """Hands out monotonically increasing ids, one counter per record kind.

    Counters only move forward, so an id is never handed out twice even if
    records are later removed from the store.
    """

    _next: dict[RecordKind, int] = field(default_factory=lambda: dict(START_IDS))

    @classmethod
    def from_store(cls, store: RecordStore) -> "IdAllocator":
        """Build counters from the highest id present for each kind.

        Parameters
        ----------
        store : RecordStore
            Loaded store. Gaps between existing ids are ignored.

        Returns
        -------
        IdAllocator
            Allocator whose next id exceeds every id in the store.
        """
        existing = {
            RecordKind.CUSTOMERS: store.customers.keys(),
            RecordKind.ACCOUNTS: store.accounts.keys(),
            RecordKind.TRANSACTIONS: [t.transaction_id for t in store.transactions],
        }
        allocator = cls()
        for kind, ids in existing.items():
            if ids:
                allocator._next[kind] = max(ids) + 1
        return allocator

    def next_id(self, kind: RecordKind) -> int:
        """Consume and return the next id for ``kind``."""
        kind = RecordKind(kind)
        value = self._next[kind]
        self._next[kind] = value + 1
        return value

    def peek(self, kind: RecordKind) -> int:
        """Return the id the next create of ``kind`` will receive."""
        return self._next[RecordKind(kind)]
