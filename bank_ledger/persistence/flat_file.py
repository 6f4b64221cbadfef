"""Flat-file persistence: one delimited text file per record kind."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Sequence

from bank_ledger.config import StorageConfig
from bank_ledger.exceptions import CorruptRecordError, PersistenceError
from bank_ledger.models import RecordKind
from bank_ledger.persistence.serialization import DECODERS, ENCODERS
from bank_ledger.store.records import RecordStore

logger = logging.getLogger(__name__)


class FlatFileStore:
    """Load and save ledger records as line-oriented delimited files.

    Every save rewrites the whole file for a kind. With ``atomic_writes``
    enabled the new content goes to a temporary sibling file that is then
    renamed over the target, so a crash mid-write leaves the previous
    version intact.
    """

    def __init__(self, config: StorageConfig | None = None) -> None:
        """Initialize flat-file storage.

        Parameters
        ----------
        config : StorageConfig | None
            Storage settings (data directory, file names, delimiter).
        """
        self.config = config or StorageConfig()
        self.delimiter = self.config.delimiter

    def path_for(self, kind: RecordKind) -> Path:
        return self.config.path_for(kind)

    def load(self, kind: RecordKind) -> list[Any]:
        """Read all records of ``kind``.

        A missing file means no records have been written yet and yields an
        empty list.

        Raises
        ------
        CorruptRecordError
            If a non-blank line cannot be decoded.
        PersistenceError
            If the file exists but cannot be read.
        """
        kind = RecordKind(kind)
        path = self.path_for(kind)
        decode = DECODERS[kind]

        if not path.exists():
            logger.info("No %s file at %s, starting empty", kind.value, path)
            return []

        records = []
        try:
            with open(path, "r", encoding=self.config.encoding, newline="") as f:
                for lineno, raw in enumerate(f, start=1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        records.append(decode(line, self.delimiter))
                    except CorruptRecordError as exc:
                        raise CorruptRecordError(f"{path}:{lineno}: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"Could not read {path}: {exc}") from exc

        logger.info(
            "Loaded %d %s from %s",
            len(records),
            kind.value,
            path,
            extra={"record_kind": kind.value},
        )
        return records

    def save(self, kind: RecordKind, records: Sequence[Any]) -> None:
        """Overwrite the file for ``kind`` with ``records``.

        Raises
        ------
        PersistenceError
            If the file cannot be written.
        """
        kind = RecordKind(kind)
        path = self.path_for(kind)
        encode = ENCODERS[kind]
        content = "".join(encode(record, self.delimiter) + "\n" for record in records)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if self.config.atomic_writes:
                self._write_atomic(path, content)
            else:
                with open(path, "w", encoding=self.config.encoding, newline="") as f:
                    f.write(content)
        except OSError as exc:
            logger.error(
                "Failed to save %s to %s: %s",
                kind.value,
                path,
                exc,
                extra={"record_kind": kind.value},
            )
            raise PersistenceError(f"Could not write {path}: {exc}") from exc

        logger.debug("Saved %d %s to %s", len(records), kind.value, path)

    def _write_atomic(self, path: Path, content: str) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding=self.config.encoding, newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def load_store(self) -> RecordStore:
        """Load all three files into a fresh store.

        References that do not resolve (for example after a file was edited
        by hand) are kept and logged rather than rejected.
        """
        store = RecordStore()
        try:
            for customer in self.load(RecordKind.CUSTOMERS):
                store.add_customer(customer)
            for account in self.load(RecordKind.ACCOUNTS):
                store.add_account(account, strict=False)
            for transaction in self.load(RecordKind.TRANSACTIONS):
                store.add_transaction(transaction, strict=False)
        except ValueError as exc:
            # duplicate ids
            raise CorruptRecordError(str(exc)) from exc
        return store

    def save_store(self, store: RecordStore) -> None:
        """Write every collection in ``store``."""
        self.save(RecordKind.CUSTOMERS, list(store.customers.values()))
        self.save(RecordKind.ACCOUNTS, list(store.accounts.values()))
        self.save(RecordKind.TRANSACTIONS, store.transactions)
