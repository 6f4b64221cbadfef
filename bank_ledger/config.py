"""Configuration management for bank-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from bank_ledger.exceptions import ConfigurationError
from bank_ledger.models.enums import RecordKind

RESERVED_DELIMITERS = ".-:_ +"


@dataclass
class StorageConfig:
    """Flat-file storage configuration."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    customers_file: str = "customers.csv"
    accounts_file: str = "accounts.csv"
    transactions_file: str = "transactions.csv"
    delimiter: str = ","
    atomic_writes: bool = True
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if len(self.delimiter) != 1 or self.delimiter in "\r\n":
            raise ConfigurationError(
                f"Delimiter must be a single non-newline character, got {self.delimiter!r}"
            )
        # Amounts, timestamps and enum values are written with these
        if self.delimiter.isalnum() or self.delimiter in RESERVED_DELIMITERS:
            raise ConfigurationError(
                f"Delimiter {self.delimiter!r} can appear inside amounts, dates or types"
            )

    def path_for(self, kind: RecordKind | str) -> Path:
        """Get the file path backing a record kind."""
        try:
            kind = RecordKind(kind)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown record kind: {kind}") from exc
        filenames = {
            RecordKind.CUSTOMERS: self.customers_file,
            RecordKind.ACCOUNTS: self.accounts_file,
            RecordKind.TRANSACTIONS: self.transactions_file,
        }
        return self.data_dir / filenames[kind]


@dataclass
class LedgerConfig:
    """Main configuration for bank-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None
    faker_locale: str = "en_IN"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            data_dir=Path(os.getenv("LEDGER_DATA_DIR", "data")),
            delimiter=os.getenv("LEDGER_DELIMITER", ","),
            atomic_writes=os.getenv("LEDGER_ATOMIC_WRITES", "true").lower() == "true",
        )

        seed = os.getenv("SEED")
        try:
            parsed_seed = int(seed) if seed else None
        except ValueError as exc:
            raise ConfigurationError(f"SEED must be an integer, got {seed!r}") from exc

        return cls(
            storage=storage,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=parsed_seed,
            faker_locale=os.getenv("FAKER_LOCALE", "en_IN"),
        )
