"""Tests for config and logging."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import pytest

from bank_ledger.config import LedgerConfig, StorageConfig
from bank_ledger.engine import LedgerEngine
from bank_ledger.exceptions import ConfigurationError
from bank_ledger.logging import JsonFormatter, setup_logging
from bank_ledger.models import RecordKind

ENV_VARS = [
    "LEDGER_DATA_DIR",
    "LEDGER_DELIMITER",
    "LEDGER_ATOMIC_WRITES",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "SEED",
    "FAKER_LOCALE",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestStorageConfig:
    """Tests for StorageConfig."""

    def test_default_values(self) -> None:
        config = StorageConfig()

        assert config.data_dir == Path("data")
        assert config.delimiter == ","
        assert config.atomic_writes is True
        assert config.encoding == "utf-8"

    def test_path_for(self) -> None:
        config = StorageConfig(data_dir=Path("/tmp/ledger"))

        assert config.path_for(RecordKind.CUSTOMERS) == Path("/tmp/ledger/customers.csv")
        assert config.path_for("accounts") == Path("/tmp/ledger/accounts.csv")
        assert config.path_for(RecordKind.TRANSACTIONS).name == "transactions.csv"

    def test_path_for_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown record kind"):
            StorageConfig().path_for("loans")

    def test_string_data_dir_is_converted(self) -> None:
        assert StorageConfig(data_dir="ledger").data_dir == Path("ledger")  # type: ignore[arg-type]

    @pytest.mark.parametrize("delimiter", ["", ",,", "\n"])
    def test_invalid_delimiter(self, delimiter: str) -> None:
        with pytest.raises(ConfigurationError, match="Delimiter"):
            StorageConfig(delimiter=delimiter)

    @pytest.mark.parametrize("delimiter", [" ", "-", ":", ".", "_", "7", "S"])
    def test_delimiter_clashing_with_field_values(self, delimiter: str) -> None:
        with pytest.raises(ConfigurationError, match="inside amounts"):
            StorageConfig(delimiter=delimiter)

    @pytest.mark.parametrize("delimiter", ["|", ";", "\t"])
    def test_accepted_delimiters(self, delimiter: str) -> None:
        assert StorageConfig(delimiter=delimiter).delimiter == delimiter

    def test_from_env_rejects_clashing_delimiter(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEDGER_DELIMITER", " ")

        with pytest.raises(ConfigurationError):
            LedgerConfig.from_env()


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_default_values(self) -> None:
        config = LedgerConfig()

        assert isinstance(config.storage, StorageConfig)
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.seed is None
        assert config.faker_locale == "en_IN"

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = LedgerConfig.from_env()

        assert config.storage.data_dir == Path("data")
        assert config.storage.atomic_writes is True
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LEDGER_DATA_DIR", "/srv/ledger")
        clean_env.setenv("LEDGER_DELIMITER", "|")
        clean_env.setenv("LEDGER_ATOMIC_WRITES", "false")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("LOG_FORMAT", "json")
        clean_env.setenv("SEED", "12345")
        clean_env.setenv("FAKER_LOCALE", "en_US")

        config = LedgerConfig.from_env()

        assert config.storage.data_dir == Path("/srv/ledger")
        assert config.storage.delimiter == "|"
        assert config.storage.atomic_writes is False
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.seed == 12345
        assert config.faker_locale == "en_US"

    def test_from_env_bad_seed(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("SEED", "abc")

        with pytest.raises(ConfigurationError, match="SEED"):
            LedgerConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("bank_ledger").level == logging.DEBUG

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)

    def test_setup_logging_invalid_level(self) -> None:
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_quiets_faker(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_basic(self) -> None:
        formatter = JsonFormatter()
        record = logging.LogRecord(
            name="bank_ledger.engine",
            level=logging.INFO,
            pathname="engine.py",
            lineno=1,
            msg="Deposited %s",
            args=("500.00",),
            exc_info=None,
        )

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "bank_ledger.engine"
        assert data["message"] == "Deposited 500.00"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        formatter = JsonFormatter()
        try:
            raise OSError("disk full")
        except OSError:
            import sys

            record = logging.LogRecord(
                name="test",
                level=logging.ERROR,
                pathname="test.py",
                lineno=1,
                msg="save failed",
                args=(),
                exc_info=sys.exc_info(),
            )

        data = json.loads(formatter.format(record))

        assert "disk full" in data["exception"]

    def test_format_with_ledger_context(self) -> None:
        formatter = JsonFormatter()
        record = logging.LogRecord(
            name="bank_ledger.engine",
            level=logging.INFO,
            pathname="engine.py",
            lineno=1,
            msg="Deposited",
            args=(),
            exc_info=None,
        )
        record.operation = "deposit"
        record.account_id = 5001
        record.amount = Decimal("500.00")

        data = json.loads(formatter.format(record))

        assert data["operation"] == "deposit"
        assert data["account_id"] == 5001
        assert data["amount"] == "500.00"
        assert "customer_id" not in data

    def test_engine_records_carry_context(
        self, engine: LedgerEngine, funded_accounts: tuple, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="bank_ledger"):
            engine.withdraw(5001, "100")

        record = next(r for r in caplog.records if getattr(r, "operation", None) == "withdraw")
        data = json.loads(JsonFormatter().format(record))

        assert data["account_id"] == 5001
        assert data["transaction_id"] == 10003
        assert data["amount"] == "100.00"
        assert data["balance"] == "1400.00"
