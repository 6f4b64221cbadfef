"""Logging setup for the ledger.

Command output goes to stdout, so every log line is written to stderr.
Engine and persistence calls attach ledger context through ``extra``
(``operation``, ``account_id``, ``amount`` ...); the JSON format emits it
as top-level keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

CONTEXT_FIELDS = (
    "operation",
    "record_kind",
    "customer_id",
    "account_id",
    "destination_id",
    "transaction_id",
    "amount",
    "balance",
)


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Route ledger logs to stderr.

    Parameters
    ----------
    level : str
        Log level name. Unknown names fall back to INFO.
    format_type : str
        "standard" for human-readable lines, "json" for one object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(_build_formatter(format_type))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("bank_ledger").setLevel(log_level)
    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JsonFormatter()
    return logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any ledger context attached."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Decimal amounts are written as strings
        return json.dumps(entry, default=str)
