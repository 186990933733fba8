"""
Ledger Package

The transaction read model and the contracts it needs from the file and
invoice layers.
"""

from gnucash_ledger.ledger.interface import (
    ContractViolationError,
    InvoiceInterface,
    LedgerError,
    LedgerInterface,
    UnparsableTimestampError,
)
from gnucash_ledger.ledger.timestamps import (
    TIMESTAMP_FORMAT,
    TimestampCache,
    parse_timestamp,
)
from gnucash_ledger.ledger.formatting import CurrencyFormatter, format_date
from gnucash_ledger.ledger.split import TransactionSplit
from gnucash_ledger.ledger.transaction import Transaction
from gnucash_ledger.ledger.memory import InMemoryLedger, Invoice

__all__ = [
    # Interfaces
    "InvoiceInterface",
    "LedgerInterface",
    # Exceptions
    "ContractViolationError",
    "LedgerError",
    "UnparsableTimestampError",
    # Timestamps
    "TIMESTAMP_FORMAT",
    "TimestampCache",
    "parse_timestamp",
    # Formatting
    "CurrencyFormatter",
    "format_date",
    # Read model
    "Transaction",
    "TransactionSplit",
    # In-memory implementation
    "InMemoryLedger",
    "Invoice",
]
