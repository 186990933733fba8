"""
Abstract Ledger Interfaces

DESIGN DECISION: Invoices and the file that owns them are NOT part of
this package. A transaction only needs two things from them:
1. Resolve an invoice id to an invoice (the ledger)
2. Tell an invoice that a transaction belongs to it (the invoice)

Anything that implements these two contracts can sit behind a
Transaction - a full GnuCash file model, or the in-memory ledger used
in tests.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gnucash_ledger.audit import AuditLogger
    from gnucash_ledger.ledger.transaction import Transaction


class InvoiceInterface(ABC):
    """
    Abstract interface for an invoice as seen from a transaction.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """The invoice GUID."""
        pass

    @abstractmethod
    def add_transaction(self, transaction: "Transaction") -> None:
        """
        Record that a transaction belongs to this invoice.

        Called once per referencing transaction, while it is constructed.
        Implementations should not take ownership of the transaction.
        """
        pass


class LedgerInterface(ABC):
    """
    Abstract interface for the file a transaction belongs to.
    """

    @abstractmethod
    def invoice_by_id(self, invoice_id: str) -> Optional[InvoiceInterface]:
        """
        Resolve an invoice by its GUID.

        Returns:
            The invoice if found, None otherwise
        """
        pass

    @property
    def audit_logger(self) -> Optional["AuditLogger"]:
        """
        Logger that transactions of this file report to.

        None means each transaction logs locally only.
        """
        return None


class LedgerError(Exception):
    """Base exception for ledger read operations."""
    pass


class ContractViolationError(LedgerError):
    """
    A caller broke a documented precondition.

    Missing constructor arguments, or asking for a split position the
    transaction does not have.
    """

    def __init__(self, message: str, transaction_id: Optional[str] = None):
        self.transaction_id = transaction_id
        super().__init__(message)


class UnparsableTimestampError(LedgerError, ValueError):
    """A timestamp string in the document does not match the expected format."""

    def __init__(
        self,
        raw_value: str,
        transaction_id: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.raw_value = raw_value
        self.transaction_id = transaction_id
        self.field_name = field_name

        message = f"unparsable date '{raw_value}'"
        if field_name:
            message += f" in field {field_name}"
        if transaction_id:
            message += f" in transaction with id='{transaction_id}'"
        super().__init__(message)
