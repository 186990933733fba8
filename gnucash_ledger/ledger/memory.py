"""
In-Memory Ledger

A minimal implementation of the ledger and invoice contracts.

DESIGN DECISION: Invoices do not hold Transaction objects. They hold
transaction ids, which index into the ledger's transaction registry.
Neither side owns the other, so there is no reference cycle between
an invoice and the transactions issued for it.
"""

from typing import Iterable, Optional

from gnucash_ledger.audit import AuditLogger
from gnucash_ledger.ledger.interface import InvoiceInterface, LedgerInterface
from gnucash_ledger.ledger.transaction import Transaction
from gnucash_ledger.models.nodes import TransactionNode


class Invoice(InvoiceInterface):
    """An invoice known to an InMemoryLedger."""

    def __init__(self, invoice_id: str, ledger: "InMemoryLedger"):
        self._id = invoice_id
        self._ledger = ledger
        self._transaction_ids: list[str] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def transaction_ids(self) -> list[str]:
        return list(self._transaction_ids)

    def add_transaction(self, transaction: Transaction) -> None:
        """Link a transaction; linking the same id twice is a no-op."""
        self._ledger.register_transaction(transaction)
        if transaction.id not in self._transaction_ids:
            self._transaction_ids.append(transaction.id)

    def transactions(self) -> list[Transaction]:
        """Linked transactions, in the order they were linked."""
        linked = []
        for transaction_id in self._transaction_ids:
            transaction = self._ledger.transaction_by_id(transaction_id)
            if transaction is not None:
                linked.append(transaction)
        return linked

    def __repr__(self) -> str:
        return f"Invoice(id={self._id!r}, transactions={len(self._transaction_ids)})"


class InMemoryLedger(LedgerInterface):
    """
    Holds invoices and the shared transaction registry.

    Usage:
        ledger = InMemoryLedger()
        ledger.add_invoice("inv-1")
        transactions = ledger.load_transactions(nodes)
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit = audit_logger or AuditLogger()
        self._invoices: dict[str, Invoice] = {}
        self._transactions: dict[str, Transaction] = {}

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    def add_invoice(self, invoice_id: str) -> Invoice:
        """Create (or return the existing) invoice with this id."""
        if invoice_id not in self._invoices:
            self._invoices[invoice_id] = Invoice(invoice_id, self)
        return self._invoices[invoice_id]

    def invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return self._invoices.get(invoice_id)

    @property
    def invoices(self) -> list[Invoice]:
        return list(self._invoices.values())

    def register_transaction(self, transaction: Transaction) -> None:
        """Add a transaction to the registry. The first registration for an id wins."""
        self._transactions.setdefault(transaction.id, transaction)

    def transaction_by_id(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions.values())

    def load_transactions(self, nodes: Iterable[TransactionNode]) -> list[Transaction]:
        """
        Build a Transaction for every node, in document order.

        Each one registers with the invoices it references as it is built.
        """
        loaded = []
        for node in nodes:
            transaction = Transaction(node, self, audit_logger=self._audit)
            self.register_transaction(transaction)
            loaded.append(transaction)
        return loaded
