"""
Transactions

A Transaction is the read model of one transaction node: its splits,
balance, timestamps, slot metadata and the invoices it was issued for.

LIFECYCLE:
- Built once per node while a document is loaded
- Registers itself with every invoice its slots reference (the ONLY
  side effect of construction)
- Splits and timestamps are filled in lazily, once, and then frozen -
  later changes to the node are not picked up

Not thread-safe. Lazy fields are filled on first access with no locking;
read splits() and both dates during a single-threaded load phase before
sharing a Transaction between threads.
"""

from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from gnucash_ledger.audit import AuditLogger
from gnucash_ledger.ledger.formatting import CurrencyFormatter, format_date
from gnucash_ledger.ledger.interface import (
    ContractViolationError,
    InvoiceInterface,
    LedgerInterface,
    UnparsableTimestampError,
)
from gnucash_ledger.ledger.split import TransactionSplit
from gnucash_ledger.ledger.timestamps import TimestampCache
from gnucash_ledger.models.nodes import SplitNode, TransactionNode
from gnucash_ledger.models.numbers import NEGATIVE_ONE, FixedPointNumber
from gnucash_ledger.models.slots import SlotTree


SplitFactory = Callable[[SplitNode, "Transaction"], Any]


def _compare_values(left, right) -> int:
    return (left > right) - (left < right)


class Transaction:
    """
    One ledger event, made of splits that should sum to zero.

    Identity is the transaction GUID: two Transaction objects over nodes
    with the same id are equal.
    """

    def __init__(
        self,
        node: TransactionNode,
        ledger: LedgerInterface,
        *,
        split_factory: SplitFactory = TransactionSplit,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            node: The parsed transaction node
            ledger: The file this transaction belongs to (not owned)
            split_factory: Builds a split from (split node, transaction)
            audit_logger: Where absorbed problems are reported
                          (defaults to the ledger's logger)

        Raises:
            ContractViolationError: If node or ledger is missing
        """
        if node is None:
            raise ContractViolationError("null transaction node given")
        if ledger is None:
            raise ContractViolationError("null ledger given", transaction_id=node.id)

        self._node = node
        self._ledger = ledger
        self._split_factory = split_factory
        # A ledger only has to provide invoice_by_id
        self._audit = (
            audit_logger or getattr(ledger, "audit_logger", None) or AuditLogger()
        )

        self._empty_slots: Optional[SlotTree] = None
        if node.slots is None:
            self._empty_slots = SlotTree()
            try:
                node.slots = self._empty_slots
            except (TypeError, ValueError):
                # Frozen node - keep the empty tree on our side only
                pass

        self._splits: Optional[tuple] = None
        self._currency_formatter: Optional[CurrencyFormatter] = None
        self._date_posted = TimestampCache(
            "date_posted", lambda: self._node.date_posted, node.id
        )
        self._date_entered = TimestampCache(
            "date_entered", lambda: self._node.date_entered, node.id
        )

        invoices = self.invoices()
        for invoice in invoices:
            invoice.add_transaction(self)
            self._audit.log_invoice_linked(invoice.id, self.id)
        self._audit.log_transaction_loaded(self.id, len(invoices))

    # =========================================================================
    # IDENTITY & ATTRIBUTES
    # =========================================================================

    @property
    def id(self) -> str:
        return self._node.id

    @property
    def description(self) -> str:
        return self._node.description

    @property
    def number(self) -> Optional[str]:
        """The user-entered transaction number, if any."""
        return self._node.num

    @property
    def currency_namespace(self) -> str:
        """e.g. "ISO4217" for a currency, "FUND" for a fund."""
        return self._node.currency_namespace

    @property
    def currency_id(self) -> str:
        return self._node.currency_id

    @property
    def currency(self) -> tuple[str, str]:
        """(namespace, id) of the unit of account."""
        return (self.currency_namespace, self.currency_id)

    @property
    def slots(self) -> SlotTree:
        if self._node.slots is not None:
            return self._node.slots
        return self._empty_slots

    @property
    def node(self) -> TransactionNode:
        return self._node

    @property
    def ledger(self) -> LedgerInterface:
        return self._ledger

    # =========================================================================
    # BALANCE
    # =========================================================================

    def balance(self) -> FixedPointNumber:
        """Sum of all split values, in the transaction currency."""
        total = FixedPointNumber()
        for split in self.splits():
            total = total.add(split.value)
        return total

    def is_balanced(self) -> bool:
        return self.balance().is_zero()

    def negated_balance(self) -> FixedPointNumber:
        return self.balance().multiply(NEGATIVE_ONE)

    def currency_formatter(self) -> CurrencyFormatter:
        """Default formatter for this transaction's currency (cached)."""
        if self._currency_formatter is None:
            self._currency_formatter = CurrencyFormatter(
                self.currency_namespace, self.currency_id
            )
        return self._currency_formatter

    def balance_formatted(self) -> str:
        return self.currency_formatter().format(self.balance())

    def negated_balance_formatted(self) -> str:
        return self.currency_formatter().format(self.negated_balance())

    # =========================================================================
    # SPLITS
    # =========================================================================

    def splits(self) -> Sequence[TransactionSplit]:
        """
        The splits in document order.

        Built on first call and cached: every call returns the same tuple.
        """
        if self._splits is None:
            self._splits = tuple(
                self._split_factory(split_node, self)
                for split_node in self._node.splits
            )
        return self._splits

    def split_count(self) -> int:
        return len(self.splits())

    def split_by_id(self, split_id: str) -> Optional[TransactionSplit]:
        for split in self.splits():
            if split.id == split_id:
                return split
        return None

    def first_split(self) -> TransactionSplit:
        """
        Raises:
            ContractViolationError: If the transaction has no splits
        """
        splits = self.splits()
        if len(splits) < 1:
            raise ContractViolationError(
                f"transaction with id='{self.id}' has no splits",
                transaction_id=self.id,
            )
        return splits[0]

    def second_split(self) -> TransactionSplit:
        """
        Raises:
            ContractViolationError: If the transaction has fewer than 2 splits
        """
        splits = self.splits()
        if len(splits) < 2:
            raise ContractViolationError(
                f"transaction with id='{self.id}' has {len(splits)} splits, "
                f"a second split was requested",
                transaction_id=self.id,
            )
        return splits[1]

    # =========================================================================
    # INVOICES
    # =========================================================================

    def invoice_ids(self) -> list[str]:
        """
        Invoice ids referenced from the slots.

        Recomputed on every call; this is a view, not a cache.
        """
        return self.slots.find_invoice_references()

    def invoices(self, ledger: Optional[LedgerInterface] = None) -> list[InvoiceInterface]:
        """
        The invoices this transaction was issued for.

        Ids the ledger cannot resolve are logged and left out; the
        remaining ids are still resolved.
        """
        if ledger is None:
            ledger = self._ledger

        resolved = []
        for invoice_id in self.invoice_ids():
            invoice = ledger.invoice_by_id(invoice_id)
            if invoice is None:
                self._audit.log_invoice_not_found(invoice_id, self.id, self.description)
                continue
            resolved.append(invoice)
        return resolved

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================

    def _read_timestamp(self, cache: TimestampCache) -> datetime:
        try:
            return cache.get()
        except UnparsableTimestampError as e:
            self._audit.log_timestamp_unparsable(self.id, cache.field_name, e.raw_value)
            raise

    @property
    def date_posted(self) -> datetime:
        """
        When the transaction happened (timezone-aware).

        Raises:
            UnparsableTimestampError: If the stored string is malformed
        """
        return self._read_timestamp(self._date_posted)

    @property
    def date_entered(self) -> datetime:
        """
        When the transaction was recorded (timezone-aware).

        Raises:
            UnparsableTimestampError: If the stored string is malformed
        """
        return self._read_timestamp(self._date_entered)

    def date_posted_formatted(self) -> str:
        return format_date(self.date_posted)

    # =========================================================================
    # ORDERING
    # =========================================================================

    def compare(self, other: "Transaction") -> int:
        """
        Order by date posted, then date entered - NEWEST FIRST.

        Both keys are compared other-to-self, so sorting with this
        comparison puts later transactions first. Existing callers rely
        on that order.

        Dates are compared as instants. The same moment written with two
        different UTC offsets is a tie on that key; offsets are not used
        to break it.

        If either date cannot be read the transactions compare equal.
        This keeps UI listings sortable at the cost of precision; the
        failure is logged.
        """
        try:
            result = _compare_values(other.date_posted, self.date_posted)
            if result != 0:
                return result
            return _compare_values(other.date_entered, self.date_entered)
        except Exception as e:
            self._audit.log_comparison_failed(
                self.id, getattr(other, "id", None), str(e)
            )
            return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.compare(other) < 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.compare(other) > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # =========================================================================
    # RENDERING
    # =========================================================================

    def __str__(self) -> str:
        parts = [
            "[Transaction:",
            f" id: {self.id}",
            f" description: {self.description}",
            f" #splits: {self.split_count()}",
            " date_entered: ",
        ]
        try:
            parts.append(self.date_entered.isoformat(sep=" "))
        except Exception as e:
            self._audit.log_render_failed(self.id, str(e))
            parts.append(f"ERROR '{e}'")
        parts.append("]")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Transaction(id={self.id!r}, description={self.description!r})"
