"""
Transaction Splits

A split is one debit/credit leg of a transaction. It is owned by exactly
one Transaction and built by it from the split node, the first time the
transaction's splits are read.
"""

from typing import TYPE_CHECKING, Optional

from gnucash_ledger.models.nodes import SplitNode
from gnucash_ledger.models.numbers import FixedPointNumber

if TYPE_CHECKING:
    from gnucash_ledger.ledger.transaction import Transaction


class TransactionSplit:
    """Read view over one split node."""

    def __init__(self, node: SplitNode, transaction: "Transaction"):
        self._node = node
        self._transaction = transaction
        self._value: Optional[FixedPointNumber] = None
        self._quantity: Optional[FixedPointNumber] = None

    @property
    def id(self) -> str:
        return self._node.id

    @property
    def transaction(self) -> "Transaction":
        return self._transaction

    @property
    def node(self) -> SplitNode:
        return self._node

    @property
    def value(self) -> FixedPointNumber:
        """Amount in the transaction's currency."""
        if self._value is None:
            self._value = FixedPointNumber(self._node.value)
        return self._value

    @property
    def quantity(self) -> FixedPointNumber:
        """Amount in the account's commodity."""
        if self._quantity is None:
            self._quantity = FixedPointNumber(self._node.quantity)
        return self._quantity

    @property
    def account_id(self) -> Optional[str]:
        return self._node.account_id

    @property
    def memo(self) -> Optional[str]:
        return self._node.memo

    @property
    def action(self) -> Optional[str]:
        return self._node.action

    @property
    def reconciled_state(self) -> str:
        return self._node.reconciled_state

    def __repr__(self) -> str:
        return (
            f"TransactionSplit(id={self.id!r}, value={self._node.value!r}, "
            f"account_id={self.account_id!r})"
        )
