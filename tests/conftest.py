"""
Shared fixtures.

Nodes are built directly from the pydantic models - there is no document
parser in these tests.
"""

import pytest

from gnucash_ledger.audit import AuditLogger, MemoryAuditSink
from gnucash_ledger.ledger import InMemoryLedger
from gnucash_ledger.models import (
    FrameValue,
    ScalarValue,
    Slot,
    SlotTree,
    SplitNode,
    TransactionNode,
)


DEFAULT_POSTED = "2001-09-18 00:00:00 +0200"
DEFAULT_ENTERED = "2001-09-18 10:30:00 +0200"


@pytest.fixture
def audit_sink() -> MemoryAuditSink:
    return MemoryAuditSink()


@pytest.fixture
def audit_logger(audit_sink) -> AuditLogger:
    return AuditLogger(sink=audit_sink)


@pytest.fixture
def ledger(audit_logger) -> InMemoryLedger:
    return InMemoryLedger(audit_logger=audit_logger)


@pytest.fixture
def invoice_slot():
    """Build a well-formed gncInvoice slot for an invoice id."""
    def _build(invoice_id: str) -> Slot:
        return Slot(
            key="gncInvoice",
            value=FrameValue(slots=[
                Slot(key="invoice-guid", value=ScalarValue(kind="guid", content=invoice_id)),
            ]),
        )
    return _build


@pytest.fixture
def make_node():
    """Build a TransactionNode; splits are given as (split id, value) pairs."""
    def _build(
        transaction_id: str = "trn-1",
        splits=(("split-1", "1250/100"), ("split-2", "-1250/100")),
        date_posted: str = DEFAULT_POSTED,
        date_entered: str = DEFAULT_ENTERED,
        slots=None,
        **kwargs,
    ) -> TransactionNode:
        return TransactionNode(
            id=transaction_id,
            description=kwargs.pop("description", f"Transaction {transaction_id}"),
            currency_id=kwargs.pop("currency_id", "EUR"),
            date_posted=date_posted,
            date_entered=date_entered,
            slots=SlotTree(slots=list(slots)) if slots is not None else None,
            splits=[SplitNode(id=split_id, value=value) for split_id, value in splits],
            **kwargs,
        )
    return _build
