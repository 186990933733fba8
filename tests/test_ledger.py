"""
Tests for the in-memory ledger, invoice back-references and audit logging.
"""

import pytest

from gnucash_ledger.audit import AuditLogger, AuditSinkInterface, MemoryAuditSink
from gnucash_ledger.config import get_settings, validate_all_settings
from gnucash_ledger.ledger import InMemoryLedger, Invoice, Transaction
from gnucash_ledger.models import AuditEvent, AuditEventType


class TestInMemoryLedger:
    """Tests for the reference ledger implementation."""

    def test_load_in_document_order(self, make_node, ledger):
        """load_transactions builds and registers every node."""
        nodes = [make_node("t1"), make_node("t2"), make_node("t3")]
        loaded = ledger.load_transactions(nodes)

        assert [t.id for t in loaded] == ["t1", "t2", "t3"]
        assert all(isinstance(t, Transaction) for t in loaded)
        assert ledger.transaction_by_id("t2") is loaded[1]
        assert ledger.transaction_by_id("missing") is None

    def test_invoice_back_references(self, make_node, ledger, invoice_slot):
        """Each invoice learns about the transactions issued for it."""
        invoice_a = ledger.add_invoice("inv-a")
        invoice_b = ledger.add_invoice("inv-b")

        ledger.load_transactions([
            make_node("t1", slots=[invoice_slot("inv-a")]),
            make_node("t2", slots=[invoice_slot("inv-a"), invoice_slot("inv-b")]),
            make_node("t3"),
        ])

        assert invoice_a.transaction_ids == ["t1", "t2"]
        assert invoice_b.transaction_ids == ["t2"]
        assert [t.id for t in invoice_a.transactions()] == ["t1", "t2"]

    def test_duplicate_reference_links_once(self, make_node, ledger, invoice_slot):
        """A transaction referencing the same invoice twice is linked once."""
        invoice = ledger.add_invoice("inv-a")
        ledger.load_transactions([
            make_node("t1", slots=[invoice_slot("inv-a"), invoice_slot("inv-a")]),
        ])
        assert invoice.transaction_ids == ["t1"]

    def test_unknown_invoice_does_not_stop_loading(
        self, make_node, ledger, invoice_slot, audit_sink
    ):
        """Loading goes on past unresolvable references."""
        loaded = ledger.load_transactions([
            make_node("t1", slots=[invoice_slot("ghost")]),
            make_node("t2"),
        ])
        assert len(loaded) == 2
        events = audit_sink.get_events_by_entity("transaction", "t1")
        assert AuditEventType.INVOICE_NOT_FOUND in [e.event_type for e in events]

    def test_add_invoice_is_idempotent(self, ledger):
        """The same id returns the same invoice."""
        first = ledger.add_invoice("inv-1")
        assert ledger.add_invoice("inv-1") is first
        assert ledger.invoice_by_id("inv-1") is first
        assert ledger.invoice_by_id("inv-2") is None
        assert isinstance(first, Invoice)

    def test_linked_events_logged(self, make_node, ledger, invoice_slot, audit_sink):
        """Links and loads are recorded in the audit sink."""
        ledger.add_invoice("inv-1")
        ledger.load_transactions([make_node("t1", slots=[invoice_slot("inv-1")])])

        linked = audit_sink.get_events_by_type(AuditEventType.INVOICE_LINKED)
        loaded = audit_sink.get_events_by_type(AuditEventType.TRANSACTION_LOADED)
        assert [e.entity_id for e in linked] == ["inv-1"]
        assert loaded[0].details["invoice_count"] == 1


class FailingSink(AuditSinkInterface):
    """Sink that always fails."""

    def append_event(self, event: AuditEvent) -> bool:
        raise RuntimeError("sink unavailable")

    def get_events_by_entity(self, entity_type, entity_id):
        return []

    def get_recent_events(self, limit=100):
        return []


class TestAuditLogger:
    """Tests for the audit logger."""

    def test_logs_to_sink(self, audit_logger, audit_sink):
        """Events end up in the sink."""
        audit_logger.log_comparison_failed("t1", "t2", "boom")
        assert len(audit_sink.events) == 1
        assert audit_sink.events[0].event_type == AuditEventType.COMPARISON_FAILED

    def test_sink_failure_not_raised(self):
        """A failing sink never breaks the caller."""
        logger = AuditLogger(sink=FailingSink())
        event = AuditEvent(event_type=AuditEventType.RENDER_FAILED, description="x")
        assert logger.log(event) is False

    def test_no_sink(self):
        """Without a sink, logging succeeds locally."""
        event = AuditEvent(event_type=AuditEventType.RENDER_FAILED, description="x")
        assert AuditLogger().log(event) is True

    def test_recent_events_newest_first(self):
        """get_recent_events returns the latest events first."""
        sink = MemoryAuditSink()
        logger = AuditLogger(sink=sink)
        logger.log_render_failed("t1", "first")
        logger.log_render_failed("t2", "second")
        assert [e.entity_id for e in sink.get_recent_events(limit=1)] == ["t2"]


class TestSettings:
    """Tests for configuration defaults."""

    def test_formatting_defaults(self):
        """Two decimals, comma grouping, ISO dates."""
        formatting = get_settings().formatting
        assert formatting.decimal_places == 2
        assert formatting.thousands_separator == ","
        assert formatting.date_format == "%Y-%m-%d"

    def test_log_level_validated(self, monkeypatch):
        """Unknown log levels are rejected."""
        from gnucash_ledger.config import AppSettings

        monkeypatch.setenv("GNUCASH_LEDGER_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError):
            AppSettings()

    def test_debug_mode_forces_debug_level(self, monkeypatch):
        """GNUCASH_LEDGER_DEBUG_MODE overrides the configured log level."""
        import logging

        from gnucash_ledger.audit import configure_logging
        from gnucash_ledger.audit.logger import LOGGER_NAME

        monkeypatch.setenv("GNUCASH_LEDGER_DEBUG_MODE", "true")
        monkeypatch.setenv("GNUCASH_LEDGER_LOG_LEVEL", "WARNING")
        try:
            configure_logging()
            assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

            configure_logging(level="ERROR")
            assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
        finally:
            monkeypatch.undo()
            configure_logging()

    def test_validate_all_settings(self):
        """All sections load with defaults."""
        results = validate_all_settings()
        assert results["app"] is True
        assert results["formatting"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
