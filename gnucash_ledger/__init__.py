"""
GnuCash Ledger - Read Model Package

The domain layer sitting above a GnuCash document-tree parser.
Rebuilds double-entry transactions from parsed nodes and answers
balance, identity, ordering and invoice cross-reference queries.

DESIGN PRINCIPLES:
1. Money math is exact - no binary floats anywhere
2. Schema-free metadata is tolerated, never rejected
3. Data-integrity errors fail loudly with the offending raw value
4. Lookups that cannot be resolved are logged, not fatal
5. The document is read, never written
"""

__version__ = "1.0.0"
__author__ = "GnuCash Ledger Team"
