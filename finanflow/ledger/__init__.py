"""Ledger package: transaction store and receiver registry."""

from finanflow.ledger.registry import ReceiverRegistry
from finanflow.ledger.seed import demo_transactions
from finanflow.ledger.store import LedgerStore

__all__ = ["LedgerStore", "ReceiverRegistry", "demo_transactions"]
