"""
FinanFlow - Source Package

Financial ledger for a digital school business: income/expense
transactions, derived summaries, due-date alerts and a sales
commission workflow.

DESIGN PRINCIPLES:
1. Derived views are recomputed from the current snapshot
2. Validation failures are reported, never raised
3. Persistence failures are logged, never surfaced
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "FinanFlow Team"
