"""
Personal Ledger - Source Package

A single-account ledger that records signed transactions, reports a
running balance, answers date-scoped queries and persists its history
through a swappable storage backend.

DESIGN PRINCIPLES:
1. Balance always equals the sum of the history
2. Rejections are reported, never fatal
3. No silent corrections
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Ledger Team"
