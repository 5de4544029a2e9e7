"""
Spend Tracker - Source Package

A personal expense tracker: record expenses by hand or from a scanned
receipt, browse the history, and see how the current month is going.

DESIGN PRINCIPLES:
1. The store owns the canonical expense list
2. Every mutation rewrites the whole persisted snapshot
3. Statistics are recomputed on every read, never cached
4. Scanning and sign-in are swappable capabilities
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Spend Tracker Team"
