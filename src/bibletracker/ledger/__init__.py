"""Reading ledger module."""

from .manager import LedgerManager

__all__ = ["LedgerManager"]
