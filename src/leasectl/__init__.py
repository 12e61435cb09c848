"""leasectl — rental agreement ledger."""

__version__ = "0.1.0"
