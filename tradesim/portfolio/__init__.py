"""
Portfolio module.

Owns the shared cash balance and executes equity trades against the
per-instrument positions.
"""
from .balance import Balance
from .manager import PortfolioManager

__all__ = ["Balance", "PortfolioManager"]
