"""
Option lifecycle module.

Issues protective call and put contracts alongside equity buys and
exercises them early once they move into the money.
"""
from .lifecycle import OptionLifecycleManager

__all__ = ["OptionLifecycleManager"]
