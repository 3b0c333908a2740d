"""
Utility functions module.

Session clock helpers shared by the engine and the action records.
"""
