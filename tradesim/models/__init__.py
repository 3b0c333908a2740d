"""
Data models and contracts module.

Option contracts, positions, decision results and the action records the
engine emits. Records that never change after creation are frozen
dataclasses.
"""
