"""
Price feed module.

Sources of one price per instrument per tick: a seeded random walk for
simulated sessions and a fixed sequence for deterministic runs.
"""
from .price_feed import BasePriceFeed, RandomWalkPriceFeed, SequencePriceFeed

__all__ = ["BasePriceFeed", "RandomWalkPriceFeed", "SequencePriceFeed"]
