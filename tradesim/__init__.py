"""
tradesim - Intraday Option-Hedged Trend Trading Engine

A single-session trading simulator that trades a fixed set of instruments on
a simple moving average signal, hedges every entry with Black-Scholes priced
call and put options, exercises in-the-money contracts early and settles the
whole book at the end of the session.
"""

__version__ = "0.1.0"
__author__ = "tradesim Team"
