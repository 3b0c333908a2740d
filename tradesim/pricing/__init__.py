"""Closed-form option pricing."""

from .black_scholes import call_price, intrinsic_value, normal_cdf, option_price, put_price

__all__ = [
    "normal_cdf",
    "intrinsic_value",
    "call_price",
    "put_price",
    "option_price",
]
