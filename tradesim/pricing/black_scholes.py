"""Black-Scholes European option pricing"""

import math

from ..errors import InvalidPricingInputError
from ..models.contracts import OptionKind


def normal_cdf(x: float) -> float:
    """
    Standard normal cumulative distribution function

    Phi(x) = 0.5 * erfc(-x / sqrt(2))

    Args:
        x: Point to evaluate

    Returns:
        Probability that a standard normal variable is <= x
    """
    return 0.5 * math.erfc(-x / math.sqrt(2.0))


def intrinsic_value(kind: OptionKind, spot: float, strike: float) -> float:
    """Immediate exercise value of an option."""
    if kind is OptionKind.CALL:
        return max(0.0, spot - strike)
    return max(0.0, strike - spot)


def _validate_inputs(S: float, K: float, T: float, r: float, sigma: float) -> None:
    inputs = {"spot": S, "strike": K, "maturity": T, "rate": r, "volatility": sigma}

    for name, value in inputs.items():
        if not math.isfinite(value):
            raise InvalidPricingInputError(f"{name} must be finite, got {value}", inputs=inputs)

    if S <= 0:
        raise InvalidPricingInputError(f"spot must be positive, got {S}", inputs=inputs)
    if K <= 0:
        raise InvalidPricingInputError(f"strike must be positive, got {K}", inputs=inputs)
    if sigma < 0:
        raise InvalidPricingInputError(f"volatility must be non-negative, got {sigma}", inputs=inputs)


def _d1_d2(S: float, K: float, T: float, r: float, sigma: float) -> tuple[float, float]:
    vol_sqrt_t = sigma * math.sqrt(T)
    d1 = (math.log(S / K) + (r + 0.5 * sigma * sigma) * T) / vol_sqrt_t
    return d1, d1 - vol_sqrt_t


def call_price(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Price a European call option

    Zero volatility or an expired contract (T <= 0) is worth its intrinsic
    value.

    Args:
        S: Spot price
        K: Strike price
        T: Time to maturity in years
        r: Annual risk-free rate
        sigma: Annual volatility

    Returns:
        Call option value

    Raises:
        InvalidPricingInputError: Non-finite inputs, non-positive spot or
            strike, or negative volatility
    """
    _validate_inputs(S, K, T, r, sigma)
    if sigma == 0 or T <= 0:
        return intrinsic_value(OptionKind.CALL, S, K)

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    return S * normal_cdf(d1) - K * math.exp(-r * T) * normal_cdf(d2)


def put_price(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Price a European put option

    Same degenerate handling and input validation as :func:`call_price`.

    Returns:
        Put option value
    """
    _validate_inputs(S, K, T, r, sigma)
    if sigma == 0 or T <= 0:
        return intrinsic_value(OptionKind.PUT, S, K)

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    return K * math.exp(-r * T) * normal_cdf(-d2) - S * normal_cdf(-d1)


def option_price(kind: OptionKind, S: float, K: float, T: float, r: float, sigma: float) -> float:
    """Price a call or put depending on kind."""
    if kind is OptionKind.CALL:
        return call_price(S, K, T, r, sigma)
    return put_price(S, K, T, r, sigma)
