"""
Position and portfolio models.

A position tracks the share count, weighted average cost and the option
contracts issued alongside its buys. The invariant ``shares == 0`` if and
only if ``avg_price == 0`` holds after every mutation.
"""

from dataclasses import dataclass, field
from typing import Iterator

from .contracts import OptionContract


@dataclass
class Position:
    """Equity position and hedge contracts for one instrument."""

    instrument: str
    shares: int = 0
    avg_price: float = 0.0
    options: list[OptionContract] = field(default_factory=list)

    @property
    def is_flat(self) -> bool:
        """True when no shares are held."""
        return self.shares == 0

    def add_shares(self, quantity: int, price: float) -> None:
        """Add shares and blend the fill price into the average cost."""
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")

        total = self.shares + quantity
        self.avg_price = (self.avg_price * self.shares + price * quantity) / total
        self.shares = total

    def close(self) -> int:
        """Flatten the position and return the number of shares closed."""
        closed = self.shares
        self.shares = 0
        self.avg_price = 0.0
        return closed

    def invariant_holds(self) -> bool:
        """Check the flat-iff-zero-cost invariant."""
        return (self.shares == 0) == (self.avg_price == 0.0) and self.shares >= 0


class Portfolio:
    """Instrument to position mapping with lazily created positions."""

    def __init__(self) -> None:
        self._positions: dict[str, Position] = {}

    def get_or_create(self, instrument: str) -> Position:
        """Get existing position or create a flat one for the instrument."""
        if instrument not in self._positions:
            self._positions[instrument] = Position(instrument=instrument)
        return self._positions[instrument]

    def get(self, instrument: str) -> Position:
        """Get position for instrument, flat and detached if never referenced."""
        return self._positions.get(instrument) or Position(instrument=instrument)

    def __contains__(self, instrument: object) -> bool:
        return instrument in self._positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions.values())

    def __len__(self) -> int:
        return len(self._positions)

    def open_positions(self) -> list[Position]:
        """Positions currently holding shares."""
        return [pos for pos in self._positions.values() if not pos.is_flat]
