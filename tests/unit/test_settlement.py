"""Tests for end-of-session settlement"""

import pytest

from tradesim.config.defaults import PortfolioParams
from tradesim.errors import MissingPriceError
from tradesim.models.contracts import OptionContract, OptionKind
from tradesim.models.positions import Portfolio
from tradesim.portfolio.balance import Balance
from tradesim.portfolio.manager import PortfolioManager
from tradesim.settlement import SettlementEngine


def contract(kind: OptionKind, strike: float, premium: float = 1.0) -> OptionContract:
    return OptionContract(kind=kind, strike=strike, premium=premium, time_to_maturity=0.1)


@pytest.fixture
def book():
    balance = Balance(0.0)
    portfolio = Portfolio()
    manager = PortfolioManager(balance, portfolio, PortfolioParams())
    engine = SettlementEngine(balance, portfolio, manager)
    return balance, portfolio, engine


class TestSettlement:
    """Test liquidation, payout and expiry at the final prices"""

    def test_liquidates_at_last_price_without_slippage(self, book):
        balance, portfolio, engine = book
        portfolio.get_or_create("ACME").add_shares(10, 90.0)

        result = engine.settle({"ACME": 95.0})

        assert len(result.sales) == 1
        assert result.sales[0].quantity == 10
        assert result.sales[0].price == 95.0
        assert balance.available == pytest.approx(950.0)
        assert portfolio.get("ACME").is_flat
        assert portfolio.get("ACME").avg_price == 0.0

    def test_pays_in_the_money_and_expires_the_rest(self, book):
        balance, portfolio, engine = book
        position = portfolio.get_or_create("ACME")
        position.options = [
            contract(OptionKind.CALL, 94.5),
            contract(OptionKind.PUT, 85.5),
            contract(OptionKind.PUT, 100.0),
        ]

        result = engine.settle({"ACME": 95.0})

        assert [p.contract.strike for p in result.payouts] == [94.5, 100.0]
        assert [p.payout for p in result.payouts] == pytest.approx([0.5, 5.0])
        assert [c.strike for _, c in result.expired] == [85.5]
        assert balance.available == pytest.approx(5.5)
        assert result.total_credit == pytest.approx(5.5)
        assert position.options == []

    def test_contract_at_strike_expires(self, book):
        balance, portfolio, engine = book
        portfolio.get_or_create("ACME").options = [contract(OptionKind.CALL, 95.0)]

        result = engine.settle({"ACME": 95.0})

        assert result.payouts == []
        assert len(result.expired) == 1
        assert balance.available == 0.0

    def test_options_without_shares_are_settled(self, book):
        balance, portfolio, engine = book
        portfolio.get_or_create("ACME").options = [contract(OptionKind.PUT, 85.5)]

        result = engine.settle({"ACME": 80.0})

        assert result.sales == []
        assert result.payouts[0].payout == pytest.approx(5.5)

    def test_missing_price_rejected_without_changes(self, book):
        balance, portfolio, engine = book
        portfolio.get_or_create("ACME").add_shares(10, 90.0)
        portfolio.get_or_create("BETA").add_shares(5, 50.0)

        with pytest.raises(MissingPriceError) as exc_info:
            engine.settle({"ACME": 95.0})

        assert exc_info.value.instrument == "BETA"
        assert balance.available == 0.0
        assert portfolio.get("ACME").shares == 10
        assert portfolio.get("BETA").shares == 5

    def test_flat_positions_need_no_price(self, book):
        balance, portfolio, engine = book
        portfolio.get_or_create("IDLE")

        result = engine.settle({})

        assert result.sales == []
        assert result.total_credit == 0.0

    def test_second_settlement_is_noop(self, book):
        balance, portfolio, engine = book
        position = portfolio.get_or_create("ACME")
        position.add_shares(10, 90.0)
        position.options = [contract(OptionKind.CALL, 94.5)]

        engine.settle({"ACME": 100.0})
        settled_balance = balance.available
        again = engine.settle({"ACME": 120.0})

        assert again.sales == []
        assert again.payouts == []
        assert again.expired == []
        assert balance.available == settled_balance
