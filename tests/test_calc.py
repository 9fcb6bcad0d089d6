"""Tests for the derived calculation engine."""

import pytest

from cashflow.engine.calc import (
    asset_extra_expenses_monthly,
    asset_liability,
    asset_monthly_cashflow,
    asset_value,
    base_expenses_monthly,
    is_on_fast_track,
    liabilities_monthly_payments,
    monthly_cashflow,
    net_worth,
    passive_income_monthly,
    should_enter_fast_track,
    summarize,
    total_expenses_monthly,
    total_income_monthly,
)
from cashflow.models.player import (
    BusinessAsset,
    Liability,
    PersonalPropertyAsset,
    Phase,
    Player,
    Profession,
    RealEstateAsset,
    StockAsset,
)


class TestAssetFigures:
    """Per-asset cash flow, value and liability."""

    def test_stock_cashflow_is_dividend_times_shares(self):
        stock = StockAsset(name="OK4U", share_price=10, num_shares=200, dividend_per_share=0.5)
        assert asset_monthly_cashflow(stock) == 100
        assert asset_value(stock) == 2000
        assert asset_liability(stock) == 0

    def test_real_estate_uses_stored_figures(self):
        house = RealEstateAsset(
            name="3/2 House", cost=65000, down_payment=5000, liability=60000, cash_flow_monthly=220,
        )
        assert asset_monthly_cashflow(house) == 220
        assert asset_value(house) == 65000
        assert asset_liability(house) == 60000

    def test_business_cashflow_can_be_negative(self):
        shop = BusinessAsset(name="Pizza", cost=1000, down_payment=1000, cash_flow_monthly=-50)
        assert asset_monthly_cashflow(shop) == -50

    def test_personal_property_has_no_cashflow(self):
        boat = PersonalPropertyAsset(name="Boat", cost=18000)
        assert asset_monthly_cashflow(boat) == 0
        assert asset_value(boat) == 18000
        assert asset_liability(boat) == 0


class TestPlayerFigures:
    """Aggregated monthly figures for a player."""

    def test_dividend_scenario(self, dividend_player):
        """Salary 5000, taxes 1500 and 100 of dividends."""
        assert passive_income_monthly(dividend_player) == 100
        assert base_expenses_monthly(dividend_player) == 1500
        assert total_expenses_monthly(dividend_player) == 1500
        assert total_income_monthly(dividend_player) == 5100
        assert monthly_cashflow(dividend_player) == 3600

    def test_negative_asset_cashflow_counts_as_expense(self):
        player = Player(assets=[
            RealEstateAsset(name="Condo", cost=40000, down_payment=4000, cash_flow_monthly=-100),
            RealEstateAsset(name="Duplex", cost=50000, down_payment=5000, cash_flow_monthly=300),
        ])
        assert passive_income_monthly(player) == 300
        assert asset_extra_expenses_monthly(player) == 100
        assert total_expenses_monthly(player) == 100

    def test_children_and_rent_are_base_expenses(self):
        player = Player(
            children=2,
            profession=Profession(taxes=100, other_expenses=200, per_child_expense=50, rent_payment=700),
        )
        assert base_expenses_monthly(player) == 100 + 200 + 2 * 50 + 700

    def test_liability_payments(self):
        player = Player(liabilities=[
            Liability(name="Bank", principal=5000, payment_monthly=500),
            Liability(name="Friend", principal=1000),
        ])
        assert liabilities_monthly_payments(player) == 500
        assert total_expenses_monthly(player) == 500

    def test_paycheck_can_be_negative(self):
        player = Player(profession=Profession(salary=1000, taxes=1500))
        assert monthly_cashflow(player) == -500

    def test_net_worth_subtracts_every_debt(self):
        player = Player(
            cash=1000,
            assets=[
                StockAsset(name="GRO4US", share_price=20, num_shares=100),
                RealEstateAsset(name="House", cost=50000, down_payment=5000, liability=45000),
            ],
            liabilities=[Liability(name="Bank", principal=3000, payment_monthly=300)],
        )
        assert net_worth(player) == pytest.approx(1000 + 2000 + 50000 - 45000 - 3000)


class TestFastTrackPredicate:
    """Passive income must cover total expenses."""

    def test_not_covered(self, dividend_player):
        assert should_enter_fast_track(dividend_player) is False

    def test_covered_exactly(self):
        player = Player(
            profession=Profession(taxes=100),
            assets=[StockAsset(name="CD", share_price=1, num_shares=100, dividend_per_share=1)],
        )
        assert should_enter_fast_track(player) is True

    def test_phase_flag(self, dividend_player):
        assert is_on_fast_track(dividend_player) is False
        dividend_player.phase = Phase.FAST_TRACK
        assert is_on_fast_track(dividend_player) is True


class TestSummary:
    """The dashboard snapshot."""

    def test_summary_matches_functions(self, dividend_player):
        summary = summarize(dividend_player)
        assert summary.passive_income == 100
        assert summary.total_expenses == 1500
        assert summary.total_income == 5100
        assert summary.cashflow == 3600
        assert summary.phase == Phase.RAT_RACE

    def test_coverage(self, dividend_player):
        summary = summarize(dividend_player)
        assert summary.passive_income_coverage == pytest.approx(100 / 1500)

    def test_coverage_without_expenses(self):
        assert summarize(Player()).passive_income_coverage == 0.0
