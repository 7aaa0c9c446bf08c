"""Unit tests for the worth chart engine and readiness gate."""

import pytest
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from src.core.models import AddressBalanceHistory, ChartLength, TrendDirection
from src.analytics import worth
from src.analytics.engine import (
    WorthChartEngine,
    build_chart,
    compute_display_series,
    is_ready,
)


class TestReadiness:
    """Tests for is_ready."""

    def test_ready(self, address_x, three_days, make_history, make_prices):
        histories = {address_x: make_history(address_x, {three_days[0]: 1})}
        assert is_ready([address_x], histories, make_prices([1, 1, 1]))

    def test_no_addresses(self, make_prices):
        assert not is_ready([], {}, make_prices([1, 1]))

    def test_missing_history(self, address_x, address_y, make_prices):
        histories = {address_x: AddressBalanceHistory(address=address_x)}
        assert not is_ready([address_x, address_y], histories, make_prices([1, 1]))

    def test_history_not_finished_loading(self, address_x, make_prices):
        histories = {address_x: AddressBalanceHistory(address=address_x)}
        assert not is_ready([address_x], histories, make_prices([1, 1]), loaded_addresses=[])

    def test_prices_not_fetched(self, address_x):
        histories = {address_x: AddressBalanceHistory(address=address_x)}
        assert not is_ready([address_x], histories, None)


class TestComputeDisplaySeries:
    """Tests for compute_display_series."""

    def test_end_to_end_single_point_window_renders_nothing(
        self, address_x, today, make_history, make_prices
    ):
        """Worth [200, 200, 300]; a window starting on the last day leaves one point."""
        start = today - timedelta(days=9)
        prices = make_prices([2, 2, 3], start=start)
        histories = {address_x: make_history(address_x, {start: 100})}

        chart = compute_display_series(
            [address_x], histories, prices, ChartLength.WEEK, today, decimals=0
        )

        assert chart is None

    def test_end_to_end_full_history(self, address_x, today, three_days, make_history, make_prices):
        prices = make_prices([2, 2, 3])
        histories = {address_x: make_history(address_x, {three_days[0]: 100})}

        chart = compute_display_series(
            [address_x], histories, prices, ChartLength.YEAR, today, decimals=0
        )

        assert chart is not None
        assert chart.values == [Decimal("200"), Decimal("200"), Decimal("300")]
        assert chart.trend == TrendDirection.UPWARD
        assert chart.currency == "USD"

    def test_repeated_address_counted_once(
        self, address_x, today, three_days, make_history, make_prices
    ):
        histories = {address_x: make_history(address_x, {three_days[0]: 100})}

        chart = compute_display_series(
            [address_x, address_x],
            histories,
            make_prices([1, 1, 1]),
            ChartLength.YEAR,
            today,
            decimals=0,
        )

        assert chart.values == [Decimal("100"), Decimal("100"), Decimal("100")]

    def test_unfunded_addresses_render_nothing(self, address_x, address_y, today, make_prices):
        histories = {
            address_x: AddressBalanceHistory(address=address_x),
            address_y: AddressBalanceHistory(address=address_y),
        }

        chart = compute_display_series(
            [address_x, address_y], histories, make_prices([1, 1, 1]), ChartLength.YEAR, today
        )

        assert chart is None

    def test_not_ready_renders_nothing(self, today, make_prices):
        assert compute_display_series([], {}, make_prices([1, 2]), ChartLength.WEEK, today) is None

    def test_leading_zeros_trimmed(self, address_x, today, three_days, make_history, make_prices):
        prices = make_prices([5, 5, 5])
        histories = {address_x: make_history(address_x, {three_days[1]: 1})}

        chart = compute_display_series(
            [address_x], histories, prices, ChartLength.YEAR, today, decimals=0
        )

        assert chart.dates == three_days[1:]

    def test_week_window_on_year_of_prices(self, address_x, today, year_of_prices, make_history):
        dates = year_of_prices.dates
        histories = {address_x: make_history(address_x, {dates[0]: 10, dates[-1]: 5})}

        chart = compute_display_series(
            [address_x], histories, year_of_prices, ChartLength.WEEK, today, decimals=0
        )

        assert len(chart) == 8
        assert chart.first.date == today - timedelta(days=7)
        assert chart.trend == TrendDirection.DOWNWARD
        assert chart.metadata["available_points"] == 365


class TestBuildChart:
    def test_single_point_trimmed_series(self, today, make_worth):
        assert build_chart(make_worth([5]), ChartLength.YEAR, today, "USD") is None


class TestWorthChartEngine:
    """Tests for WorthChartEngine."""

    @pytest.fixture
    def engine(self, address_x, address_y, three_days, make_history, make_prices):
        engine = WorthChartEngine(length=ChartLength.YEAR, decimals=0)
        engine.set_addresses([address_x, address_y])
        engine.set_balance_history(make_history(address_x, {three_days[0]: 100}))
        engine.set_balance_history(make_history(address_y, {three_days[2]: 50}))
        engine.set_price_series(make_prices([1, 1, 1]))
        return engine

    def test_chart(self, engine, today):
        chart = engine.chart(today)

        assert chart.values == [Decimal("100"), Decimal("100"), Decimal("150")]

    def test_not_ready_until_all_inputs(self, address_x, today, three_days, make_history, make_prices):
        engine = WorthChartEngine(decimals=0)
        assert engine.chart(today) is None

        engine.set_addresses([address_x])
        engine.set_price_series(make_prices([1, 1, 1]))
        assert not engine.is_ready
        assert engine.chart(today) is None

        engine.set_balance_history(make_history(address_x, {three_days[0]: 1}))
        assert engine.is_ready
        assert engine.chart(today) is not None

    def test_repeated_addresses_tracked_once(self, engine, address_x, address_y, today):
        engine.set_addresses([address_x, address_y, address_x])

        assert engine.selected_addresses == [address_x, address_y]
        assert engine.chart(today).values == [Decimal("100"), Decimal("100"), Decimal("150")]

    def test_version_advances_on_input_change(self, engine, address_y, three_days, make_history):
        version = engine.version
        engine.set_balance_history(make_history(address_y, {three_days[1]: 1}))

        assert engine.version == version + 1

    def test_cached_until_inputs_change(self, engine, address_y, today, three_days, make_history):
        with patch(
            "src.analytics.engine.compute_worth_series", wraps=worth.compute_worth_series
        ) as compute:
            first = engine.chart(today)
            second = engine.chart(today)
            assert first is second
            assert compute.call_count == 1

            engine.set_balance_history(make_history(address_y, {three_days[1]: 50}))
            third = engine.chart(today)
            assert compute.call_count == 2
            assert third.values == [Decimal("100"), Decimal("150"), Decimal("150")]

    def test_length_change_rewindows_without_recompute(self, address_x, today, year_of_prices, make_history):
        engine = WorthChartEngine(length=ChartLength.YEAR, decimals=0)
        engine.set_addresses([address_x])
        engine.set_balance_history(make_history(address_x, {year_of_prices.dates[0]: 1}))
        engine.set_price_series(year_of_prices)

        with patch("src.analytics.engine.compute_worth_series", wraps=worth.compute_worth_series) as compute:
            assert len(engine.chart(today)) == 365
            engine.set_length(ChartLength.WEEK)
            assert len(engine.chart(today)) == 8
            assert compute.call_count == 1

    def test_focus_single_address(self, engine, address_y, today):
        engine.focus(address_y)
        chart = engine.chart(today)

        assert engine.selected_addresses == [address_y]
        assert chart is None  # Y only has one funded day

        engine.focus(None)
        assert engine.chart(today) is not None

    def test_focus_untracked_address(self, engine):
        with pytest.raises(ValueError):
            engine.focus("unknown")

    def test_invalidated_history_not_ready(self, engine, address_x, today):
        engine.invalidate_balance_history(address_x)

        assert not engine.is_ready
        assert engine.chart(today) is None
        assert engine.hovered_point(0) is None

    def test_hovered_point(self, engine, today):
        chart = engine.chart(today)

        assert engine.hovered_point(2) == chart.points[2]
        assert engine.hovered_point(-1) is None
        assert engine.hovered_point(3) is None

    def test_hover_before_any_chart(self):
        assert WorthChartEngine().hovered_point(0) is None
