"""UI widgets for Wallet Worth Tracker."""

from .worth_chart import WorthChartWidget

__all__ = ["WorthChartWidget"]
