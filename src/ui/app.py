"""Main Textual application for Wallet Worth Tracker."""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header, Footer, Static

from config.settings import Settings, get_settings
from src.core.models import ChartLength, WorthChart
from src.data.pipeline import DataPipeline
from src.ui.widgets.worth_chart import WorthChartWidget, format_worth

logger = logging.getLogger(__name__)

STATUS_HINT = "1/2/3: Week/Month/Year | ←/→: Inspect | R: Refresh  Q: Quit"


class WorthTrackerApp(App):
    """Terminal dashboard charting the historic fiat worth of a wallet."""

    TITLE = "Wallet Worth Tracker"

    CSS = """
    Screen { background: #000000; }

    #worth-chart {
        height: auto;
        border: solid #333;
        padding: 1;
        margin: 1;
    }
    #summary {
        height: auto;
        padding: 0 1;
        color: #ff8c00;
    }
    #status {
        dock: bottom;
        height: 1;
        background: #111;
        color: #888;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("1", "show_length('1w')", "1W"),
        Binding("2", "show_length('1m')", "1M"),
        Binding("3", "show_length('1y')", "1Y"),
        Binding("left", "hover(-1)", "Prev", show=False),
        Binding("right", "hover(1)", "Next", show=False),
        Binding("escape", "clear_hover", "Clear", show=False),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        pipeline: Optional[DataPipeline] = None,
    ):
        super().__init__()
        self.settings = settings or get_settings()
        self.pipeline = pipeline or DataPipeline(settings=self.settings)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="summary")
        yield WorthChartWidget(id="worth-chart")
        yield Static(STATUS_HINT, id="status")
        yield Footer()

    async def on_mount(self) -> None:
        """Load inputs after app is mounted."""
        await self.action_refresh()

    def _show_chart(self, chart: Optional[WorthChart]) -> None:
        self.query_one("#worth-chart", WorthChartWidget).set_chart(chart)

        engine = self.pipeline.engine
        summary = self.query_one("#summary", Static)
        if chart is None:
            summary.update("Loading..." if not engine.is_ready else "No worth history to display")
        else:
            summary.update(
                f"{self.settings.asset_symbol} worth · {len(engine.selected_addresses)} addresses · "
                f"{format_worth(chart.last.value, chart.currency)}"
            )

    async def action_refresh(self) -> None:
        """Reload balances and prices."""
        try:
            chart = await self.pipeline.refresh(force_refresh=True)
        except Exception as e:
            logger.error(f"Error refreshing: {e}")
            self.query_one("#summary", Static).update(f"Error: {e}")
            return
        self._show_chart(chart)

    def action_show_length(self, length: str) -> None:
        """Switch the chart window."""
        self.pipeline.engine.set_length(ChartLength.parse(length))
        self._show_chart(self.pipeline.engine.chart())

    def action_hover(self, step: int) -> None:
        """Move the hover cursor."""
        self.query_one("#worth-chart", WorthChartWidget).move_hover(step)

    def action_clear_hover(self) -> None:
        self.query_one("#worth-chart", WorthChartWidget).clear_hover()

    def on_worth_chart_widget_data_point_hovered(
        self, event: WorthChartWidget.DataPointHovered
    ) -> None:
        """Mirror the hovered point in the status bar."""
        status = self.query_one("#status", Static)
        chart = self.pipeline.engine.chart()
        if event.point is None or chart is None:
            status.update(STATUS_HINT)
            return
        status.update(f"{event.point.date.isoformat()}  {format_worth(event.point.value, chart.currency)}")


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    WorthTrackerApp(settings=settings).run()


if __name__ == "__main__":
    main()
