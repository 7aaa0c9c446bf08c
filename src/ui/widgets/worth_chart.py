"""Historic worth chart widget."""

from decimal import Decimal
from typing import List, Optional

from rich.text import Text
from textual.message import Message
from textual.widgets import Static

from src.core.constants import DATE_FORMAT
from src.core.models import WorthChart, WorthPoint

# Block characters for different heights (0-8)
BLOCKS = " ▁▂▃▄▅▆▇█"


def resample(data: List[float], target_len: int) -> List[float]:
    """Average data down to at most target_len buckets."""
    if len(data) <= target_len:
        return list(data)

    step = len(data) / target_len
    result = []

    for i in range(target_len):
        segment = data[int(i * step):int((i + 1) * step)]
        if segment:
            result.append(sum(segment) / len(segment))

    return result


def normalize(data: List[float]) -> List[float]:
    """Normalize data to the 0-8 block range."""
    if not data:
        return []

    min_val = min(data)
    max_val = max(data)
    range_val = max_val - min_val

    if range_val == 0:
        return [4.0] * len(data)  # Flat line in the middle

    return [((v - min_val) / range_val) * 8 for v in data]


def format_worth(value: Decimal, currency: str) -> str:
    """Format a fiat worth for display, e.g. "1,234.50 USD"."""
    return f"{value:,.2f} {currency}"


def column_for_index(index: int, series_len: int, columns: int) -> int:
    """Sparkline column that shows the series point at ``index``."""
    if series_len <= columns:
        return index
    return min(int(index * columns / series_len), columns - 1)


class WorthChartWidget(Static):
    """
    Block sparkline of the historic worth series.

    Drawn in the trend colour. A hover cursor walks the displayed points
    and resolves each position through the chart's hover lookup.
    """

    class DataPointHovered(Message):
        """Posted when the hovered point changes (None when cleared)."""

        def __init__(self, point: Optional[WorthPoint]) -> None:
            super().__init__()
            self.point = point

    def __init__(self, width: int = 60, **kwargs):
        super().__init__(**kwargs)
        self._width = width
        self._chart: Optional[WorthChart] = None
        self._hover_index = -1

    @property
    def chart(self) -> Optional[WorthChart]:
        return self._chart

    @property
    def hover_index(self) -> int:
        return self._hover_index

    def set_chart(self, chart: Optional[WorthChart]) -> None:
        """Show a new chart (None renders nothing) and clear the hover."""
        self._chart = chart
        self._hover_index = -1
        self.post_message(self.DataPointHovered(None))
        self._refresh_content()

    def hover(self, index: int) -> Optional[WorthPoint]:
        """Hover the point at ``index``; -1 or out of range clears it."""
        point = self._chart.point_at(index) if self._chart is not None else None
        self._hover_index = index if point is not None else -1
        self.post_message(self.DataPointHovered(point))
        self._refresh_content()
        return point

    def move_hover(self, step: int) -> Optional[WorthPoint]:
        """Move the hover cursor by ``step`` points, starting from the latest point."""
        if self._chart is None:
            return None
        if self._hover_index == -1:
            return self.hover(len(self._chart) - 1)
        index = max(0, min(self._hover_index + step, len(self._chart) - 1))
        return self.hover(index)

    def clear_hover(self) -> None:
        self.hover(-1)

    def on_mount(self) -> None:
        """Initial render."""
        self._refresh_content()

    def _refresh_content(self) -> None:
        """Render the chart."""
        if self._chart is None:
            self.update(Text(""))
            return

        chart = self._chart
        color = chart.trend.color
        values = [float(v) for v in chart.values]
        normalized = normalize(resample(values, self._width))
        cursor = (
            column_for_index(self._hover_index, len(values), self._width)
            if self._hover_index >= 0
            else -1
        )

        content = Text()
        content.append(f"{chart.length.label} ", style="dim")
        for column, val in enumerate(normalized):
            idx = min(int(val), len(BLOCKS) - 1)
            style = f"reverse {color}" if column == cursor else color
            content.append(BLOCKS[idx], style=style)

        content.append("\n")
        content.append(format_worth(chart.first.value, chart.currency), style="dim")
        content.append(" → ", style="dim")
        content.append(format_worth(chart.last.value, chart.currency), style=f"bold {color}")
        content.append(f" ({chart.change:+,.2f})", style=color)

        point = chart.point_at(self._hover_index)
        if point is not None:
            content.append("\n")
            content.append(f"{point.date.strftime(DATE_FORMAT)}: ", style="dim")
            content.append(format_worth(point.value, chart.currency), style="bold white")

        self.update(content)
