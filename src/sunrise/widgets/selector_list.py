"""Paginated list widget showing the controller's rows."""

from typing import Any

from rich.console import RenderableType
from rich.text import Text
from textual.widgets import Static

from sunrise.widgets.instance_rows import DEFAULT_THEME, Theme

NO_ITEMS = "No items."


class SelectorList(Static):
    """Renders one page of rows with the highlighted row marked.

    The widget holds no selection state of its own; the controller owns the
    cursor and the rows, and :meth:`show` redraws from them.
    """

    def __init__(self, *args: Any, theme: Theme = DEFAULT_THEME, **kwargs: Any) -> None:
        """Initialize the list."""
        super().__init__(*args, **kwargs)
        self._row_theme = theme

    def show(
        self,
        rows: list[tuple[int, Text, bool]],
        page: int = 0,
        page_count: int = 1,
        width: int | None = None,
    ) -> None:
        """Redraw the list.

        Args:
            rows: ``(index, text, highlighted)`` for the rows on the visible page
            page: Zero-based page number
            page_count: Total number of pages
            width: Available width in cells, used to truncate long rows
        """
        self.update(self.build(rows, page, page_count, width))

    def build(
        self,
        rows: list[tuple[int, Text, bool]],
        page: int = 0,
        page_count: int = 1,
        width: int | None = None,
    ) -> RenderableType:
        """Compose the list body."""
        if not rows:
            return Text(NO_ITEMS, style="dim")

        lines: list[Text] = []
        for index, row, highlighted in rows:
            label = Text(f"{index + 1}. ")
            label.append_text(row)
            if highlighted:
                line = Text("> ")
                line.append_text(label)
                line.stylize(self._row_theme.selected)
            else:
                line = Text("  ")
                line.append_text(label)
            if width:
                line.truncate(width, overflow="ellipsis")
            lines.append(line)

        if page_count > 1:
            dots = "".join("•" if i == page else "○" for i in range(page_count))
            lines.append(Text(""))
            lines.append(Text(dots, style="dim"))

        return Text("\n").join(lines)
