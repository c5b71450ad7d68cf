"""Status bar widget for displaying application status."""

from typing import Any

from textual.widgets import Static

LOADING_TEXT = "Waiting for gcloud..."
SEPARATOR = "  |  "


class StatusBar(Static):
    """Widget for displaying status information and keyboard shortcuts."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the status bar."""
        super().__init__(*args, **kwargs)
        self._project: str | None = None
        self._loading: bool = False
        self._hint: str = ""

    def set_project(self, project_name: str | None) -> None:
        """Set the currently selected project.

        Args:
            project_name: ID of the selected project
        """
        self._project = project_name
        self._update_display()

    def set_loading(self, loading: bool) -> None:
        """Set loading status.

        Args:
            loading: Whether an inventory load is in flight
        """
        self._loading = loading
        self._update_display()

    def set_hint(self, hint: str) -> None:
        """Set the keyboard help for the current state."""
        self._hint = hint
        self._update_display()

    def _update_display(self) -> None:
        """Update the status bar display."""
        parts = []

        if self._project:
            parts.append(f"Project: {self._project}")

        if self._loading:
            parts.append(LOADING_TEXT)

        if self._hint:
            parts.append(self._hint)

        status_text = SEPARATOR.join(parts) if parts else "Ready"
        self.update(status_text)
