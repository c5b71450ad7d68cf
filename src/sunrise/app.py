"""Textual application hosting the selector screen."""

from textual.app import App

from sunrise.config import Config, get_config
from sunrise.screens.main import MainScreen
from sunrise.services.inventory import InventoryService, get_inventory_service
from sunrise.state.controller import SelectorController
from sunrise.state.events import Selection
from sunrise.utils.logging import get_logger
from sunrise.widgets.instance_rows import DEFAULT_THEME, Theme

logger = get_logger(__name__)


class SunriseApp(App[Selection | None]):
    """Pick a project and a VM; exits with the chosen VM or None on quit."""

    TITLE = "Sunrise"

    def __init__(
        self,
        project_id: str | None = None,
        config: Config | None = None,
        inventory: InventoryService | None = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        """Initialize the application.

        Args:
            project_id: Project to open directly, skipping project selection
            config: Configuration (defaults to the global config)
            inventory: Inventory service (defaults to the global service)
            theme: Row styles
        """
        super().__init__()
        self.app_config = config or get_config()
        self.inventory = inventory or get_inventory_service(self.app_config)
        self.controller = SelectorController(
            project_id=project_id,
            theme=theme,
            min_height=self.app_config.list_min_height,
            ui_overhead=self.app_config.ui_overhead,
        )

    def on_mount(self) -> None:
        """Show the selector screen."""
        logger.info("Starting selector")
        self.push_screen(MainScreen(self.controller, self.inventory))
