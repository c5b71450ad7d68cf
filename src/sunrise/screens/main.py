"""Main selector screen: project list, VM tree and filter."""

from typing import ClassVar

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Static

from sunrise.services.base import InventoryError
from sunrise.services.inventory import InventoryService
from sunrise.state.controller import AppState, SelectorController
from sunrise.state.events import (
    Command,
    Event,
    Exit,
    InstancesLoaded,
    KeyPressed,
    LoadFailed,
    LoadInstances,
    LoadProjects,
    ProjectsLoaded,
    Resized,
)
from sunrise.utils.logging import get_logger
from sunrise.widgets.selector_list import SelectorList
from sunrise.widgets.status_bar import StatusBar

logger = get_logger(__name__)


class ControllerEvent(Message):
    """Carries a controller event (usually a load result) through the message queue."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


class MainScreen(Screen[None]):
    """Selector screen.

    Layout:
    +------------------------------------------+
    |  Title                                   |
    |  Filter: <query>        (while filtering) |
    +------------------------------------------+
    |  1. row                                  |
    |> 2. highlighted row                      |
    |  ...                                     |
    +------------------------------------------+
    |  Status bar (help)                       |
    +------------------------------------------+

    Every key press, resize and load result is turned into a controller event.
    The widgets are redrawn from the controller after each one.
    """

    BINDINGS: ClassVar = [
        Binding("ctrl+c", "quit_selector", "Quit", show=False, priority=True),
    ]

    CSS = """
    MainScreen {
        layout: vertical;
    }

    #title {
        margin: 1 2 0 2;
        text-style: bold;
    }

    #filter-line {
        margin: 0 2;
        height: auto;
        display: none;
    }

    #filter-line.visible {
        display: block;
    }

    #error {
        margin: 1 2;
        color: $error;
        display: none;
    }

    #error.visible {
        display: block;
    }

    SelectorList {
        margin: 1 0;
        height: 1fr;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        background: $primary;
        color: $text;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        controller: SelectorController,
        inventory: InventoryService,
    ) -> None:
        """Initialize the main screen.

        Args:
            controller: Selector state machine
            inventory: Service used for project and VM listings
        """
        super().__init__()
        self.controller = controller
        self.inventory = inventory
        self.title_label: Static | None = None
        self.filter_line: Static | None = None
        self.error_label: Static | None = None
        self.selector_list: SelectorList | None = None
        self.status_bar: StatusBar | None = None

    def compose(self) -> ComposeResult:
        """Compose the screen layout.

        Yields:
            Widget components
        """
        self.title_label = Static(id="title")
        yield self.title_label

        self.filter_line = Static(id="filter-line")
        yield self.filter_line

        self.error_label = Static(id="error")
        yield self.error_label

        self.selector_list = SelectorList(theme=self.controller.theme)
        yield self.selector_list

        self.status_bar = StatusBar()
        yield self.status_bar

    async def on_mount(self) -> None:
        """Size the list and start the first inventory load."""
        logger.info("Main screen mounted")
        self.controller.handle(Resized(self.app.size.width, self.app.size.height))
        command = self.controller.start()
        self.refresh_view()
        if command is not None:
            self._perform(command)

    def feed(self, event: Event) -> None:
        """Feed one event to the controller and carry out the resulting command.

        Args:
            event: Controller event
        """
        command = self.controller.handle(event)
        self.refresh_view()
        if command is not None:
            self._perform(command)

    async def on_key(self, event: events.Key) -> None:
        """Forward key presses to the controller."""
        event.stop()
        event.prevent_default()
        self.feed(KeyPressed(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        """Forward terminal size changes to the controller."""
        self.feed(Resized(event.size.width, event.size.height))

    def on_controller_event(self, message: ControllerEvent) -> None:
        """Handle load results posted by workers."""
        self.feed(message.event)

    def action_quit_selector(self) -> None:
        """Quit from any state (Ctrl+C)."""
        self.feed(KeyPressed("ctrl+c"))

    def _perform(self, command: Command) -> None:
        if isinstance(command, LoadProjects):
            self.run_worker(self._load_projects(), group="inventory", exclusive=True)
        elif isinstance(command, LoadInstances):
            self.run_worker(
                self._load_instances(command.project_id), group="inventory", exclusive=True
            )
        elif isinstance(command, Exit):
            logger.info(f"Leaving selector in state {self.controller.state.value}")
            self.app.exit(command.selection)

    async def _load_projects(self) -> None:
        try:
            projects = await self.inventory.list_projects()
        except InventoryError as e:
            self.post_message(ControllerEvent(LoadFailed(e)))
            return
        self.post_message(ControllerEvent(ProjectsLoaded(projects)))

    async def _load_instances(self, project_id: str) -> None:
        try:
            instances = await self.inventory.list_instances(project_id)
        except InventoryError as e:
            self.post_message(ControllerEvent(LoadFailed(e)))
            return
        self.post_message(ControllerEvent(InstancesLoaded(instances)))

    def refresh_view(self) -> None:
        """Redraw all widgets from the controller."""
        controller = self.controller
        loading = controller.state in (AppState.LOADING_PROJECTS, AppState.LOADING_VMS)

        if self.title_label:
            self.title_label.update(Text(controller.title, style=controller.theme.title))

        if self.filter_line:
            self.filter_line.set_class(controller.filtering, "visible")
            self.filter_line.update(
                Text.assemble(
                    ("Filter:", controller.theme.filter_label), " ", controller.filter_text
                )
            )

        if self.error_label:
            self.error_label.set_class(controller.error is not None, "visible")
            if controller.error is not None:
                self.error_label.update(
                    Text(f"Error: {controller.error}", style=controller.theme.error)
                )

        if self.selector_list:
            self.selector_list.display = controller.error is None and not loading
            self.selector_list.show(
                controller.visible_rows(),
                page=controller.cursor.page,
                page_count=controller.cursor.page_count,
                width=controller.width,
            )

        if self.status_bar:
            self.status_bar.set_project(controller.selected_project or None)
            self.status_bar.set_loading(loading and controller.error is None)
            self.status_bar.set_hint(controller.help_text)
