"""State machine behind the project and VM pickers.

The controller has no knowledge of Textual. It receives events (key
presses, resizes, load results), updates its state and the rows to display,
and returns at most one command for the caller to carry out.

State progression::

    LOADING_PROJECTS -> SELECTING_PROJECT -> LOADING_VMS -> SELECTING_VM -> READY_TO_CONNECT
                               ^                                  |
                               +------------- escape -------------+

``QUITTING`` can be reached from every non-terminal state.
"""

import string
from enum import Enum

from rich.text import Text

from sunrise.models.project import Project
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
    Selection,
)
from sunrise.state.instance_tree import GroupNode, InstanceNode, InstanceTree, TreeNode
from sunrise.state.tree_filter import filter_nodes
from sunrise.utils.logging import get_logger
from sunrise.widgets.instance_rows import DEFAULT_THEME, Theme, render_rows

logger = get_logger(__name__)

DEFAULT_WIDTH = 20
DEFAULT_HEIGHT = 14
MIN_HEIGHT = 5
UI_OVERHEAD = 7

FILTER_CHARS = frozenset(string.ascii_letters + string.digits + "-_ ")


def is_filter_char(character: str | None) -> bool:
    """Check if a character may be typed into the filter."""
    return character is not None and len(character) == 1 and character in FILTER_CHARS


class AppState(Enum):
    """States of the selector."""

    LOADING_PROJECTS = "loading_projects"
    SELECTING_PROJECT = "selecting_project"
    LOADING_VMS = "loading_vms"
    SELECTING_VM = "selecting_vm"
    READY_TO_CONNECT = "ready_to_connect"
    QUITTING = "quitting"


TERMINAL_STATES = frozenset({AppState.READY_TO_CONNECT, AppState.QUITTING})


class ListCursor:
    """Highlighted row and pagination of a list of ``count`` rows.

    Rows are split into pages of ``per_page`` rows; the visible page is the
    one containing the cursor.
    """

    def __init__(self, per_page: int = DEFAULT_HEIGHT) -> None:
        self.index = 0
        self.count = 0
        self.per_page = max(per_page, 1)

    def set_count(self, count: int) -> None:
        """Update the number of rows, keeping the cursor in range."""
        self.count = count
        self.move_to(self.index)

    def move_to(self, index: int) -> None:
        self.index = max(0, min(index, self.count - 1))

    def handle(self, key: str) -> bool:
        """Apply a navigation key.

        Args:
            key: Textual key name

        Returns:
            True if the key is a navigation key
        """
        if key in ("up", "k"):
            self.move_to(self.index - 1)
        elif key in ("down", "j"):
            self.move_to(self.index + 1)
        elif key == "pageup":
            self.move_to(self.index - self.per_page)
        elif key == "pagedown":
            self.move_to(self.index + self.per_page)
        elif key == "home":
            self.move_to(0)
        elif key == "end":
            self.move_to(self.count - 1)
        else:
            return False
        return True

    @property
    def page(self) -> int:
        return self.index // self.per_page

    @property
    def page_count(self) -> int:
        return max(1, -(-self.count // self.per_page))

    def window(self) -> range:
        """Indices of the rows on the current page."""
        start = self.page * self.per_page
        return range(start, min(start + self.per_page, self.count))


class SelectorController:
    """Drives project selection, VM tree navigation and filtering.

    The VM list always displays ``_displayed_nodes``: the flattened canonical
    tree, or the flattened filtered tree while a filter query is active. The
    cursor indexes that list, and it is rebuilt after every change that can
    alter the rows.
    """

    def __init__(
        self,
        project_id: str | None = None,
        theme: Theme = DEFAULT_THEME,
        min_height: int = MIN_HEIGHT,
        ui_overhead: int = UI_OVERHEAD,
    ) -> None:
        """Initialize the controller.

        Args:
            project_id: Project to open directly, skipping project selection
            theme: Styles used to render rows
            min_height: Minimum number of visible list rows
            ui_overhead: Terminal rows reserved for title and help text
        """
        self.theme = theme
        self.min_height = min_height
        self.ui_overhead = ui_overhead

        self.state = AppState.LOADING_VMS if project_id else AppState.LOADING_PROJECTS
        self.selected_project = project_id or ""
        self.projects: list[Project] = []
        self.tree = InstanceTree()
        self.selection: Selection | None = None
        self.error: Exception | None = None

        self.filtering = False
        self.filter_text = ""

        self.cursor = ListCursor(DEFAULT_HEIGHT)
        self.width = DEFAULT_WIDTH
        self.rows: list[Text] = []
        self._displayed_nodes: list[TreeNode] = []
        self._project_index = 0

    # Lifecycle

    def start(self) -> Command | None:
        """Command for the initial load."""
        if self.state is AppState.LOADING_PROJECTS:
            return LoadProjects()
        if self.state is AppState.LOADING_VMS:
            return LoadInstances(self.selected_project)
        return None

    @property
    def done(self) -> bool:
        """True once the interactive loop should end."""
        return self.state in TERMINAL_STATES

    def handle(self, event: Event) -> Command | None:
        """Apply an event.

        Args:
            event: Key press, resize or load result

        Returns:
            Command to perform, if any
        """
        if self.done:
            return None

        if isinstance(event, KeyPressed):
            return self._handle_key(event)
        if isinstance(event, Resized):
            self._resize(event.width, event.height)
        elif isinstance(event, ProjectsLoaded):
            self._on_projects_loaded(event.projects)
        elif isinstance(event, InstancesLoaded):
            self._on_instances_loaded(event)
        elif isinstance(event, LoadFailed):
            self.error = event.error
            logger.error(f"Inventory load failed in {self.state.value}: {event.error}")
        return None

    # View data

    @property
    def title(self) -> str:
        if self.state is AppState.LOADING_PROJECTS:
            return "Loading GCP projects..."
        if self.state is AppState.SELECTING_PROJECT:
            return "Select GCP Project"
        if self.state is AppState.LOADING_VMS:
            return f"Loading VMs for project: {self.selected_project}"
        if self.state is AppState.SELECTING_VM:
            return f"Select VM from project: {self.selected_project}"
        if self.state is AppState.READY_TO_CONNECT and self.selection:
            return f"Connecting to {self.selection.instance.instance_name}..."
        return "Goodbye!"

    @property
    def help_text(self) -> str:
        if self.error is not None:
            return "Press 'q' to quit."
        if self.state is AppState.SELECTING_PROJECT:
            return "Press Enter to select, 'q' to quit"
        if self.state is AppState.SELECTING_VM:
            if self.filtering:
                return (
                    "Press Enter to connect, Backspace to edit, Esc to clear filter, "
                    "Ctrl+C to quit"
                )
            return (
                "Press Enter to select/expand, → to expand, ← to collapse, Space to toggle, "
                "'/' to filter, Esc to go back, 'q' to quit"
            )
        return ""

    def current_node(self) -> TreeNode | None:
        """Node under the cursor in the VM list."""
        if self.state is not AppState.SELECTING_VM:
            return None
        if 0 <= self.cursor.index < len(self._displayed_nodes):
            return self._displayed_nodes[self.cursor.index]
        return None

    def displayed_nodes(self) -> list[TreeNode]:
        return list(self._displayed_nodes)

    def visible_rows(self) -> list[tuple[int, Text, bool]]:
        """Rows on the current page as ``(index, text, highlighted)``."""
        return [(i, self.rows[i], i == self.cursor.index) for i in self.cursor.window()]

    # Input handling

    def _handle_key(self, event: KeyPressed) -> Command | None:
        key = event.key

        if key == "ctrl+c":
            return self._quit()

        if self.error is not None:
            return self._quit() if key == "q" else None

        in_list = self.state in (AppState.SELECTING_PROJECT, AppState.SELECTING_VM)
        if in_list and self._is_navigation(key):
            self.cursor.handle(key)
            return None

        if self.state is AppState.SELECTING_VM:
            if self.filtering:
                return self._handle_filter_key(event)
            return self._handle_vm_key(event)

        if self.state is AppState.SELECTING_PROJECT:
            if key == "enter":
                return self._choose_project()
            if key == "q":
                return self._quit()
        elif self.state is AppState.LOADING_PROJECTS and key == "q":
            return self._quit()

        return None

    def _is_navigation(self, key: str) -> bool:
        if key in ("up", "down", "pageup", "pagedown", "home", "end"):
            return True
        # j/k are filter text while filtering
        return key in ("j", "k") and not self.filtering

    def _handle_vm_key(self, event: KeyPressed) -> Command | None:
        key = event.key
        node = self.current_node()

        if key == "right":
            if isinstance(node, GroupNode) and not node.expanded:
                self._toggle(node)
        elif key == "left":
            if isinstance(node, GroupNode) and node.expanded:
                self._toggle(node)
        elif key == "space":
            if isinstance(node, GroupNode):
                self._toggle(node)
        elif key == "enter":
            if isinstance(node, GroupNode):
                self._toggle(node)
            elif isinstance(node, InstanceNode):
                return self._select(node)
        elif key == "slash" or event.character == "/":
            self.filtering = True
            self.filter_text = ""
            self._refresh_vm_rows()
        elif key == "escape":
            self._back_to_projects()
        elif key == "q":
            return self._quit()
        return None

    def _handle_filter_key(self, event: KeyPressed) -> Command | None:
        key = event.key

        if key == "escape":
            self.filtering = False
            self.filter_text = ""
            self._refresh_vm_rows()
        elif key in ("backspace", "ctrl+h"):
            if self.filter_text:
                self.filter_text = self.filter_text[:-1]
                self._refresh_vm_rows()
        elif key == "enter":
            node = self.current_node()
            if isinstance(node, InstanceNode):
                return self._select(node)
            if isinstance(node, GroupNode):
                self._toggle(node)
        elif event.character is not None and is_filter_char(event.character):
            self.filter_text += event.character
            self._refresh_vm_rows()
        return None

    # Transitions

    def _on_projects_loaded(self, projects: list[Project]) -> None:
        if self.state is not AppState.LOADING_PROJECTS:
            logger.warning(f"Ignoring project listing in state {self.state.value}")
            return
        self.projects = [p for p in projects if p.is_active()]
        self.state = AppState.SELECTING_PROJECT
        self._show_projects()
        logger.info(f"Showing {len(self.projects)} projects")

    def _on_instances_loaded(self, event: InstancesLoaded) -> None:
        if self.state is not AppState.LOADING_VMS:
            logger.warning(f"Ignoring instance listing in state {self.state.value}")
            return
        self.tree.build(event.instances)
        self.filtering = False
        self.filter_text = ""
        self.state = AppState.SELECTING_VM
        self.cursor.move_to(0)
        self._refresh_vm_rows()
        logger.info(
            f"Showing {self.tree.instance_count} instances in {self.tree.group_count} groups "
            f"for {self.selected_project}"
        )

    def _choose_project(self) -> Command | None:
        if not self.projects:
            return None
        self._project_index = self.cursor.index
        self.selected_project = self.projects[self._project_index].project_id or ""
        self.state = AppState.LOADING_VMS
        self.rows = []
        self.cursor.set_count(0)
        logger.info(f"Selected project {self.selected_project}")
        return LoadInstances(self.selected_project)

    def _back_to_projects(self) -> None:
        self.state = AppState.SELECTING_PROJECT
        self._displayed_nodes = []
        self.filtering = False
        self.filter_text = ""
        self._show_projects()
        self.cursor.move_to(self._project_index)

    def _select(self, node: InstanceNode) -> Command:
        self.selection = Selection(project_id=self.selected_project, instance=node.instance)
        self.state = AppState.READY_TO_CONNECT
        logger.info(f"Selected VM {node.name} in {self.selected_project}")
        return Exit(self.selection)

    def _quit(self) -> Command:
        self.state = AppState.QUITTING
        return Exit()

    def _toggle(self, node: GroupNode) -> None:
        # node may be a filtered copy; the tree resolves it by name
        self.tree.toggle_node(node)
        self._refresh_vm_rows()

    # Rows

    def _show_projects(self) -> None:
        self.rows = [Text(project.label()) for project in self.projects]
        self.cursor.set_count(len(self.rows))

    def _refresh_vm_rows(self) -> None:
        nodes = self.tree.nodes()
        if self.filtering and self.filter_text:
            nodes = list(filter_nodes(nodes, self.filter_text))
        self._displayed_nodes = self.tree.flatten(nodes)
        self.rows = render_rows(self._displayed_nodes, self.theme)
        self.cursor.set_count(len(self.rows))

    def _resize(self, width: int, height: int) -> None:
        self.width = width
        self.cursor.per_page = max(height - self.ui_overhead, self.min_height, 1)
        self.cursor.move_to(self.cursor.index)
