"""Row rendering for the instance tree."""

from collections.abc import Sequence
from dataclasses import dataclass

from rich.text import Text

from sunrise.models.compute import InstanceStatus
from sunrise.state.instance_tree import GroupNode, TreeNode

INDENT = "  "
EXPANDED_GLYPH = "▼"
COLLAPSED_GLYPH = "▶"

STATUS_BADGES: dict[InstanceStatus, str] = {
    InstanceStatus.RUNNING: "R",
    InstanceStatus.TERMINATED: "T",
    InstanceStatus.PROVISIONING: "P",
    InstanceStatus.STOPPING: "S",
}
UNKNOWN_BADGE = "?"


@dataclass(frozen=True)
class Theme:
    """Presentation parameters for list rows (Rich style strings)."""

    item: str = ""
    selected: str = "color(170)"
    title: str = "bold"
    filter_label: str = "green"
    error: str = "red"
    group: str = "blue"
    expanded: str = "cyan"
    collapsed: str = "blue"
    running: str = "green"
    terminated: str = "bright_black"
    provisioning: str = "yellow"
    stopping: str = "red"

    def status_style(self, status: InstanceStatus) -> str:
        """Style for a status badge; unknown statuses use the plain item style."""
        return {
            InstanceStatus.RUNNING: self.running,
            InstanceStatus.TERMINATED: self.terminated,
            InstanceStatus.PROVISIONING: self.provisioning,
            InstanceStatus.STOPPING: self.stopping,
        }.get(status, self.item)


DEFAULT_THEME = Theme()


def status_badge(status: str | None) -> str:
    """Single-letter badge for a raw status string ("?" when unrecognized)."""
    return STATUS_BADGES.get(InstanceStatus.parse(status), UNKNOWN_BADGE)


def render_node(node: TreeNode, theme: Theme = DEFAULT_THEME) -> Text:
    """Render one tree row.

    Groups show an expansion glyph, the group name and the child count.
    Instances are indented by depth and show a status badge and the name.

    Args:
        node: Group or instance node
        theme: Styles to apply

    Returns:
        Styled row text
    """
    text = Text(INDENT * node.depth)

    if isinstance(node, GroupNode):
        if node.expanded:
            text.append(EXPANDED_GLYPH, style=theme.expanded)
        else:
            text.append(COLLAPSED_GLYPH, style=theme.collapsed)
        text.append(" ")
        text.append(node.name, style=theme.group)
        text.append(f" ({len(node.children)} instances)")
        return text

    status = node.instance.instance_status
    text.append(f"[{status_badge(node.instance.status)}]", style=theme.status_style(status))
    text.append(" ")
    text.append(node.name)
    return text


def render_rows(nodes: Sequence[TreeNode], theme: Theme = DEFAULT_THEME) -> list[Text]:
    """Render a flattened node sequence, one row per node."""
    return [render_node(node, theme) for node in nodes]
