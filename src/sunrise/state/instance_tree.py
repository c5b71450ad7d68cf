"""Two-level tree of instance groups and VM instances."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from sunrise.models.compute import ComputeInstance
from sunrise.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InstanceNode:
    """Leaf node for a single VM.

    Depth is 1 for instances inside a group and 0 for ungrouped instances.
    """

    name: str
    instance: ComputeInstance
    group_name: str = ""

    @property
    def depth(self) -> int:
        return 1 if self.group_name else 0


@dataclass
class GroupNode:
    """Managed instance group node, always at depth 0.

    ``expanded`` is the only mutable attribute of the tree.
    """

    name: str
    children: list[InstanceNode] = field(default_factory=list)
    expanded: bool = False

    depth: ClassVar[int] = 0


TreeNode = GroupNode | InstanceNode


class InstanceTree:
    """Canonical hierarchy of groups and instances for one project.

    Group nodes come first, sorted by name; ungrouped instances follow in
    the order the inventory returned them. Filtered views are separate
    derived lists, so expansion changes always go through :meth:`toggle`,
    which looks the group up by name in the canonical list.
    """

    def __init__(self) -> None:
        """Initialize an empty tree."""
        self._nodes: list[TreeNode] = []

    def build(self, instances: Sequence[ComputeInstance]) -> None:
        """Rebuild the tree from an instance listing.

        Args:
            instances: Instances in inventory order
        """
        groups: dict[str, list[ComputeInstance]] = {}
        ungrouped: list[ComputeInstance] = []

        for instance in instances:
            group_name = instance.group_name
            if group_name:
                groups.setdefault(group_name, []).append(instance)
            else:
                ungrouped.append(instance)

        nodes: list[TreeNode] = []
        for group_name in sorted(groups):
            children = [
                InstanceNode(name=i.instance_name, instance=i, group_name=group_name)
                for i in groups[group_name]
            ]
            nodes.append(GroupNode(name=group_name, children=children))

        nodes.extend(InstanceNode(name=i.instance_name, instance=i) for i in ungrouped)

        self._nodes = nodes
        logger.debug(
            f"Built instance tree: {len(groups)} groups, {len(ungrouped)} ungrouped instances"
        )

    def nodes(self) -> list[TreeNode]:
        """Canonical top-level nodes."""
        return self._nodes

    @property
    def group_count(self) -> int:
        return sum(1 for node in self._nodes if isinstance(node, GroupNode))

    @property
    def instance_count(self) -> int:
        count = 0
        for node in self._nodes:
            count += len(node.children) if isinstance(node, GroupNode) else 1
        return count

    def flatten(self, nodes: Sequence[TreeNode] | None = None) -> list[TreeNode]:
        """Flatten nodes into display order.

        Children are emitted right after their group, and only when the
        group is expanded.

        Args:
            nodes: Top-level nodes to flatten (defaults to the canonical list)

        Returns:
            Ordered display sequence
        """
        result: list[TreeNode] = []
        for node in self._nodes if nodes is None else nodes:
            result.append(node)
            if isinstance(node, GroupNode) and node.expanded:
                result.extend(node.children)
        return result

    def find_group(self, name: str) -> GroupNode | None:
        """Look up a canonical group by name.

        Args:
            name: Group name

        Returns:
            The canonical group node, or None
        """
        for node in self._nodes:
            if isinstance(node, GroupNode) and node.name == name:
                return node
        return None

    def toggle(self, group_name: str) -> bool:
        """Flip the expansion of the canonical group with this name.

        Args:
            group_name: Name of the group to toggle

        Returns:
            True if a group was toggled
        """
        group = self.find_group(group_name)
        if group is None:
            return False
        group.expanded = not group.expanded
        logger.debug(f"Group {group_name} {'expanded' if group.expanded else 'collapsed'}")
        return True

    def toggle_node(self, node: TreeNode) -> bool:
        """Toggle the canonical counterpart of ``node``; no-op for instances."""
        if not isinstance(node, GroupNode):
            return False
        return self.toggle(node.name)
