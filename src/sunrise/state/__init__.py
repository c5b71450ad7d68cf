"""In-memory selection state: the instance tree, its filter and the controller."""

from sunrise.state.instance_tree import GroupNode, InstanceNode, InstanceTree, TreeNode
from sunrise.state.tree_filter import filter_nodes

__all__ = [
    "GroupNode",
    "InstanceNode",
    "InstanceTree",
    "TreeNode",
    "filter_nodes",
]
