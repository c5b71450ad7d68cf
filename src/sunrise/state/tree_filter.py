"""Name filter over the instance tree."""

from collections.abc import Sequence

from sunrise.state.instance_tree import GroupNode, TreeNode


def matches(name: str, query: str) -> bool:
    """Case-insensitive substring match."""
    return query.lower() in name.lower()


def filter_nodes(nodes: Sequence[TreeNode], query: str) -> Sequence[TreeNode]:
    """Restrict a tree to the nodes whose names match ``query``.

    A group whose own name matches keeps all of its children. Otherwise it
    keeps only the children that match, and is dropped when none do.
    Every group in a filtered result is a new, expanded copy that shares its
    name with the canonical group; the input nodes are never modified.
    Ungrouped instances are kept when their name matches. Only names are
    searched, never status, zone or metadata.

    Args:
        nodes: Top-level nodes (canonical or previously filtered)
        query: Filter text; empty returns ``nodes`` unchanged

    Returns:
        Filtered top-level nodes in input order
    """
    if not query:
        return nodes

    filtered: list[TreeNode] = []
    for node in nodes:
        if isinstance(node, GroupNode):
            if matches(node.name, query):
                children = list(node.children)
            else:
                children = [child for child in node.children if matches(child.name, query)]
                if not children:
                    continue
            filtered.append(GroupNode(name=node.name, children=children, expanded=True))
        elif matches(node.name, query):
            filtered.append(node)

    return filtered
