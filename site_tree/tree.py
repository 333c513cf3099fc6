# File: site_tree/tree.py
"""site_tree.tree: rebuild the page tree of a namespace from its flat records.

The records only carry parent pointers, so the tree is rebuilt once as an
adjacency map (parent id -> children) instead of querying children node by
node. Nodes whose parent is missing, for instance because the parent write
has not landed yet, are shown as roots. A visited set keeps every node to a
single appearance even if the data were to contain a cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from site_tree.crawler.models import PageNode

__all__ = ("TreeIndex", "build_index", "iter_tree", "render_tree", "format_node")

INDENT = " " * 4


@dataclass(slots=True)
class TreeIndex:
    nodes: Dict[str, PageNode] = field(default_factory=dict)
    children: Dict[str, List[PageNode]] = field(default_factory=dict)
    roots: List[PageNode] = field(default_factory=list)


def _id_key(node: PageNode) -> Tuple[int, str]:
    # numeric ids sort as numbers, anything else after them
    return (int(node.id), "") if node.id.isdecimal() else (1 << 62, node.id)


def build_index(nodes: Iterable[PageNode]) -> TreeIndex:
    index = TreeIndex()
    ordered = sorted(nodes, key=_id_key)
    for node in ordered:
        index.nodes[node.id] = node
    for node in ordered:
        if node.parent_id and node.parent_id in index.nodes and node.parent_id != node.id:
            index.children.setdefault(node.parent_id, []).append(node)
        else:
            index.roots.append(node)
    return index


def iter_tree(nodes: Iterable[PageNode]) -> Iterator[Tuple[int, PageNode]]:
    """Yield ``(depth, node)`` in depth-first order, each node exactly once."""
    index = build_index(nodes)
    visited: Set[str] = set()

    def walk(start: PageNode) -> Iterator[Tuple[int, PageNode]]:
        stack: List[Tuple[int, PageNode]] = [(0, start)]
        while stack:
            depth, node = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            yield depth, node
            kids = index.children.get(node.id, [])
            stack.extend((depth + 1, kid) for kid in reversed(kids))

    for root in index.roots:
        yield from walk(root)
    # only reachable when parent pointers form a cycle
    for node in index.nodes.values():
        if node.id not in visited:
            yield from walk(node)


def format_node(node: PageNode, depth: int) -> str:
    line = f"{INDENT * depth} - {node.id}: {node.label} ({node.url})"
    if node.parent_id:
        line += f" ParentID: {node.parent_id}"
    return line


def render_tree(nodes: Sequence[PageNode]) -> List[str]:
    """Console lines for the tree, children indented four spaces per level."""
    return [format_node(node, depth) for depth, node in iter_tree(nodes)]
