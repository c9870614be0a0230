#!/usr/bin/env python3
"""
Connectivity labels for Kruskal generation.

Each node carries a label; nodes joined by opened passages share one.
Merging floods the second node's class through structural links, which
only reaches that class because a label class is always a connected region
of the grid.
"""

from typing import Set

from maze_grid import Node


def same(a: Node, b: Node) -> bool:
    """Are a and b already connected?"""
    return a.label == b.label


def merge(a: Node, b: Node):
    """Relabel b's whole class with a's label"""
    old, new = b.label, a.label
    if old == new:
        return

    stack = [b]
    while stack:
        node = stack.pop()
        if node.label != old:
            continue
        node.label = new
        for neighbor in node.neighbors():
            if neighbor is not None and neighbor.label == old:
                stack.append(neighbor)


def partition(node: Node) -> Set[Node]:
    """All nodes sharing node's label"""
    label = node.label
    members = {node}
    stack = [node]
    while stack:
        current = stack.pop()
        for neighbor in current.neighbors():
            if neighbor is not None and neighbor.label == label and neighbor not in members:
                members.add(neighbor)
                stack.append(neighbor)
    return members
