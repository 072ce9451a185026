"""Pre-order tree walk with per-node continue / skip / stop decisions."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from scriptnav.symbols.ast import Node


class VisitAction(Enum):
    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    STOP = "stop"


Visitor = Callable[[Node], VisitAction]


def walk(root: Node, visit: Visitor) -> bool:
    """Visit ``root`` and its descendants depth-first, parents before children.

    Siblings are visited in source order. Returns True if a visit returned
    STOP, in which case no further node was visited.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        action = visit(node)
        if action is VisitAction.STOP:
            return True
        if action is VisitAction.SKIP_CHILDREN:
            continue
        stack.extend(reversed(node.children()))
    return False
