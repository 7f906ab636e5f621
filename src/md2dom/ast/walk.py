#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/ast/walk.py
"""Depth-first, two-phase traversal of the node tree.

Every node is visited on entry and, unless the walk stops, again on exit. A
callback steers the walk with a :class:`WalkStatus`:

- ``CONTINUE`` descends into the children (on entry) or moves on (on exit)
- ``SKIP_CHILDREN`` leaves the children unvisited; the exit visit still happens
- ``STOP`` ends the whole walk immediately

Errors are not encoded in the status: a callback that cannot proceed raises,
and the exception propagates out of :func:`walk` unchanged.

"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from md2dom.ast.nodes import Node


class WalkStatus(Enum):
    """Result of visiting one node."""

    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    STOP = "stop"


Walker = Callable[[Node, bool], WalkStatus]


def walk(node: Node, walker: Walker) -> WalkStatus:
    """Walk ``node`` and its descendants in document order.

    Parameters
    ----------
    node : Node
        Root of the subtree to walk
    walker : callable
        ``walker(node, entering)`` returning a :class:`WalkStatus`

    Returns
    -------
    WalkStatus
        ``STOP`` if a callback stopped the walk, ``CONTINUE`` otherwise

    Examples
    --------
    Collect node kinds on entry:

        >>> kinds = []
        >>> def collect(node, entering):
        ...     if entering:
        ...         kinds.append(node.kind)
        ...     return WalkStatus.CONTINUE
        >>> walk(document, collect)

    """
    status = walker(node, True)
    if status is WalkStatus.STOP:
        return status

    if status is not WalkStatus.SKIP_CHILDREN:
        # children may be appended by the walker, iterate over a snapshot
        for child in list(node.children):
            if walk(child, walker) is WalkStatus.STOP:
                return WalkStatus.STOP

    if walker(node, False) is WalkStatus.STOP:
        return WalkStatus.STOP
    return WalkStatus.CONTINUE
