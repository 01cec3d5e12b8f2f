"""
Function location.

Finds function-like nodes in a generic tree, either all of them or the
innermost one enclosing a character offset.
"""

from typing import List, Optional

from complexitylens.parsers.base import GenericNode


def locate_all(root: GenericNode) -> List[GenericNode]:
    """
    Collect every function node under ``root``.

    The walk is depth-first and pre-order, so functions come back in
    source order, and a nested function follows the function that
    contains it.
    """
    return [node for node in root.walk() if node.is_function]


def locate_enclosing(root: GenericNode, offset: int) -> Optional[GenericNode]:
    """
    Return the innermost function whose span contains ``offset``.

    Span bounds are inclusive. Returns None when no function contains
    the offset.
    """
    match = None
    for node in root.walk():
        if not node.is_function:
            continue
        span = node.span
        if span is not None and span.contains(offset):
            match = node
    return match
