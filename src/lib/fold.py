"""
Fold engine

Depth-first traversal of a tree that threads an accumulator through a
pre-order and a post-order hook:

    state = pre(state, node)      # before the node's children
    ... children, left to right ...
    state = post(state, node)     # after the last child

The traversal keeps an explicit work list instead of recursing, so deep
trees cannot exhaust the interpreter stack, and it holds no state besides
the accumulator it returns.
"""

import ast
from dataclasses import dataclass
from typing import Callable, Generic, List, Tuple, TypeVar

from .tree import children_get


S = TypeVar("S")

Hook = Callable[[S, ast.AST], S]


def hook_identity(state: S, node: ast.AST) -> S:
    return state


@dataclass(frozen=True)
class FoldHooks(Generic[S]):
    """
    Pair of traversal hooks

    Attributes:
        pre: Called when the traversal enters a node
        post: Called when the traversal leaves a node
    """
    pre: Hook = hook_identity
    post: Hook = hook_identity


def tree_fold(tree: ast.AST, initial_state: S, hooks: FoldHooks) -> S:
    """
    Fold a tree into an accumulator

    Args:
        tree: Root node
        initial_state: Accumulator handed to the first hook
        hooks: Pre-order and post-order hooks

    Returns:
        The accumulator returned by the last hook

    Example:
        >>> tree = ast.parse("a = b")
        >>> names = FoldHooks(pre=lambda s, n: s + [n.id] if isinstance(n, ast.Name) else s)
        >>> tree_fold(tree, [], names)
        ['a', 'b']
    """
    state = initial_state
    # (node, leaving) pairs; children are pushed in reverse so the leftmost pops first
    work: List[Tuple[ast.AST, bool]] = [(tree, False)]

    while work:
        node, leaving = work.pop()
        if leaving:
            state = hooks.post(state, node)
            continue

        state = hooks.pre(state, node)
        work.append((node, True))
        for child in reversed(children_get(node)):
            work.append((child, False))

    return state
