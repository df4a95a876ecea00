"""
evotree/traversal.py - Stack-based preorder traversal with in-place mutation

Every walk in the engine is built on ``fold_while``. Step callbacks receive a
NodeRef for the current position, so they can read ``ref.node`` or replace
the whole subtree with ``ref.node = other``. Children are read after the step
returns, which means a replaced node's new children are what gets visited
next; operators that replace a node stop the walk right there.
"""
from typing import Any, Callable, List, Optional, Tuple, TypeVar, Union

from .errors import ContractViolationError
from .tree import Node, NodeRef, as_ref

V = TypeVar('V')
TreeLike = Union[Node, NodeRef]


def _children_of(node: Node) -> List[NodeRef]:
    handles = node.children_mut()
    expected = node.child_count()
    if len(handles) != expected:
        raise ContractViolationError(
            f"{type(node).__name__}.child_count() returned {expected} "
            f"but children_mut() returned {len(handles)} handles"
        )
    if len(node.children()) != expected:
        raise ContractViolationError(
            f"{type(node).__name__}.child_count() returned {expected} "
            f"but children() returned {len(node.children())} nodes"
        )
    return handles


def fold_while(tree: TreeLike, value: V,
               step: Callable[[V, NodeRef, int, int], Tuple[bool, V]]) -> V:
    """Traverse the tree in preorder, building up a value.

    ``step(value, ref, index, depth)`` gets the accumulated value, a handle on
    the current node, the 0-based visit index and the 0-based depth. It
    returns ``(keep_going, new_value)``; when ``keep_going`` is false the walk
    ends immediately and ``new_value`` is returned.
    """
    stack = [(as_ref(tree), 0)]
    index = 0
    while stack:
        ref, depth = stack.pop()
        keep_going, value = step(value, ref, index, depth)
        if not keep_going:
            return value
        # Reversed so the leftmost child is popped first
        for child in reversed(_children_of(ref.node)):
            stack.append((child, depth + 1))
        index += 1
    return value


def fold(tree: TreeLike, value: V, step: Callable[[V, NodeRef, int, int], V]) -> V:
    """Traverse the whole tree building up a value. See fold_while."""
    return fold_while(tree, value, lambda v, ref, i, d: (True, step(v, ref, i, d)))


def map_while(tree: TreeLike, step: Callable[[NodeRef, int, int], bool]) -> None:
    """Traverse the tree until ``step(ref, index, depth)`` returns False"""
    fold_while(tree, None, lambda _, ref, i, d: (step(ref, i, d), None))


def map(tree: TreeLike, step: Callable[[NodeRef, int, int], Any]) -> None:
    """Visit every node with ``step(ref, index, depth)``"""
    def visit(ref, i, d):
        step(ref, i, d)
        return True
    map_while(tree, visit)


def count_nodes(tree: TreeLike) -> int:
    """Number of nodes in the tree, the root included"""
    return fold(tree, 0, lambda count, ref, i, d: count + 1)


def find(tree: TreeLike, target_index: int) -> Optional[NodeRef]:
    """Handle on the node with preorder index ``target_index``, or None"""
    def step(found, ref, i, d):
        if i == target_index:
            return False, ref
        return True, None
    if target_index < 0:
        return None
    return fold_while(tree, None, step)


def get(tree: TreeLike, target_index: int) -> Optional[Node]:
    """Clone of the node with preorder index ``target_index``, or None"""
    ref = find(tree, target_index)
    return ref.node.copy() if ref is not None else None


def depth_of(tree: TreeLike, target_index: int) -> Optional[int]:
    """Depth of the node with preorder index ``target_index``, or None"""
    def step(found, ref, i, d):
        if i == target_index:
            return False, d
        return True, None
    if target_index < 0:
        return None
    return fold_while(tree, None, step)


def max_depth(tree: TreeLike) -> int:
    """Depth of the deepest node (0 for a single leaf)"""
    return fold(tree, 0, lambda deepest, ref, i, d: max(deepest, d))


def leaf_depths(tree: TreeLike) -> List[int]:
    """Depth of every leaf, in preorder"""
    def step(depths, ref, i, d):
        if ref.node.is_leaf():
            depths.append(d)
        return depths
    return fold(tree, [], step)
