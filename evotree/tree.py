"""
evotree/tree.py - Node contract for genetic-programming trees and mutable node handles
"""
import copy
from abc import ABC, abstractmethod
from typing import Any, List

from .errors import ContractViolationError


class Node(ABC):
    """Base class for all GP tree node types.

    A domain defines one subclass whose instances are tagged variants with a
    fixed arity. The engine only talks to nodes through this interface:
    the generation hooks, the child accessors and ``evaluate``.
    """

    @classmethod
    @abstractmethod
    def generate_branch(cls, tree_gen, depth: int) -> 'Node':
        """Generate a node with at least one Node child.

        Children should be created with ``cls.generate_node(tree_gen, depth + 1)``.
        """
        pass

    @classmethod
    @abstractmethod
    def generate_leaf(cls, tree_gen, depth: int) -> 'Node':
        """Generate a node without Node children"""
        pass

    @abstractmethod
    def child_count(self) -> int:
        """Number of direct Node children (0 for terminals)"""
        pass

    @abstractmethod
    def children(self) -> List['Node']:
        """Direct Node children, left to right"""
        pass

    @abstractmethod
    def set_child(self, index: int, child: 'Node') -> None:
        """Replace the direct child at ``index``"""
        pass

    @abstractmethod
    def evaluate(self, environment: Any) -> Any:
        """Interpret the subtree rooted at this node"""
        pass

    @classmethod
    def generate_tree(cls, tree_gen) -> 'Node':
        """Generate a new tree within the bounds of ``tree_gen``"""
        return cls.generate_node(tree_gen, 0)

    @classmethod
    def generate_node(cls, tree_gen, depth: int) -> 'Node':
        """Generate a random node (and its subtree) at ``depth``"""
        if tree_gen.have_reached_a_leaf(depth):
            return cls.generate_leaf(tree_gen, depth)
        return cls.generate_branch(tree_gen, depth)

    def children_mut(self) -> List['ChildRef']:
        """Mutable handles on the direct children, same order as children()"""
        return [ChildRef(self, i) for i in range(len(self.children()))]

    def is_leaf(self) -> bool:
        return self.child_count() == 0

    def copy(self) -> 'Node':
        """Create a deep copy of this node.

        Works node by node over an explicit stack, so trees of any depth can
        be cloned.
        """
        root = _copy_fields(self)
        stack = [root]
        while stack:
            clone = stack.pop()
            for index, child in enumerate(clone.children()):
                child_clone = _copy_fields(child)
                clone.set_child(index, child_clone)
                stack.append(child_clone)
        return root


def _copy_fields(node: Node) -> Node:
    """Deep copy of one node whose child slots still hold the original children"""
    memo = {id(child): child for child in node.children()}
    return copy.deepcopy(node, memo)


class NodeRef(ABC):
    """Handle on one position in a tree.

    Reading ``ref.node`` gives the subtree currently at that position and
    assigning ``ref.node = other`` replaces it.
    """

    @property
    @abstractmethod
    def node(self) -> Node:
        pass

    @node.setter
    @abstractmethod
    def node(self, value: Node) -> None:
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.node!r})"


class RootRef(NodeRef):
    """Owning handle on the root of a tree"""

    def __init__(self, node: Node):
        self._node = node

    @property
    def node(self) -> Node:
        return self._node

    @node.setter
    def node(self, value: Node) -> None:
        self._node = value


class ChildRef(NodeRef):
    """Handle on the ``index``-th child slot of ``parent``"""

    def __init__(self, parent: Node, index: int):
        self.parent = parent
        self.index = index

    @property
    def node(self) -> Node:
        siblings = self.parent.children()
        if self.index >= len(siblings):
            raise ContractViolationError(
                f"{type(self.parent).__name__} reports {len(siblings)} children, "
                f"no child slot {self.index}"
            )
        return siblings[self.index]

    @node.setter
    def node(self, value: Node) -> None:
        self.parent.set_child(self.index, value)


def as_ref(tree) -> NodeRef:
    """Wrap a bare node in a RootRef; NodeRefs pass through unchanged"""
    if isinstance(tree, NodeRef):
        return tree
    if isinstance(tree, Node):
        return RootRef(tree)
    raise TypeError(f"Expected a Node or NodeRef, got {type(tree).__name__}")
