"""
evotree/individual.py - Individual: a GP tree plus cached structural metadata
"""
from typing import Optional, Type

from . import traversal
from .tree import Node, RootRef


class Individual:
    """One candidate solution: a root tree and its cached node count.

    Crossover and mutation refresh the cache themselves. Code that edits
    ``tree`` directly must call ``recalculate_metadata()`` afterwards.
    """

    def __init__(self, tree: Node, node_type: Optional[Type[Node]] = None):
        self.root = RootRef(tree)
        self.node_type = node_type if node_type is not None else type(tree)
        self._nodes_count = 0
        self.recalculate_metadata()

    @classmethod
    def new(cls, node_type: Type[Node], tree_gen) -> 'Individual':
        """Generate a new tree with ``tree_gen`` and wrap it"""
        return cls(node_type.generate_tree(tree_gen), node_type)

    @classmethod
    def from_tree(cls, tree: Node, node_type: Optional[Type[Node]] = None) -> 'Individual':
        """Wrap an existing tree"""
        return cls(tree, node_type)

    @property
    def tree(self) -> Node:
        return self.root.node

    @tree.setter
    def tree(self, value: Node) -> None:
        self.root.node = value

    def nodes_count(self) -> int:
        """Cached number of nodes in the tree"""
        return self._nodes_count

    def recalculate_metadata(self) -> int:
        """Update cached metadata such as the number of nodes in the tree"""
        self._nodes_count = traversal.count_nodes(self.root)
        return self._nodes_count

    def depth(self) -> int:
        return traversal.max_depth(self.root)

    def evaluate(self, environment):
        return self.tree.evaluate(environment)

    def copy(self) -> 'Individual':
        """Create a deep copy of this individual"""
        return type(self)(self.tree.copy(), self.node_type)

    def __eq__(self, other):
        if not isinstance(other, Individual):
            return NotImplemented
        return self.tree == other.tree

    __hash__ = None

    def __str__(self):
        return str(self.tree)

    def __repr__(self):
        return f"Individual(nodes={self._nodes_count}, tree={self.tree!r})"
