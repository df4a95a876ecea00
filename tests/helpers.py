"""Node language and stand-ins shared by the tests"""
from enum import Enum

from evotree import Node


class ForkTag(Enum):
    FORK = 2
    TIP = 0


class Fork(Node):
    """Minimal binary tree language: FORK nodes with two children, labelled TIP leaves"""

    def __init__(self, tag, children=(), label=0):
        self.tag = tag
        self.kids = list(children)
        self.label = label

    @classmethod
    def fork(cls, left, right):
        return cls(ForkTag.FORK, [left, right])

    @classmethod
    def tip(cls, label=0):
        return cls(ForkTag.TIP, label=label)

    @classmethod
    def generate_branch(cls, tree_gen, depth):
        return cls.fork(cls.generate_node(tree_gen, depth + 1),
                        cls.generate_node(tree_gen, depth + 1))

    @classmethod
    def generate_leaf(cls, tree_gen, depth):
        return cls.tip(tree_gen.randint(0, 9))

    def child_count(self):
        return self.tag.value

    def children(self):
        return list(self.kids)

    def set_child(self, index, child):
        self.kids[index] = child

    def evaluate(self, environment):
        if self.tag is ForkTag.TIP:
            return self.label
        return sum(child.evaluate(environment) for child in self.kids)

    def __eq__(self, other):
        if not isinstance(other, Fork):
            return NotImplemented
        return (self.tag, self.label, self.kids) == (other.tag, other.label, other.kids)

    __hash__ = None

    def __repr__(self):
        if self.tag is ForkTag.TIP:
            return f"Tip({self.label})"
        return f"Fork({self.kids[0]!r}, {self.kids[1]!r})"


class ScriptedRng:
    """Stands in for a random source, handing out preset randrange results"""

    def __init__(self, *picks):
        self.picks = list(picks)

    def randrange(self, stop):
        pick = self.picks.pop(0)
        assert 0 <= pick < stop
        return pick


def size(node):
    """Node count by the recursive definition"""
    return 1 + sum(size(child) for child in node.children())
