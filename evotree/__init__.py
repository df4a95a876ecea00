"""
evotree - Tree generation, traversal and recombination for genetic programming

Client code defines a Node type (an expression language, a decision tree,
...) and evotree supplies depth-bounded random generation, preorder
traversal with in-place edits, and the crossover and mutation operators.
"""

__version__ = "0.1.0"
__author__ = "evotree developers"

from .errors import (
    EvoTreeError, ContractViolationError, ConfigurationError, UnsupportedOperationError
)
from .tree import Node, NodeRef, RootRef, ChildRef
from .gen import TreeGen, TreeGenMode
from .individual import Individual
from .crossover import Crossover, CrossoverMode, swap_subtrees
from .mutation import Mutation, MutationMode
from . import traversal

__all__ = [
    'EvoTreeError', 'ContractViolationError', 'ConfigurationError', 'UnsupportedOperationError',
    'Node', 'NodeRef', 'RootRef', 'ChildRef',
    'TreeGen', 'TreeGenMode',
    'Individual',
    'Crossover', 'CrossoverMode', 'swap_subtrees',
    'Mutation', 'MutationMode',
    'traversal',
]
