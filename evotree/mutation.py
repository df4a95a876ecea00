"""
evotree/mutation.py - Mutation operators for a single individual
"""
import logging
from enum import Enum

from . import traversal
from .errors import ConfigurationError, UnsupportedOperationError
from .individual import Individual

logger = logging.getLogger(__name__)


class MutationMode(Enum):
    SHRINK = 'shrink'
    UNIFORM = 'uniform'
    NODE_REPLACEMENT = 'node_replacement'
    EPHEMERAL_ONE = 'ephemeral_one'
    EPHEMERAL_ALL = 'ephemeral_all'
    INSERT = 'insert'


class Mutation:
    """Performs mutation on an individual.

    Only uniform subtree replacement has an implementation. The other modes
    are part of the interface but raise UnsupportedOperationError, so a
    caller never mistakes them for a mutation that happened.
    """

    def __init__(self, mode: MutationMode):
        self.mode = mode

    @classmethod
    def uniform(cls) -> 'Mutation':
        """Replace a randomly chosen node with a freshly generated subtree"""
        return cls(MutationMode.UNIFORM)

    @classmethod
    def shrink(cls) -> 'Mutation':
        """Replace a randomly chosen node with one of its children"""
        return cls(MutationMode.SHRINK)

    @classmethod
    def node_replacement(cls) -> 'Mutation':
        """Replace a randomly chosen node with a new node of the same arity"""
        return cls(MutationMode.NODE_REPLACEMENT)

    @classmethod
    def ephemeral_one(cls) -> 'Mutation':
        """Resample one randomly chosen constant in the tree"""
        return cls(MutationMode.EPHEMERAL_ONE)

    @classmethod
    def ephemeral_all(cls) -> 'Mutation':
        """Resample every constant in the tree"""
        return cls(MutationMode.EPHEMERAL_ALL)

    @classmethod
    def insert(cls) -> 'Mutation':
        """Insert a new node above a randomly chosen one, keeping it as a child"""
        return cls(MutationMode.INSERT)

    def mutate(self, indv: Individual, tree_gen) -> int:
        """Mutate ``indv`` in place according to the configured mode.

        Returns the preorder index of the node that was mutated.
        """
        if self.mode is MutationMode.UNIFORM:
            return self._mutate_uniform(indv, tree_gen)
        raise UnsupportedOperationError(f"{self.mode.value} mutation is not implemented")

    def _mutate_uniform(self, indv: Individual, tree_gen) -> int:
        count = indv.nodes_count()
        if count <= 0:
            raise ConfigurationError("Cannot pick a mutation point: individual has no nodes")
        target_index = tree_gen.randrange(count)

        def replace(ref, index, depth):
            if index == target_index:
                ref.node = indv.node_type.generate_node(tree_gen, depth)
                return False
            return True

        traversal.map_while(indv.root, replace)
        indv.recalculate_metadata()
        logger.debug("Uniform mutation at %d -> node count %d -> %d",
                     target_index, count, indv.nodes_count())
        return target_index

    def __eq__(self, other):
        if not isinstance(other, Mutation):
            return NotImplemented
        return self.mode == other.mode

    def __repr__(self):
        return f"Mutation({self.mode.value})"
