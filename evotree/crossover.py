"""
evotree/crossover.py - Crossover (mating) between two individuals
"""
import logging
from enum import Enum
from typing import Optional, Set, Tuple

from . import traversal
from .errors import ConfigurationError, UnsupportedOperationError
from .gen import make_rng
from .individual import Individual

logger = logging.getLogger(__name__)


class CrossoverMode(Enum):
    ONE_POINT = 'one_point'
    ONE_POINT_LEAF_BIASED = 'one_point_leaf_biased'


def _pick_index(rng, individual: Individual, label: str) -> int:
    count = individual.nodes_count()
    if count <= 0:
        raise ConfigurationError(f"Cannot pick a crossover point: {label} has no nodes")
    return rng.randrange(count)


def _node_ids(individual: Individual) -> Set[int]:
    def step(seen, ref, index, depth):
        seen.add(id(ref.node))
        return seen
    return traversal.fold(individual.root, set(), step)


def swap_subtrees(indv1: Individual, index1: int,
                  indv2: Individual, index2: int) -> None:
    """Swap the subtree at ``index1`` of ``indv1`` with the one at ``index2`` of ``indv2``.

    Both caches are refreshed afterwards.
    """
    if indv1 is indv2:
        raise ConfigurationError("Cannot swap subtrees within a single individual")
    if _node_ids(indv1) & _node_ids(indv2):
        raise ConfigurationError("Cannot swap subtrees between individuals that share nodes")
    ref1 = traversal.find(indv1.root, index1)
    if ref1 is None:
        raise IndexError(f"No node at index {index1} (tree has {indv1.nodes_count()} nodes)")
    ref2 = traversal.find(indv2.root, index2)
    if ref2 is None:
        raise IndexError(f"No node at index {index2} (tree has {indv2.nodes_count()} nodes)")

    node1 = ref1.node
    ref1.node = ref2.node
    ref2.node = node1

    indv1.recalculate_metadata()
    indv2.recalculate_metadata()


class Crossover:
    """Performs crossover between individuals"""

    def __init__(self, mode: CrossoverMode, termpb: Optional[float] = None):
        self.mode = mode
        self.termpb = termpb

    @classmethod
    def one_point(cls) -> 'Crossover':
        """Swap the subtree at a random position of one individual with a
        random position of the other."""
        return cls(CrossoverMode.ONE_POINT)

    @classmethod
    def one_point_leaf_biased(cls, termpb: float) -> 'Crossover':
        """One-point crossover where each swap point is a terminal with ``termpb`` probability.

        Declared only; ``mate`` raises UnsupportedOperationError.
        """
        if not 0.0 <= termpb <= 1.0:
            raise ConfigurationError(f"termpb must be within [0, 1], got {termpb}")
        return cls(CrossoverMode.ONE_POINT_LEAF_BIASED, termpb)

    def mate(self, indv1: Individual, indv2: Individual, rng) -> Tuple[int, int]:
        """Cross two individuals over in place.

        Returns the pair of preorder indices that were swapped.
        """
        if self.mode is CrossoverMode.ONE_POINT:
            return self._mate_one_point(indv1, indv2, rng)
        if self.mode is CrossoverMode.ONE_POINT_LEAF_BIASED:
            return self._mate_one_point_leaf_biased(indv1, indv2, rng)
        raise UnsupportedOperationError(f"Unknown crossover mode: {self.mode}")

    def _mate_one_point(self, indv1: Individual, indv2: Individual, rng) -> Tuple[int, int]:
        if rng is None or isinstance(rng, int):
            rng = make_rng(rng)
        index1 = _pick_index(rng, indv1, "first individual")
        index2 = _pick_index(rng, indv2, "second individual")
        swap_subtrees(indv1, index1, indv2, index2)
        logger.debug("One-point crossover at %d/%d -> node counts %d/%d",
                     index1, index2, indv1.nodes_count(), indv2.nodes_count())
        return index1, index2

    def _mate_one_point_leaf_biased(self, indv1, indv2, rng):
        raise UnsupportedOperationError(
            f"Leaf-biased one-point crossover (termpb={self.termpb}) is not implemented"
        )

    def __eq__(self, other):
        if not isinstance(other, Crossover):
            return NotImplemented
        return (self.mode, self.termpb) == (other.mode, other.termpb)

    def __repr__(self):
        if self.termpb is None:
            return f"Crossover({self.mode.value})"
        return f"Crossover({self.mode.value}, termpb={self.termpb})"
