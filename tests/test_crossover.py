import random

import pytest

from evotree import (ConfigurationError, Crossover, Individual, TreeGen,
                     UnsupportedOperationError, swap_subtrees, traversal)
from evotree.equation import Equation
from tests.helpers import Fork, ScriptedRng, size


def test_swap_leaf_for_leaf(three_node_tree):
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.tip(7))

    assert Crossover.one_point().mate(first, second, ScriptedRng(1, 0)) == (1, 0)

    assert first.tree == Fork.fork(Fork.tip(7), Fork.tip(2))
    assert second.tree == Fork.tip(1)
    assert first.nodes_count() == 3
    assert second.nodes_count() == 1


def test_single_leaf_receives_whole_tree(three_node_tree):
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.tip(7))

    Crossover.one_point().mate(first, second, ScriptedRng(0, 0))

    assert first.tree == Fork.tip(7)
    assert first.nodes_count() == 1
    assert second.tree == Fork.fork(Fork.tip(1), Fork.tip(2))
    assert second.nodes_count() == 3


def test_swapping_subtrees_of_different_size(five_node_tree, three_node_tree):
    first = Individual.from_tree(five_node_tree)
    second = Individual.from_tree(three_node_tree)

    swap_subtrees(first, 4, second, 0)

    assert first.nodes_count() == 7 == size(first.tree)
    assert second.tree == Fork.tip(3)
    assert second.nodes_count() == 1


@pytest.mark.parametrize("seed", range(10))
def test_crossover_twice_at_same_points_restores_both(seed):
    rng = random.Random(seed)
    first = Individual.new(Equation, TreeGen.half_and_half(rng, 1, 5))
    second = Individual.new(Equation, TreeGen.half_and_half(rng, 1, 5))
    originals = (first.copy(), second.copy())

    index1, index2 = Crossover.one_point().mate(first, second, rng)
    for indv in (first, second):
        assert indv.nodes_count() == traversal.count_nodes(indv.tree)

    swap_subtrees(first, index1, second, index2)
    assert (first, second) == originals
    assert first.nodes_count() == originals[0].nodes_count()
    assert second.nodes_count() == originals[1].nodes_count()


def test_crossover_never_shares_nodes(rng):
    first = Individual.new(Fork, TreeGen.full(rng, 1, 4))
    second = Individual.new(Fork, TreeGen.full(rng, 1, 4))
    Crossover.one_point().mate(first, second, rng)

    ids1 = traversal.fold(first.root, set(), lambda seen, ref, i, d: seen | {id(ref.node)})
    ids2 = traversal.fold(second.root, set(), lambda seen, ref, i, d: seen | {id(ref.node)})
    assert not ids1 & ids2


def test_swap_rejects_bad_indices(three_node_tree):
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.tip())
    with pytest.raises(IndexError):
        swap_subtrees(first, 3, second, 0)
    with pytest.raises(IndexError):
        swap_subtrees(first, 0, second, 1)


def test_swap_within_one_individual_is_rejected(three_node_tree):
    indv = Individual.from_tree(three_node_tree)
    with pytest.raises(ConfigurationError):
        swap_subtrees(indv, 1, indv, 2)


def test_empty_individual_cannot_be_mated(three_node_tree):
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.tip())
    second._nodes_count = 0
    with pytest.raises(ConfigurationError, match="no nodes"):
        Crossover.one_point().mate(first, second, random.Random(0))


def test_leaf_biased_crossover_is_unsupported(three_node_tree):
    crossover = Crossover.one_point_leaf_biased(0.9)
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.tip())
    with pytest.raises(UnsupportedOperationError):
        crossover.mate(first, second, random.Random(0))
    # Nothing was touched
    assert first.tree == Fork.fork(Fork.tip(1), Fork.tip(2))
    assert isinstance(UnsupportedOperationError(), NotImplementedError)


def test_leaf_biased_probability_is_validated():
    with pytest.raises(ConfigurationError):
        Crossover.one_point_leaf_biased(1.5)
    with pytest.raises(ConfigurationError):
        Crossover.one_point_leaf_biased(-0.1)


def test_tree_gen_can_drive_crossover(three_node_tree):
    tree_gen = TreeGen.full(random.Random(4), 0, 1)
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.fork(Fork.tip(8), Fork.tip(9)))
    index1, index2 = Crossover.one_point().mate(first, second, tree_gen)
    assert 0 <= index1 < 3 and 0 <= index2 < 3
    assert first.nodes_count() + second.nodes_count() == 6


def test_individuals_sharing_a_tree_are_not_swapped(five_node_tree):
    first = Individual.from_tree(five_node_tree)
    second = Individual.from_tree(five_node_tree)
    with pytest.raises(ConfigurationError, match="share nodes"):
        swap_subtrees(first, 1, second, 0)

    assert traversal.count_nodes(first.root) == 5
    assert first.tree == Fork.fork(Fork.fork(Fork.tip(1), Fork.tip(2)), Fork.tip(3))


def test_individuals_sharing_a_subtree_are_not_mated(five_node_tree):
    first = Individual.from_tree(five_node_tree)
    second = Individual.from_tree(five_node_tree.children()[0])
    with pytest.raises(ConfigurationError, match="share nodes"):
        Crossover.one_point().mate(first, second, random.Random(0))
    assert traversal.count_nodes(second.root) == 3


@pytest.mark.parametrize("source", [3, None])
def test_mate_accepts_seed_or_none(source, three_node_tree):
    first = Individual.from_tree(three_node_tree)
    second = Individual.from_tree(Fork.fork(Fork.tip(8), Fork.tip(9)))
    index1, index2 = Crossover.one_point().mate(first, second, source)
    assert 0 <= index1 < 3 and 0 <= index2 < 3
    assert first.nodes_count() + second.nodes_count() == 6


def test_same_seed_gives_same_crossover_points():
    def run():
        first = Individual.from_tree(Fork.fork(Fork.fork(Fork.tip(), Fork.tip()), Fork.tip()))
        second = Individual.from_tree(Fork.fork(Fork.tip(), Fork.tip()))
        return Crossover.one_point().mate(first, second, 21)
    assert run() == run()
