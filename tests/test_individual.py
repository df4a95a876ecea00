import random

import pytest

from evotree import Individual, TreeGen, traversal
from evotree.equation import Equation
from tests.helpers import Fork, size


@pytest.mark.parametrize("seed", range(10))
def test_new_caches_node_count(seed):
    indv = Individual.new(Equation, TreeGen.half_and_half(random.Random(seed), 1, 5))
    assert indv.nodes_count() == traversal.count_nodes(indv.tree) == size(indv.tree)
    assert indv.node_type is Equation


def test_from_tree(five_node_tree):
    indv = Individual.from_tree(five_node_tree)
    assert indv.nodes_count() == 5
    assert indv.node_type is Fork
    assert indv.depth() == 2


def test_direct_edits_need_recalculation(five_node_tree):
    indv = Individual.from_tree(five_node_tree)
    indv.tree.set_child(0, Fork.tip(9))
    assert indv.nodes_count() == 5

    assert indv.recalculate_metadata() == 3
    assert indv.nodes_count() == 3 == size(indv.tree)


def test_replacing_root(three_node_tree):
    indv = Individual.from_tree(three_node_tree)
    indv.tree = Fork.tip(4)
    indv.recalculate_metadata()
    assert indv.nodes_count() == 1
    assert indv.root.node == Fork.tip(4)


def test_copy_is_independent(five_node_tree):
    indv = Individual.from_tree(five_node_tree)
    clone = indv.copy()
    assert clone == indv
    assert clone.nodes_count() == 5

    clone.tree.set_child(1, Fork.fork(Fork.tip(), Fork.tip()))
    clone.recalculate_metadata()
    assert clone != indv
    assert indv.nodes_count() == traversal.count_nodes(indv.tree) == 5


def test_evaluate_passes_through_to_tree(five_node_tree):
    assert Individual.from_tree(five_node_tree).evaluate(None) == 6


def test_copy_keeps_subclass(five_node_tree):
    class Scored(Individual):
        fitness = 0.0

    clone = Scored.from_tree(five_node_tree).copy()
    assert type(clone) is Scored
    assert clone.node_type is Fork
    assert clone.nodes_count() == 5


def test_copy_of_equation_leaves_original_untouched():
    indv = Individual.new(Equation, TreeGen.full(random.Random(2), 2, 4))
    snapshot = indv.tree.to_dict()
    clone = indv.copy()

    clone.tree.set_child(0, Equation.const(1))
    clone.recalculate_metadata()
    assert indv.tree.to_dict() == snapshot
    assert clone.tree.children()[0] is not indv.tree.children()[0]
