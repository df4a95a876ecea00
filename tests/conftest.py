import random

import pytest

from tests.helpers import Fork


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def three_node_tree():
    return Fork.fork(Fork.tip(1), Fork.tip(2))


@pytest.fixture
def five_node_tree():
    # Fork(Fork(Tip(1), Tip(2)), Tip(3))
    return Fork.fork(Fork.fork(Fork.tip(1), Fork.tip(2)), Fork.tip(3))
