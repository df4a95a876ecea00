"""
evotree/cli.py - Command-line interface
"""
import json
import logging

import click
import numpy as np

from .crossover import Crossover
from .equation import Equation
from .errors import EvoTreeError
from .gen import TreeGen
from .individual import Individual
from .mutation import Mutation

MODES = ['perfect', 'full', 'full_ranged', 'half_and_half']


def tree_options(func):
    """Options shared by every command that generates trees"""
    func = click.option('--seed', type=int, default=None, help='Random seed')(func)
    func = click.option('--max-depth', default=4, help='Maximum tree depth')(func)
    func = click.option('--min-depth', default=1, help='Minimum tree depth')(func)
    func = click.option('--mode', '-m', type=click.Choice(MODES), default='full',
                        help='Tree generation mode')(func)
    func = click.option('--json', 'as_json', is_flag=True, help='Print trees as JSON')(func)
    return func


def summary(indv: Individual) -> dict:
    return {
        'tree': indv.tree.to_dict(),
        'nodes': indv.nodes_count(),
        'depth': indv.depth(),
    }


def describe(indv: Individual, as_json: bool) -> str:
    if as_json:
        return json.dumps(summary(indv))
    sample = np.linspace(-1.0, 1.0, 5)
    values = ', '.join(f"{v:.3f}" for v in np.broadcast_to(indv.evaluate(sample), sample.shape))
    return (f"{indv}\n"
            f"  nodes={indv.nodes_count()} depth={indv.depth()}\n"
            f"  f([-1, -0.5, 0, 0.5, 1]) = [{values}]")


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Verbose (debug) logging')
def cli(verbose):
    """evotree - Random GP tree generation, crossover and mutation"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


@cli.command()
@tree_options
def generate(mode, min_depth, max_depth, seed, as_json):
    """Generate a random equation tree"""
    try:
        tree_gen = TreeGen.from_mode(mode, seed, min_depth, max_depth)
        indv = Individual.new(Equation, tree_gen)
    except EvoTreeError as e:
        raise click.ClickException(str(e))
    click.echo(describe(indv, as_json))


@cli.command()
@tree_options
@click.option('--mutation-min-depth', default=1, help='Minimum depth of replacement subtrees')
@click.option('--mutation-max-depth', default=2, help='Maximum depth of replacement subtrees')
def mutate(mode, min_depth, max_depth, seed, as_json, mutation_min_depth, mutation_max_depth):
    """Generate a tree and apply uniform mutation to it"""
    try:
        tree_gen = TreeGen.from_mode(mode, seed, min_depth, max_depth)
        indv = Individual.new(Equation, tree_gen)
        before = summary(indv) if as_json else describe(indv, False)
        mutation_gen = TreeGen.full(tree_gen.rng, mutation_min_depth, mutation_max_depth)
        index = Mutation.uniform().mutate(indv, mutation_gen)
    except EvoTreeError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps({'before': before, 'index': index, 'after': summary(indv)}))
        return
    click.echo(f"Before:\n{before}")
    click.echo(f"Mutated node {index}:")
    click.echo(describe(indv, False))


@cli.command()
@tree_options
def crossover(mode, min_depth, max_depth, seed, as_json):
    """Generate two trees and perform one-point crossover between them"""
    try:
        first_gen = TreeGen.from_mode(mode, seed, min_depth, max_depth)
        first = Individual.new(Equation, first_gen)
        second = Individual.new(Equation, TreeGen.from_mode(mode, first_gen.rng, min_depth, max_depth))
        if as_json:
            parents = [summary(first), summary(second)]
        else:
            parents = [describe(first, False), describe(second, False)]
        index1, index2 = Crossover.one_point().mate(first, second, first_gen.rng)
    except EvoTreeError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps({
            'parents': parents,
            'indices': [index1, index2],
            'children': [summary(first), summary(second)],
        }))
        return
    click.echo(f"Parent 1:\n{parents[0]}")
    click.echo(f"Parent 2:\n{parents[1]}")
    click.echo(f"Swapped node {index1} of parent 1 with node {index2} of parent 2")
    click.echo(f"Child 1:\n{describe(first, False)}")
    click.echo(f"Child 2:\n{describe(second, False)}")


if __name__ == '__main__':
    cli()
