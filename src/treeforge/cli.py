"""
Command-line interface for treeforge.

Provides commands for:
- Generating random individuals from a palette file
- Summarizing the shape of a generated population
"""

import json
import logging
import sys
from pathlib import Path

import click

from treeforge import __version__
from treeforge.config import GenerationConfig
from treeforge.creation.population import (
    METHODS,
    compute_population_stats,
    generate_population,
    make_strategy,
)
from treeforge.errors import TreeForgeError
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.types import parse_type
from treeforge.primitives.palette import load_palette

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("treeforge")


def generation_options(func):
    """Options shared by commands that generate a population."""
    options = [
        click.argument("palette", type=click.Path(exists=True, dir_okay=False)),
        click.option("--type", "-t", "type_key", default=None,
                     help="Range type for typed generation (e.g. double). Default: untyped"),
        click.option("--method", "-m", type=click.Choice(METHODS), default="ramped",
                     help="Tree generation method"),
        click.option("--max-depth", "-d", default=8, help="Maximum tree depth"),
        click.option("--const-prob", default=0.2, help="Probability of constant terminals"),
        click.option("--subtree-prob", default=0.5, help="Probability of subtrees in grow mode"),
        click.option("--count", "-n", default=1, help="Number of individuals"),
        click.option("--seed", "-s", default=None, type=int, help="Random seed"),
        click.option("--workers", "-w", default=1, help="Worker threads"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _generate(
    palette: str,
    type_key: str | None,
    method: str,
    max_depth: int,
    const_prob: float,
    subtree_prob: float,
    count: int,
    seed: int | None,
    workers: int,
) -> list[GeneratedIndividual]:
    """Load a palette and generate a population, exiting on errors."""
    try:
        config = GenerationConfig(
            max_depth=max_depth,
            const_prob=const_prob,
            subtree_prob=subtree_prob,
            seed=seed,
        )
        registries = load_palette(palette, seed=seed)
        stype = parse_type(type_key) if type_key else None
        strategy = make_strategy(
            method, registries.funcset, registries.inset, registries.conset,
            stype=stype, config=config,
        )
        return generate_population(count, strategy, seed=seed, n_workers=workers)
    except (TreeForgeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """treeforge - Random program trees for genetic programming."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@generation_options
@click.option("--output", "-o", default=None, help="Write individuals as JSON to this file")
def generate(output: str | None, **kwargs) -> None:
    """Generate random individuals from a palette file."""
    population = _generate(**kwargs)

    if output:
        output_path = Path(output)
        output_path.write_text(json.dumps([ind.to_dict() for ind in population], indent=2))
        click.echo(f"Saved {len(population)} individuals to {output}")
        return

    for individual in population:
        click.echo(individual.formula)


@main.command()
@generation_options
def stats(**kwargs) -> None:
    """Generate a population and print its shape statistics."""
    population = _generate(**kwargs)
    summary = compute_population_stats(population)

    click.echo("=" * 50)
    click.echo(f"Individuals:     {summary.size}")
    click.echo(f"Unique formulas: {summary.unique_formulas}")
    click.echo(f"Size:            {summary.avg_size:.2f} +/- {summary.std_size:.2f}")
    click.echo(f"Depth:           {summary.avg_depth:.2f} +/- {summary.std_depth:.2f} "
               f"(min {summary.min_depth}, max {summary.max_depth})")
    click.echo("=" * 50)


if __name__ == "__main__":
    main()
