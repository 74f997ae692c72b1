"""Population initialization from pluggable generation strategies.

A strategy is any callable taking a random.Random and returning one
GeneratedIndividual. Every individual gets its own generator seeded from a
master stream, so a population is the same whether built sequentially or on
a thread pool.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable
import logging
import os
import random

import numpy as np

from treeforge.config import GenerationConfig
from treeforge.creation.initializers import (
    randfunc,
    randfunc_ramped_half_and_half,
    randfunc_typed,
    randfunc_typed_ramped_half_and_half,
)
from treeforge.creation.typed import randexpr_typed_full, randexpr_typed_grow
from treeforge.creation.untyped import randexpr_full, randexpr_grow
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.types import SType
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet

logger = logging.getLogger(__name__)

# Cap worker threads; generation is CPU-bound and short
N_WORKERS = min(os.cpu_count() or 4, 8)

METHODS = ("grow", "full", "ramped")

Strategy = Callable[[random.Random], GeneratedIndividual]


@dataclass
class PopulationStats:
    """Statistics about a generated population."""

    size: int
    unique_formulas: int
    avg_size: float
    std_size: float
    avg_depth: float
    std_depth: float
    min_depth: int
    max_depth: int

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "unique_formulas": self.unique_formulas,
            "avg_size": self.avg_size,
            "std_size": self.std_size,
            "avg_depth": self.avg_depth,
            "std_depth": self.std_depth,
            "min_depth": self.min_depth,
            "max_depth": self.max_depth,
        }


def make_strategy(
    method: str,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    stype: SType | None = None,
    config: GenerationConfig | None = None,
) -> Strategy:
    """Build a generation strategy.

    Args:
        method: "grow", "full" or "ramped" (half-and-half)
        funcset: Function set
        inset: Input variable set
        conset: Constant factory set
        stype: Range type for typed generation, None for untyped
        config: Generation parameters

    Returns:
        Callable taking a random.Random and returning one individual
    """
    if method not in METHODS:
        raise ValueError(f"Unknown generation method: {method}. Valid: {METHODS}")
    config = config or GenerationConfig()

    if stype is None:
        grow = partial(randexpr_grow, subtree_prob=config.subtree_prob)
        full = randexpr_full
        if method == "ramped":
            return partial(
                randfunc_ramped_half_and_half, funcset, inset, conset,
                config.max_depth, config.const_prob, grow, full,
            )
        factory = grow if method == "grow" else full
        return lambda rng: randfunc(
            funcset, inset, conset, config.max_depth, config.const_prob,
            expr_factory=factory, rng=rng,
        )

    formals = {"formal_idx": config.formal_idx, "formal_prefix": config.formal_prefix}
    grow = partial(randexpr_typed_grow, subtree_prob=config.subtree_prob, **formals)
    full = partial(randexpr_typed_full, **formals)
    if method == "ramped":
        return partial(
            randfunc_typed_ramped_half_and_half, stype, funcset, inset, conset,
            config.max_depth, config.const_prob, grow, full,
        )
    factory = grow if method == "grow" else full
    return lambda rng: randfunc_typed(
        stype, funcset, inset, conset, config.max_depth, config.const_prob,
        expr_factory=factory, rng=rng,
    )


def generate_population(
    size: int,
    strategy: Strategy,
    seed: int | None = None,
    n_workers: int = 1,
) -> list[GeneratedIndividual]:
    """Generate a population by calling strategy once per individual.

    Args:
        size: Number of individuals
        strategy: Generation strategy (see make_strategy)
        seed: Seed of the master random stream
        n_workers: Worker threads (1 = sequential)

    Returns:
        Individuals in generation order

    Raises:
        TreeForgeError: If any individual cannot be generated
    """
    if size < 0:
        raise ValueError(f"Population size must be non-negative, got {size}")
    master = random.Random(seed)
    seeds = [master.getrandbits(64) for _ in range(size)]

    def build(individual_seed: int) -> GeneratedIndividual:
        return strategy(random.Random(individual_seed))

    # For small batches, sequential is faster (avoid thread overhead)
    if n_workers <= 1 or size < 4:
        population = [build(s) for s in seeds]
    else:
        with ThreadPoolExecutor(max_workers=min(n_workers, N_WORKERS)) as executor:
            population = list(executor.map(build, seeds))

    logger.info(f"Generated population of {len(population)} individuals")
    return population


def compute_population_stats(population: list[GeneratedIndividual]) -> PopulationStats:
    """Compute shape statistics for a population."""
    if not population:
        return PopulationStats(
            size=0,
            unique_formulas=0,
            avg_size=0.0,
            std_size=0.0,
            avg_depth=0.0,
            std_depth=0.0,
            min_depth=0,
            max_depth=0,
        )

    sizes = np.array([ind.size for ind in population], dtype=float)
    depths = np.array([ind.depth for ind in population], dtype=int)

    return PopulationStats(
        size=len(population),
        unique_formulas=len({ind.hash for ind in population}),
        avg_size=float(np.mean(sizes)),
        std_size=float(np.std(sizes)),
        avg_depth=float(np.mean(depths)),
        std_depth=float(np.std(depths)),
        min_depth=int(np.min(depths)),
        max_depth=int(np.max(depths)),
    )
