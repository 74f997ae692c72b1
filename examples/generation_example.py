"""Example: Initializing a strongly-typed GP population.

This example demonstrates:
- Loading a palette of operators, constants and input variables
- Typed ramped half-and-half initialization
- Verifying and running the generated functions
- Population shape statistics
"""

import math
from pathlib import Path

from treeforge.config import GenerationConfig
from treeforge.creation.population import (
    compute_population_stats,
    generate_population,
    make_strategy,
)
from treeforge.expression.compiler import compile_individual
from treeforge.expression.typecheck import check_well_typed
from treeforge.expression.types import parse_type
from treeforge.primitives.palette import load_palette

IMPLEMENTATIONS = {
    "plus": lambda x, y: x + y,
    "times": lambda x, y: x * y,
    "sin": math.sin,
    "apply": lambda f, x: f(x),
    "gt": lambda x, y: x > y,
    "ifelse": lambda c, x, y: x if c else y,
}


def main():
    """Run population initialization example."""
    print("=" * 80)
    print("treeforge Population Initialization")
    print("=" * 80)

    # =========================================================================
    # Step 1: Load palette
    # =========================================================================
    palette = load_palette(Path(__file__).parent / "palette.json", seed=42)
    print(f"\nFunctions: {palette.funcset}")
    print(f"Inputs:    {palette.inset}")

    # =========================================================================
    # Step 2: Generate population
    # =========================================================================
    double = parse_type("double")
    config = GenerationConfig(max_depth=5, const_prob=0.3, subtree_prob=0.6, formal_prefix="p")
    strategy = make_strategy(
        "ramped", palette.funcset, palette.inset, palette.conset, stype=double, config=config
    )
    population = generate_population(50, strategy, seed=42)

    print(f"\nGenerated {len(population)} individuals. First five:")
    for individual in population[:5]:
        print(f"  {individual.formula}")

    # =========================================================================
    # Step 3: Verify and evaluate
    # =========================================================================
    print("\nEvaluating at a=0.5, b=-1.0:")
    for individual in population[:5]:
        check_well_typed(individual.body, palette.funcset, palette.inset, expected=double)
        func = compile_individual(individual, IMPLEMENTATIONS)
        print(f"  {func(0.5, -1.0):+.4f}  {individual.hash}")

    # =========================================================================
    # Step 4: Statistics
    # =========================================================================
    stats = compute_population_stats(population)
    print("\nPopulation statistics:")
    for key, value in stats.to_dict().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
