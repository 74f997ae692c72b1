"""Random tree creation: terminals, growers and initializers."""

from treeforge.creation.terminal import random_element, select_terminal
from treeforge.creation.untyped import randexpr_full, randexpr_grow
from treeforge.creation.typed import randexpr_typed_full, randexpr_typed_grow
from treeforge.creation.random_call import random_call
from treeforge.creation.initializers import (
    randfunc,
    randfunc_ramped_half_and_half,
    randfunc_typed,
    randfunc_typed_ramped_half_and_half,
)
from treeforge.creation.population import (
    compute_population_stats,
    generate_population,
    make_strategy,
)

__all__ = [
    "random_element",
    "select_terminal",
    "randexpr_grow",
    "randexpr_full",
    "randexpr_typed_grow",
    "randexpr_typed_full",
    "random_call",
    "randfunc",
    "randfunc_ramped_half_and_half",
    "randfunc_typed",
    "randfunc_typed_ramped_half_and_half",
    "compute_population_stats",
    "generate_population",
    "make_strategy",
]
