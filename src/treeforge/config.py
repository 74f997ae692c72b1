"""Configuration for random tree generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GenerationConfig:
    """Configuration for tree generation.

    Attributes:
        max_depth: Maximum expression tree depth (root counts as depth 1)
        const_prob: Probability of a constant when a terminal is created
        subtree_prob: Probability of creating a subtree in grow mode
        formal_prefix: Name prefix for parameters of synthesized closures
        formal_idx: First index for parameters of synthesized closures
        seed: Random seed
    """

    max_depth: int = 8
    const_prob: float = 0.2
    subtree_prob: float = 0.5
    formal_prefix: str = "x"
    formal_idx: int = 1
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        for name in ("const_prob", "subtree_prob"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if not self.formal_prefix.isidentifier():
            raise ValueError(f"formal_prefix must be an identifier, got {self.formal_prefix!r}")
        if self.formal_idx < 0:
            raise ValueError(f"formal_idx must be >= 0, got {self.formal_idx}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_depth": self.max_depth,
            "const_prob": self.const_prob,
            "subtree_prob": self.subtree_prob,
            "formal_prefix": self.formal_prefix,
            "formal_idx": self.formal_idx,
            "seed": self.seed,
        }
