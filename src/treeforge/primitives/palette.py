"""Palette files: declarative function, constant and variable sets.

A palette is a JSON document such as:

    {
      "functions": [{"name": "plus", "type": "(double, double) -> double"},
                    {"name": "neg", "arity": 1}],
      "constants": [{"type": "double", "distribution": "uniform", "low": -1, "high": 1},
                    {"type": "bool", "value": true}],
      "variables": [{"name": "x", "type": "double"}]
    }

Types use the canonical key syntax understood by parse_type.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Literal, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from treeforge.expression.types import FunctionType, SType, parse_type
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet


def _validate_type_key(v: Optional[str]) -> Optional[str]:
    if v is not None:
        parse_type(v)
    return v


class FunctionSpec(BaseModel):
    """Operator declaration: a signature for typed use, or just an arity."""

    name: str = Field(..., min_length=1, description="Operator name")
    type: Optional[str] = Field(None, description="Function type key")
    arity: Optional[int] = Field(None, ge=0, description="Arity of an untyped operator")

    @field_validator("type")
    @classmethod
    def type_parses(cls, v: Optional[str]) -> Optional[str]:
        """Type must be a function type key."""
        _validate_type_key(v)
        if v is not None and not isinstance(parse_type(v), FunctionType):
            raise ValueError(f"operator type must be a function type, got {v}")
        return v

    @model_validator(mode="after")
    def type_or_arity(self) -> "FunctionSpec":
        if self.type is None and self.arity is None:
            raise ValueError(f"operator {self.name} needs a type or an arity")
        return self


class ConstantSpec(BaseModel):
    """Constant factory declaration: a fixed value or a random distribution."""

    type: Optional[str] = Field(None, description="Type key of the constants")
    value: Optional[Any] = Field(None, description="Fixed value")
    distribution: Optional[Literal["uniform", "normal", "integers"]] = None
    low: float = Field(0.0, description="Lower bound (uniform, integers)")
    high: float = Field(1.0, description="Upper bound (uniform, integers)")
    mean: float = Field(0.0, description="Mean (normal)")
    std: float = Field(1.0, ge=0, description="Standard deviation (normal)")

    @field_validator("type")
    @classmethod
    def type_parses(cls, v: Optional[str]) -> Optional[str]:
        return _validate_type_key(v)

    @model_validator(mode="after")
    def value_or_distribution(self) -> "ConstantSpec":
        if (self.value is None) == (self.distribution is None):
            raise ValueError("constant needs exactly one of value or distribution")
        if self.distribution in ("uniform", "integers") and self.high <= self.low:
            raise ValueError("high must be > low")
        return self


class VariableSpec(BaseModel):
    """Input variable declaration."""

    name: str = Field(..., description="Variable name")
    type: Optional[str] = Field(None, description="Type key of the variable")

    @field_validator("type")
    @classmethod
    def type_parses(cls, v: Optional[str]) -> Optional[str]:
        return _validate_type_key(v)

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """Variable names become formal parameters."""
        if not v.isidentifier():
            raise ValueError(f"variable name must be an identifier, got {v!r}")
        return v


class PaletteSpec(BaseModel):
    """Complete palette document."""

    functions: list[FunctionSpec] = Field(default_factory=list)
    constants: list[ConstantSpec] = Field(default_factory=list)
    variables: list[VariableSpec] = Field(default_factory=list)


@dataclass
class Palette:
    """Registries built from a palette."""

    funcset: FunctionSet
    conset: ConstantFactorySet
    inset: InputVariableSet


def _optional_type(key: Optional[str]) -> SType | None:
    return parse_type(key) if key is not None else None


def _constant_factory(spec: ConstantSpec, gen: np.random.Generator) -> Callable[[], Any]:
    if spec.distribution is None:
        value = spec.value
        return lambda: value
    if spec.distribution == "uniform":
        return lambda: float(gen.uniform(spec.low, spec.high))
    if spec.distribution == "normal":
        return lambda: float(gen.normal(spec.mean, spec.std))
    return lambda: int(gen.integers(int(spec.low), int(spec.high)))


def build_palette(spec: PaletteSpec, seed: int | None = None) -> Palette:
    """Build function, constant and input variable sets from a palette.

    Args:
        spec: Validated palette document
        seed: Seed for the random constant factories

    Returns:
        Palette with the three registries
    """
    gen = np.random.default_rng(seed)

    signatures = {f.name: parse_type(f.type) for f in spec.functions if f.type is not None}
    arities = {f.name: f.arity for f in spec.functions if f.arity is not None}
    funcset = FunctionSet(signatures=signatures, arities=arities)

    conset = ConstantFactorySet(
        [(_constant_factory(c, gen), _optional_type(c.type)) for c in spec.constants]
    )
    inset = InputVariableSet({v.name: _optional_type(v.type) for v in spec.variables})

    return Palette(funcset=funcset, conset=conset, inset=inset)


def load_palette(path: str | Path, seed: int | None = None) -> Palette:
    """Load, validate and build a palette JSON file."""
    spec = PaletteSpec.model_validate_json(Path(path).read_text())
    return build_palette(spec, seed=seed)
