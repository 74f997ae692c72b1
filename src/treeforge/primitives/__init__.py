"""Function, constant and input variable registries."""

from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet
from treeforge.primitives.palette import Palette, PaletteSpec, build_palette, load_palette

__all__ = [
    "FunctionSet",
    "ConstantFactorySet",
    "InputVariableSet",
    "Palette",
    "PaletteSpec",
    "build_palette",
    "load_palette",
]
