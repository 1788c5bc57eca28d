"""Intolerance-aware content substitution."""

from protocol_engine.content.substitutions import IngredientSwaps

__all__ = ["IngredientSwaps"]
