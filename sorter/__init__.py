"""Sort-or-splode package exports."""

from .sorter_engine import MAX_LIVES, Bin, FallingItem, ItemShape, RoundType, SortOrSplodeEngine

__all__ = ["Bin", "FallingItem", "ItemShape", "MAX_LIVES", "RoundType", "SortOrSplodeEngine"]
