"""Pair generation for batch scoring."""

from .generator import PairGenerator, create_pair_generator

__all__ = ["PairGenerator", "create_pair_generator"]
