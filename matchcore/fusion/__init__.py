"""Weighted fusion of component scores."""

from .late_fusion import WeightedFusion, ScoringWeights, create_fusion_from_config

__all__ = ["WeightedFusion", "ScoringWeights", "create_fusion_from_config"]
