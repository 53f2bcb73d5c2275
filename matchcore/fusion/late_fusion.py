"""
Weighted fusion of component scores into the overall compatibility score.

Fusion Formula:
    overall = round(w_p * personality + w_iv * interests_values + w_l * lifestyle)

Default weights: 0.5 personality, 0.25 interests+values, 0.25 lifestyle.
Weights must be non-negative and sum to 1, so the result stays in [0, 100]
whenever the component scores do; it is clamped regardless.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Union
import json

import numpy as np

from ..similarity.common import MIN_SCORE, MAX_SCORE

logger = logging.getLogger(__name__)

ScoreInput = Union[int, float, np.ndarray]


@dataclass
class ScoringWeights:
    """
    Component weights for the overall score.

    Attributes:
        personality: Weight for the personality score
        interests_values: Weight for the combined interests/values score
        lifestyle: Weight for the lifestyle score
    """
    personality: float = 0.5
    interests_values: float = 0.25
    lifestyle: float = 0.25

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in self.to_dict().items():
            if value < 0:
                raise ValueError(f"Weight '{name}' must be non-negative, got {value}")
        total = self.personality + self.interests_values + self.lifestyle
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1, got {total}")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringWeights":
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringWeights":
        """Create from main config dictionary."""
        weights_config = config.get("scoring", {}).get("weights", {}) or {}
        return cls(
            personality=weights_config.get("personality", 0.5),
            interests_values=weights_config.get("interests_values", 0.25),
            lifestyle=weights_config.get("lifestyle", 0.25)
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring weights to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoringWeights":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


class WeightedFusion:
    """
    Combines component scores into the overall compatibility score.

    Works on scalars for single-pair scoring and on numpy arrays for
    batch reporting; both paths share the same rounding and clamping.

    Attributes:
        weights: ScoringWeights applied to the components
    """

    def __init__(self, weights: ScoringWeights):
        self.weights = weights
        self.weights.validate()
        logger.debug(f"Initialized WeightedFusion with weights={weights.to_dict()}")

    def fuse(
        self,
        personality: ScoreInput,
        interests_values: ScoreInput,
        lifestyle: ScoreInput
    ) -> np.ndarray:
        """
        Combine component scores.

        Args:
            personality: Personality score(s) [0, 100]
            interests_values: Combined interests/values score(s) [0, 100]
            lifestyle: Lifestyle score(s) [0, 100]

        Returns:
            Integer array of overall scores (0-d for scalar input)
        """
        p = np.asarray(personality, dtype=float)
        iv = np.asarray(interests_values, dtype=float)
        ls = np.asarray(lifestyle, dtype=float)
        if not (p.shape == iv.shape == ls.shape):
            raise ValueError(
                f"Score arrays must have same shape: {p.shape}, {iv.shape}, {ls.shape}"
            )

        w = self.weights
        raw = w.personality * p + w.interests_values * iv + w.lifestyle * ls
        # Half-up rounding, matching round_half_up for scalars
        rounded = np.floor(raw + 0.5)
        return np.clip(rounded, MIN_SCORE, MAX_SCORE).astype(int)

    def fuse_one(self, personality: float, interests_values: float, lifestyle: float) -> int:
        """Combine one pair's component scores into a plain int."""
        return int(self.fuse(personality, interests_values, lifestyle))

    def contributions(
        self,
        personality: float,
        interests_values: float,
        lifestyle: float
    ) -> Dict[str, float]:
        """Weighted contribution of each component before rounding."""
        w = self.weights
        return {
            "personality": w.personality * personality,
            "interests_values": w.interests_values * interests_values,
            "lifestyle": w.lifestyle * lifestyle,
        }


def create_fusion_from_config(config: Dict[str, Any]) -> WeightedFusion:
    """
    Factory function to create WeightedFusion from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured WeightedFusion instance
    """
    return WeightedFusion(ScoringWeights.from_config(config))
