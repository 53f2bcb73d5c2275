"""Component scorers: personality distance, label overlap, lifestyle rules."""

from .common import round_half_up, clamp_score
from .personality import score_personality, compute_trait_distance
from .label_sets import score_label_overlap, jaccard_score, normalize_labels
from .lifestyle import score_lifestyle, LifestyleRules, LIFESTYLE_CATEGORIES

__all__ = [
    "round_half_up",
    "clamp_score",
    "score_personality",
    "compute_trait_distance",
    "score_label_overlap",
    "jaccard_score",
    "normalize_labels",
    "score_lifestyle",
    "LifestyleRules",
    "LIFESTYLE_CATEGORIES",
]
