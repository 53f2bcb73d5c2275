"""
Jaccard overlap of free-text label sets (interests, values, religion).

Labels are trimmed and lowercased before comparison, so
{"Hiking", " yoga "} and {"hiking", "yoga"} are identical sets.
Two empty sets score 0: no signal earns no credit.
"""

import logging
from typing import Iterable, Optional, Set

from ..exceptions import InvalidInput
from ..schema import LabelOverlap
from .common import round_half_up, clamp_score

logger = logging.getLogger(__name__)


def normalize_labels(labels: Optional[Iterable[str]]) -> Set[str]:
    """
    Normalise labels into a set.

    Labels that are blank after trimming are dropped.

    Raises:
        InvalidInput: If a label is not a string
    """
    if labels is None:
        return set()
    if isinstance(labels, str):
        labels = [labels]

    normalized = set()
    for label in labels:
        if not isinstance(label, str):
            raise InvalidInput(f"Labels must be strings, got {label!r}")
        cleaned = label.strip().lower()
        if cleaned:
            normalized.add(cleaned)
    return normalized


def jaccard_score(labels_a: Optional[Iterable[str]], labels_b: Optional[Iterable[str]]) -> int:
    """Jaccard index of two label collections scaled to 0-100."""
    return score_label_overlap(labels_a, labels_b).score


def score_label_overlap(
    labels_a: Optional[Iterable[str]],
    labels_b: Optional[Iterable[str]]
) -> LabelOverlap:
    """
    Compute the overlap between two label collections.

    Args:
        labels_a: Labels for user A
        labels_b: Labels for user B

    Returns:
        LabelOverlap with score = round(100 * |A & B| / |A | B|), the shared
        labels and the labels unique to each side (sorted, normalised)
    """
    set_a = normalize_labels(labels_a)
    set_b = normalize_labels(labels_b)

    shared = set_a & set_b
    union = set_a | set_b

    if not union:
        score = 0
    else:
        score = clamp_score(round_half_up(len(shared) / len(union) * 100))

    return LabelOverlap(
        score=score,
        shared=sorted(shared),
        unique_a=sorted(set_a - set_b),
        unique_b=sorted(set_b - set_a)
    )
