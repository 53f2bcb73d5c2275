"""
Evaluation metrics for batch compatibility scores.

There are no ground-truth match outcomes, so evaluation documents how the
scorer behaves rather than how well it predicts:
1. Score distribution analysis (overall and per component)
2. Symmetry: score(A, B) must equal score(B, A)
3. Sanity checks (monotonicity: each component should move the overall
   score in the same direction)

This module DOES NOT claim real-world predictive accuracy.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence, Tuple
import json

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..schema import UserProfile, CompatibilityResult

logger = logging.getLogger(__name__)

COMPONENT_COLUMNS = {
    "personality": "personality_score",
    "interests_values": "interests_values_score",
    "lifestyle": "lifestyle_score",
}
OVERALL_COLUMN = "overall_score"
DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 42.0, "p50": 61.0, "p90": 80.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SymmetryCheck:
    """Results of re-scoring pairs in reverse order."""
    n_checked: int
    n_mismatches: int
    mismatched_pairs: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def mismatch_rate(self) -> float:
        return self.n_mismatches / self.n_checked if self.n_checked else 0.0

    @property
    def is_symmetric(self) -> bool:
        return self.n_mismatches == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_checked": int(self.n_checked),
            "n_mismatches": int(self.n_mismatches),
            "mismatch_rate": float(self.mismatch_rate),
            "is_symmetric": self.is_symmetric,
            "mismatched_pairs": [list(p) for p in self.mismatched_pairs]
        }


@dataclass
class MonotonicityCheck:
    """Results of monotonicity sanity check."""
    component: str
    correlation_with_overall: float
    is_monotonic: bool
    n_violations: int
    violation_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "correlation_with_overall": float(self.correlation_with_overall),
            "is_monotonic": bool(self.is_monotonic),
            "n_violations": int(self.n_violations),
            "violation_rate": float(self.violation_rate)
        }


@dataclass
class EvaluationReport:
    """
    Evaluation report for one batch scoring run.

    Contains distribution statistics, the symmetry check and monotonicity
    sanity checks. Documents scorer behavior WITHOUT claiming predictive
    validity.
    """
    run_name: str
    distribution_stats: ScoreDistributionStats
    component_stats: Dict[str, ScoreDistributionStats] = field(default_factory=dict)
    symmetry_check: Optional[SymmetryCheck] = None
    monotonicity_checks: Dict[str, MonotonicityCheck] = field(default_factory=dict)
    additional_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "run_name": self.run_name,
            "distribution_stats": self.distribution_stats.to_dict(),
            "component_stats": {k: v.to_dict() for k, v in self.component_stats.items()},
            "monotonicity_checks": {k: v.to_dict() for k, v in self.monotonicity_checks.items()},
            "additional_metrics": self.additional_metrics
        }
        if self.symmetry_check:
            result["symmetry_check"] = self.symmetry_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        stats = self.distribution_stats
        lines = [
            f"Evaluation Report: {self.run_name}",
            "=" * 50,
            "",
            f"Overall Score Distribution ({stats.count} pairs):",
            f"  Mean: {stats.mean:.2f}",
            f"  Std:  {stats.std:.2f}",
            f"  Min:  {stats.min:.0f}",
            f"  Max:  {stats.max:.0f}",
        ]
        for q_name, q_value in stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.1f}")

        if self.component_stats:
            lines.extend(["", "Component Means:"])
            for name, comp in self.component_stats.items():
                lines.append(f"  {name}: {comp.mean:.2f} (std {comp.std:.2f})")

        if self.symmetry_check:
            lines.extend([
                "",
                "Symmetry Check:",
                f"  Pairs checked: {self.symmetry_check.n_checked}",
                f"  Mismatches: {self.symmetry_check.n_mismatches}",
            ])

        if self.monotonicity_checks:
            lines.extend(["", "Monotonicity Checks:"])
            for name, check in self.monotonicity_checks.items():
                lines.append(
                    f"  {name}: rho={check.correlation_with_overall:.3f}, "
                    f"monotonic={check.is_monotonic}, "
                    f"violations={check.violation_rate:.2%}"
                )

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics for an empty score set")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def _result_signature(result: CompatibilityResult) -> Tuple:
    """Order-independent parts of a result."""
    return (
        result.overall_score,
        result.personality.score,
        result.interests_and_values.score,
        result.interests_and_values.interests.shared,
        result.interests_and_values.values.shared,
        result.lifestyle.score,
        sorted(result.lifestyle.compatible),
        sorted(result.lifestyle.neutral),
    )


def check_symmetry(
    scorer,
    pairs: Sequence[Tuple[UserProfile, UserProfile]],
    sample_size: int = 1000,
    random_seed: int = 42
) -> SymmetryCheck:
    """
    Re-score pairs in reverse order and count mismatches.

    Args:
        scorer: CompatibilityScorer
        pairs: (profile_a, profile_b) pairs that were scored
        sample_size: Maximum number of pairs to re-check
        random_seed: Seed for choosing the sample

    Returns:
        SymmetryCheck instance
    """
    pairs = list(pairs)
    if len(pairs) > sample_size:
        rng = np.random.RandomState(random_seed)
        sample_idx = np.sort(rng.choice(len(pairs), size=sample_size, replace=False))
        pairs = [pairs[i] for i in sample_idx]

    mismatched = []
    for profile_a, profile_b in pairs:
        forward = scorer.score(profile_a, profile_b)
        backward = scorer.score(profile_b, profile_a)
        if _result_signature(forward) != _result_signature(backward):
            mismatched.append((profile_a.user_id, profile_b.user_id))

    if mismatched:
        logger.warning(f"Symmetry check found {len(mismatched)} asymmetric pairs")

    return SymmetryCheck(
        n_checked=len(pairs),
        n_mismatches=len(mismatched),
        mismatched_pairs=mismatched
    )


def sanity_check_monotonicity(
    overall_scores: Sequence[float],
    component_scores: Sequence[float],
    component: str = "component",
    threshold: float = 0.5,
    max_comparisons: int = 1000
) -> MonotonicityCheck:
    """
    Check that the overall score moves with a component score.

    Since the overall score is a positive-weighted sum, pairs with a much
    higher component score should rank higher overall. Other components
    add noise, so this is a rank-correlation sanity check, not an identity.

    Args:
        overall_scores: Overall scores
        component_scores: Component scores for the same pairs
        component: Component name for the report
        threshold: Correlation threshold for the "is_monotonic" flag
        max_comparisons: Number of leading pairs used for violation counting

    Returns:
        MonotonicityCheck instance
    """
    overall = np.asarray(overall_scores, dtype=float)
    comp = np.asarray(component_scores, dtype=float)

    if overall.size < 2:
        correlation = 0.0
    else:
        correlation, _ = spearmanr(comp, overall)
        if np.isnan(correlation):
            # Constant input, e.g. every pair shares the same component score
            logger.warning(f"Spearman correlation undefined for {component}; using 0.0")
            correlation = 0.0

    # Violations: component increases but overall decreases
    n = min(overall.size, max_comparisons)
    comp_diff = comp[:n][None, :] - comp[:n][:, None]
    overall_diff = overall[:n][None, :] - overall[:n][:, None]
    upper = np.triu(np.ones((n, n), dtype=bool), k=1)
    n_comparisons = int(upper.sum())
    n_violations = int(((comp_diff * overall_diff) < 0)[upper].sum())
    violation_rate = n_violations / n_comparisons if n_comparisons > 0 else 0.0

    return MonotonicityCheck(
        component=component,
        correlation_with_overall=float(correlation),
        is_monotonic=bool(correlation >= threshold),
        n_violations=n_violations,
        violation_rate=violation_rate
    )


def create_evaluation_report(
    run_name: str,
    scores_df: pd.DataFrame,
    quantiles: Sequence[float] = DEFAULT_QUANTILES,
    monotonicity_threshold: float = 0.5,
    symmetry_check: Optional[SymmetryCheck] = None
) -> EvaluationReport:
    """
    Create an evaluation report from a scores DataFrame.

    Args:
        run_name: Name of the run
        scores_df: One row per scored pair with overall and component score columns
        quantiles: Quantiles to compute
        monotonicity_threshold: Correlation threshold for monotonicity flags
        symmetry_check: Result of check_symmetry, if run

    Returns:
        EvaluationReport instance
    """
    dist_stats = compute_score_distribution_stats(scores_df[OVERALL_COLUMN], quantiles)

    component_stats = {}
    monotonicity = {}
    for name, column in COMPONENT_COLUMNS.items():
        if column not in scores_df.columns:
            continue
        component_stats[name] = compute_score_distribution_stats(scores_df[column], quantiles)
        monotonicity[name] = sanity_check_monotonicity(
            scores_df[OVERALL_COLUMN], scores_df[column],
            component=name, threshold=monotonicity_threshold
        )

    return EvaluationReport(
        run_name=run_name,
        distribution_stats=dist_stats,
        component_stats=component_stats,
        symmetry_check=symmetry_check,
        monotonicity_checks=monotonicity
    )
