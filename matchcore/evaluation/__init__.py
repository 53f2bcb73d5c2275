"""Evaluation module for batch scoring analysis."""

from .metrics import (
    compute_score_distribution_stats,
    check_symmetry,
    sanity_check_monotonicity,
    ScoreDistributionStats,
    SymmetryCheck,
    MonotonicityCheck,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "check_symmetry",
    "sanity_check_monotonicity",
    "ScoreDistributionStats",
    "SymmetryCheck",
    "MonotonicityCheck",
    "EvaluationReport",
    "create_evaluation_report"
]
