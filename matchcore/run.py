"""
Batch scoring runner for the compatibility engine.

This is the single entrypoint for offline scoring of a profile export.

Usage:
    python -m matchcore.run --config configs/config.yaml

The run performs the following steps:
1. Load and validate configuration
2. Load and normalize profiles
3. Generate user pairs
4. Score every pair
5. Evaluate the score distribution, symmetry and monotonicity
6. Rank top matches per user
7. Save all artifacts
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from . import __version__
from .schema import UserProfile, KidsIntent, SubstanceUse, PoliticalLeaning

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SCORE_COLUMNS = [
    "user1_id",
    "user2_id",
    "overall_score",
    "personality_score",
    "interests_values_score",
    "interests_score",
    "values_score",
    "lifestyle_score",
]

SYNTHETIC_INTERESTS = [
    "hiking", "reading", "music", "movies", "travel", "cooking",
    "gaming", "art", "sports", "photography", "yoga", "dancing",
]
SYNTHETIC_VALUES = [
    "honesty", "family", "adventure", "ambition", "kindness",
    "loyalty", "humor", "independence",
]
SYNTHETIC_RELIGIONS = ["christian", "jewish", "muslim", "buddhist", "spiritual", "agnostic"]


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def create_synthetic_profiles(n_users: int = 200, random_seed: int = 42) -> List[UserProfile]:
    """Create synthetic profiles for demonstration when real data is unavailable."""
    rng = np.random.RandomState(random_seed)

    def maybe(options):
        # Roughly one answer in six is left blank
        if rng.rand() < 1 / 6:
            return None
        return options[rng.randint(len(options))]

    kids = [k.value for k in KidsIntent]
    substances = [s.value for s in SubstanceUse]
    politics = [p.value for p in PoliticalLeaning]

    profiles = []
    for i in range(n_users):
        traits = rng.randint(0, 101, size=5)
        n_religion = rng.randint(0, 2)
        profiles.append(UserProfile(
            user_id=f"synthetic_{i:04d}",
            personality={
                "openness": int(traits[0]),
                "conscientiousness": int(traits[1]),
                "extraversion": int(traits[2]),
                "agreeableness": int(traits[3]),
                "neuroticism": int(traits[4]),
            },
            interests=list(rng.choice(SYNTHETIC_INTERESTS, size=rng.randint(1, 6), replace=False)),
            values=list(rng.choice(SYNTHETIC_VALUES, size=rng.randint(0, 4), replace=False)),
            lifestyle={
                "wants_kids": maybe(kids),
                "religion": list(rng.choice(SYNTHETIC_RELIGIONS, size=n_religion, replace=False)),
                "drinking": maybe(substances),
                "smoking": maybe(substances),
                "cannabis_use": maybe(substances),
                "politics": maybe(politics),
            },
        ))

    logger.info(f"Created synthetic profiles: {n_users} users")
    return profiles


def score_pairs(
    scorer,
    profiles: List[UserProfile],
    indices_a: np.ndarray,
    indices_b: np.ndarray
) -> Tuple[pd.DataFrame, List[Tuple[UserProfile, UserProfile]]]:
    """
    Score index pairs into a flat DataFrame.

    Returns:
        Tuple of (scores DataFrame with SCORE_COLUMNS, list of profile pairs scored)
    """
    pairs = [(profiles[i], profiles[j]) for i, j in zip(indices_a, indices_b)]
    rows = []
    for (profile_a, profile_b), result in zip(pairs, scorer.score_batch(pairs)):
        rows.append({
            "user1_id": profile_a.user_id,
            "user2_id": profile_b.user_id,
            "overall_score": result.overall_score,
            "personality_score": result.personality.score,
            "interests_values_score": result.interests_and_values.score,
            "interests_score": result.interests_and_values.interests.score,
            "values_score": result.interests_and_values.values.score,
            "lifestyle_score": result.lifestyle.score,
        })
    return pd.DataFrame(rows, columns=SCORE_COLUMNS), pairs


def rank_top_matches(scores_df: pd.DataFrame, top_k: int = 5) -> Dict[str, List[Dict[str, Any]]]:
    """
    Rank each user's best matches by overall score.

    Ties are broken by the other user's id so the ranking is deterministic.

    Args:
        scores_df: Pairwise scores (each unordered pair once)
        top_k: Number of matches to keep per user

    Returns:
        Dictionary of user_id -> [{"user_id": other, "overall_score": score}, ...]
    """
    if scores_df.empty:
        return {}

    forward = scores_df[["user1_id", "user2_id", "overall_score"]].rename(
        columns={"user1_id": "user_id", "user2_id": "match_id"}
    )
    backward = scores_df[["user2_id", "user1_id", "overall_score"]].rename(
        columns={"user2_id": "user_id", "user1_id": "match_id"}
    )
    both = pd.concat([forward, backward], ignore_index=True)
    both = both.sort_values(
        ["user_id", "overall_score", "match_id"], ascending=[True, False, True]
    )

    ranked = {}
    for user_id, group in both.groupby("user_id", sort=True):
        ranked[str(user_id)] = [
            {"user_id": row.match_id, "overall_score": int(row.overall_score)}
            for row in group.head(top_k).itertuples(index=False)
        ]
    return ranked


def run_scoring(
    config_path: str,
    profiles_path: Optional[str] = None,
    seed: Optional[int] = None,
    output_dir: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run batch scoring over a profile export.

    Args:
        config_path: Path to the configuration YAML file
        profiles_path: If provided, overrides data.profiles.path
        seed: If provided, overrides global.random_seed
        output_dir: If provided, write artifacts to this directory instead of config default

    Returns:
        Dictionary with run results and paths to artifacts
    """
    from .configs import load_config, validate_config
    from .data_loading import load_profiles
    from .pair_generation import create_pair_generator
    from .inference import create_scorer
    from .evaluation import create_evaluation_report, check_symmetry
    from .artifacts import ArtifactManager

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("COMPATIBILITY BATCH SCORING")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(config.get("global", {}).get("log_level", "INFO"))

    random_seed = seed if seed is not None else config.get("global", {}).get("random_seed", 42)
    effective_output_dir = output_dir or config.get("global", {}).get("output_dir", "artifacts")
    artifact_manager = ArtifactManager(effective_output_dir)

    scorer = create_scorer(config)

    # =========================================================================
    # 2. Load profiles
    # =========================================================================
    logger.info("STEP 1: Loading Profiles")

    data_config = config.get("data", {}).get("profiles", {})
    path = profiles_path or data_config.get("path", "data/sample_profiles.json")
    fmt = data_config.get("format") if profiles_path is None else None

    try:
        profiles = load_profiles(path, fmt=fmt, delimiter=data_config.get("delimiter", ","))
        source = path
    except FileNotFoundError as e:
        logger.error(f"Profile data not found: {e}")
        logger.info("Creating synthetic profiles for demonstration...")
        profiles = create_synthetic_profiles(random_seed=random_seed)
        source = "synthetic"

    scorable = [p for p in profiles if p.has_personality]
    skipped = [p.user_id for p in profiles if not p.has_personality]
    if skipped:
        logger.warning(f"Skipping {len(skipped)} profiles without personality: {skipped}")

    # =========================================================================
    # 3. Generate pairs and score
    # =========================================================================
    logger.info("STEP 2: Generating Pairs")
    generator = create_pair_generator(config, random_seed=random_seed)
    indices_a, indices_b = generator.generate_pairs(len(scorable))

    logger.info("STEP 3: Scoring Pairs")
    scores_df, pairs = score_pairs(scorer, scorable, indices_a, indices_b)
    artifact_manager.save_scores(scores_df)

    # =========================================================================
    # 4. Evaluate
    # =========================================================================
    eval_config = config.get("evaluation", {})
    report = None
    if scores_df.empty:
        logger.warning("No pairs scored; skipping evaluation")
    else:
        logger.info("STEP 4: Evaluation")
        symmetry = check_symmetry(scorer, pairs, random_seed=random_seed)
        report = create_evaluation_report(
            run_name="batch",
            scores_df=scores_df,
            quantiles=eval_config.get("quantiles", [0.1, 0.25, 0.5, 0.75, 0.9]),
            monotonicity_threshold=eval_config.get("monotonicity_threshold", 0.5),
            symmetry_check=symmetry
        )
        artifact_manager.save_evaluation_report(report, "batch")
        logger.info("\n" + report.summary())

    top_matches = rank_top_matches(scores_df, eval_config.get("top_k_matches", 5))
    artifact_manager.save_json(top_matches, "reports", "top_matches")

    # =========================================================================
    # 5. Save metadata
    # =========================================================================
    metadata = {
        "matchcore_version": __version__,
        "run_timestamp": datetime.now().isoformat(),
        "config_path": config_path,
        "profiles_source": source,
        "random_seed": random_seed,
        "profiles_loaded": len(profiles),
        "profiles_skipped": skipped,
        "pairs_scored": len(scores_df),
        "scorer": scorer.describe(),
    }
    artifact_manager.save_metadata(metadata)
    artifact_manager.save_yaml_config(config, "config_used")

    logger.info("=" * 60)
    logger.info("SCORING COMPLETE")
    logger.info("=" * 60)

    artifacts = artifact_manager.list_artifacts()
    for category, files in artifacts.items():
        logger.info(f"  {category}/")
        for f in files:
            logger.info(f"    - {f}")

    return {
        "success": True,
        "output_dir": str(artifact_manager.output_dir),
        "artifacts": artifacts,
        "metadata": metadata,
        "report": report.to_dict() if report else None,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for batch scoring."""
    parser = argparse.ArgumentParser(
        description="Score all user pairs in a profile export"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        default=None,
        help="Profile file (JSON or CSV, overrides config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for pair sampling (overrides config)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for artifacts (overrides config)"
    )

    args = parser.parse_args(argv)

    try:
        result = run_scoring(
            args.config,
            profiles_path=args.profiles,
            seed=args.seed,
            output_dir=args.output_dir
        )
        if result["success"]:
            logger.info("Scoring completed successfully!")
            return 0
        logger.error("Scoring failed!")
        return 1
    except Exception as e:
        logger.exception(f"Scoring failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
