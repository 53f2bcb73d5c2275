"""
Pair generation for batch compatibility scoring.

Generates the (user A, user B) index pairs scored by the offline run.

Key Design Decisions:
- Pairs are unordered: the score is symmetric, so (A, B) and (B, A) are
  the same pair and only i < j is emitted
- Self-pairs are excluded: (A, A) is never generated
- Fewer than two users yields no pairs
- Reproducible given a random seed
"""

import logging
from typing import Dict, Any, Tuple, Optional

import numpy as np

logger = logging.getLogger(__name__)


class PairGenerator:
    """
    Generator for user index pairs.

    Attributes:
        max_pairs: Maximum number of pairs to generate
        small_dataset_multiplier: For small datasets, cap at n * multiplier
        random_state: Numpy RandomState for reproducibility
    """

    def __init__(
        self,
        max_pairs: int = 200000,
        small_dataset_multiplier: int = 50,
        random_seed: Optional[int] = None
    ):
        if max_pairs <= 0:
            raise ValueError(f"max_pairs must be positive, got {max_pairs}")
        if small_dataset_multiplier <= 0:
            raise ValueError(
                f"small_dataset_multiplier must be positive, got {small_dataset_multiplier}"
            )
        self.max_pairs = max_pairs
        self.small_dataset_multiplier = small_dataset_multiplier
        self.random_state = np.random.RandomState(random_seed)

    def target_pair_count(self, n_users: int) -> int:
        """min(max_pairs, n * multiplier, n * (n - 1) / 2)"""
        max_possible = n_users * (n_users - 1) // 2
        return max(0, min(self.max_pairs, n_users * self.small_dataset_multiplier, max_possible))

    def generate_pairs(self, n_users: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate pairs of user indices.

        Args:
            n_users: Total number of users

        Returns:
            Tuple of (indices_a, indices_b) integer arrays with
            indices_a[i] < indices_b[i] for every pair
        """
        target_pairs = self.target_pair_count(n_users)
        max_possible = n_users * (n_users - 1) // 2

        logger.info(f"Generating {target_pairs} pairs from {n_users} users "
                    f"(max possible: {max_possible})")

        if target_pairs == 0:
            empty = np.array([], dtype=int)
            return empty, empty.copy()

        if target_pairs >= max_possible * 0.5:
            return self._generate_by_enumeration(n_users, target_pairs)
        return self._generate_by_sampling(n_users, target_pairs)

    def _generate_by_enumeration(
        self, n_users: int, target_pairs: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Enumerate every pair and subsample if needed."""
        indices_a, indices_b = np.triu_indices(n_users, k=1)

        if target_pairs < len(indices_a):
            sample_idx = np.sort(self.random_state.choice(
                len(indices_a), size=target_pairs, replace=False
            ))
            indices_a = indices_a[sample_idx]
            indices_b = indices_b[sample_idx]

        logger.info(f"Generated {len(indices_a)} pairs by enumeration")
        return indices_a.astype(int), indices_b.astype(int)

    def _generate_by_sampling(
        self, n_users: int, target_pairs: int
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Rejection sampling, for when only a small fraction of pairs is needed."""
        pairs_set = set()
        batch_size = min(target_pairs * 2, 1000000)

        while len(pairs_set) < target_pairs:
            a = self.random_state.randint(0, n_users, size=batch_size)
            b = self.random_state.randint(0, n_users, size=batch_size)

            for x, y in zip(a, b):
                if x == y:
                    continue
                pairs_set.add((int(min(x, y)), int(max(x, y))))
                if len(pairs_set) >= target_pairs:
                    break

        pairs_list = sorted(pairs_set)
        indices_a = np.array([p[0] for p in pairs_list], dtype=int)
        indices_b = np.array([p[1] for p in pairs_list], dtype=int)

        logger.info(f"Generated {len(indices_a)} pairs by sampling")
        return indices_a, indices_b


def create_pair_generator(config: Dict[str, Any], random_seed: Optional[int] = None) -> PairGenerator:
    """
    Factory function to create a PairGenerator from config.

    Args:
        config: Main configuration dictionary
        random_seed: Seed override (defaults to global.random_seed)

    Returns:
        Configured PairGenerator
    """
    pair_config = config.get("pair_generation", {}) or {}
    if random_seed is None:
        random_seed = config.get("global", {}).get("random_seed", 42)
    return PairGenerator(
        max_pairs=pair_config.get("max_pairs", 200000),
        small_dataset_multiplier=pair_config.get("small_dataset_multiplier", 50),
        random_seed=random_seed
    )
