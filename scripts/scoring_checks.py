"""
Property checks for the scoring engine.

Checks:
1. Reference scenario scores 81
2. Score ranges are within [0, 100]
3. Symmetry: score(A, B) == score(B, A)
4. Similar profiles outscore different ones
5. Perturbation stability: one trait moved by 5 points changes the
   overall score by a few points at most

Usage:
    python scripts/scoring_checks.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from matchcore.inference import CompatibilityScorer, UserProfile, PersonalityVector


def create_profile_a() -> UserProfile:
    return UserProfile(
        user_id="person_a",
        personality={"openness": 50, "conscientiousness": 50, "extraversion": 50,
                     "agreeableness": 50, "neuroticism": 50},
        interests=["coffee", "hiking"],
        lifestyle={"wants_kids": "want", "drinking": "socially", "smoking": "never",
                   "cannabis_use": "never", "politics": "moderate"},
    )


def create_profile_b_similar() -> UserProfile:
    return UserProfile(
        user_id="person_b_similar",
        personality={"openness": 50, "conscientiousness": 50, "extraversion": 50,
                     "agreeableness": 50, "neuroticism": 50},
        interests=["coffee"],
        lifestyle={"wants_kids": "want", "drinking": "regularly", "smoking": "never",
                   "cannabis_use": "never", "politics": "moderate"},
    )


def create_profile_c_different() -> UserProfile:
    return UserProfile(
        user_id="person_c_different",
        personality={"openness": 10, "conscientiousness": 95, "extraversion": 5,
                     "agreeableness": 30, "neuroticism": 90},
        interests=["television"],
        values=["tradition"],
        lifestyle={"wants_kids": "dont_want", "drinking": "never", "smoking": "regularly",
                   "cannabis_use": "regularly", "politics": "very_conservative"},
    )


def check_reference_scenario(scorer: CompatibilityScorer) -> bool:
    print("\n" + "=" * 60)
    print("CHECK 1: Reference Scenario")
    print("=" * 60)

    result = scorer.score(create_profile_a(), create_profile_b_similar())
    print(f"  personality={result.personality.score}, "
          f"interests_values={result.interests_and_values.score}, "
          f"lifestyle={result.lifestyle.score}, overall={result.overall_score}")
    print(f"  reasons={result.reasons}")
    return result.overall_score == 81


def check_score_ranges(scorer: CompatibilityScorer) -> bool:
    print("\n" + "=" * 60)
    print("CHECK 2: Score Ranges")
    print("=" * 60)

    profiles = [create_profile_a(), create_profile_b_similar(), create_profile_c_different()]
    all_passed = True
    for i, first in enumerate(profiles):
        for second in profiles[i + 1:]:
            result = scorer.score(first, second)
            scores = [result.overall_score, result.personality.score,
                      result.interests_and_values.score, result.lifestyle.score]
            in_range = all(0 <= s <= 100 for s in scores)
            print(f"  {first.user_id} vs {second.user_id}: {scores} "
                  f"[{'PASS' if in_range else 'FAIL'}]")
            all_passed = all_passed and in_range
    return all_passed


def check_symmetry(scorer: CompatibilityScorer) -> bool:
    print("\n" + "=" * 60)
    print("CHECK 3: Symmetry (A,B == B,A)")
    print("=" * 60)

    a, c = create_profile_a(), create_profile_c_different()
    ab = scorer.score(a, c)
    ba = scorer.score(c, a)
    print(f"  score(A, C)={ab.overall_score}  score(C, A)={ba.overall_score}")
    return (
        ab.overall_score == ba.overall_score
        and ab.lifestyle.compatible == ba.lifestyle.compatible
        and ab.lifestyle.neutral == ba.lifestyle.neutral
    )


def check_similar_vs_different(scorer: CompatibilityScorer) -> bool:
    print("\n" + "=" * 60)
    print("CHECK 4: Similar vs Different Scores")
    print("=" * 60)

    a = create_profile_a()
    similar = scorer.score(a, create_profile_b_similar()).overall_score
    different = scorer.score(a, create_profile_c_different()).overall_score
    print(f"  similar={similar}  different={different}")
    return similar > different


def check_perturbation_stability(scorer: CompatibilityScorer) -> bool:
    print("\n" + "=" * 60)
    print("CHECK 5: Perturbation Stability")
    print("=" * 60)

    a = create_profile_a()
    b = create_profile_b_similar()
    baseline = scorer.score(a, b).overall_score

    perturbed_a = create_profile_a()
    perturbed_a.personality = PersonalityVector(
        **{**perturbed_a.personality.to_dict(), "extraversion": 55}
    )
    perturbed = scorer.score(perturbed_a, b).overall_score

    change = abs(baseline - perturbed)
    print(f"  baseline={baseline}  perturbed={perturbed}  change={change}")
    return change <= 3


def main():
    """Run all checks."""
    print("=" * 60)
    print("COMPATIBILITY SCORING CHECKS")
    print("=" * 60)

    scorer = CompatibilityScorer()
    results = [
        ("Reference Scenario", check_reference_scenario(scorer)),
        ("Score Ranges", check_score_ranges(scorer)),
        ("Symmetry", check_symmetry(scorer)),
        ("Similar vs Different", check_similar_vs_different(scorer)),
        ("Perturbation Stability", check_perturbation_stability(scorer)),
    ]

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, passed in results:
        print(f"  {name}: {'PASSED' if passed else 'FAILED'}")

    if all(passed for _, passed in results):
        print("\nALL CHECKS PASSED")
        return 0
    print("\nSOME CHECKS FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
