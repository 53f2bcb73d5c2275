"""
Compatibility Scoring Engine

This package implements the deterministic compatibility scoring used by the
dating app's match and discovery flows. Two user profiles (Big Five
personality vector, interest/value labels, lifestyle answers) go in; one
0-100 score with a structured breakdown comes out.

Key Design Decisions:
- Scoring is a pure function: no I/O, no hidden state, no randomness
- Personality is mandatory input; every other field degrades gracefully
- Fixed score-level weights: 50% personality, 25% interests+values, 25% lifestyle
- Ordinal lifestyle answers are explicit enums with ranks, never loose strings
"""

__version__ = "1.0.0"
