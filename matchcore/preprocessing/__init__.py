"""Preprocessing module for raw onboarding answers."""

from .answer_normalizer import AnswerNormalizer, split_labels

__all__ = ["AnswerNormalizer", "split_labels"]
