#!/usr/bin/env python3
"""
Match Scorer - preference-weighted compatibility score.

Aggregate = round_half_up(sum(score_i * weight_i) / sum(weight_i)) over the
evaluable dimensions only. Dimensions without data on either side add
neither score nor weight, so weights are re-normalised per candidate.
With nothing evaluable (or zero total weight) the score is 0.

The scorer is a pure function with no shared state; it is safe to call
concurrently for any number of (preference, profile) pairs.
"""

import logging
import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, List, Union

from core.scorer.models import ScoreResult, DimensionScore, DIMENSIONS
from core.scorer import dimensions

logger = logging.getLogger(__name__)


def exact(value: Union[int, float, Decimal, Fraction]) -> Fraction:
    """Exact rational value of a weight; floats are read by their shortest repr (0.7 -> 7/10)."""
    if isinstance(value, float):
        return Fraction(repr(value))
    return Fraction(value)


def round_half_up(value: Union[int, float, Decimal, Fraction]) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    value = exact(value)
    half = Fraction(1, 2)
    if value >= 0:
        return math.floor(value + half)
    return -math.floor(-value + half)


def aggregate_score(dimension_scores: List[DimensionScore]) -> int:
    """Weighted average of evaluable dimensions, bounded to [0, 100]."""
    total_score = Fraction(0)
    total_weight = Fraction(0)
    for d in dimension_scores:
        if not d.evaluable:
            continue
        weight = exact(d.weight)
        total_score += d.score * weight
        total_weight += weight

    if total_weight <= 0:
        return 0

    return max(0, min(100, round_half_up(total_score / total_weight)))


class MatchScorer:
    """Score a candidate profile against a user's weighted preferences."""

    def evaluate(self, preference: Any, profile: Any) -> List[DimensionScore]:
        weights = dimensions.resolve_weights(preference)
        return [
            dimensions.EVALUATORS[name](preference, profile, weights[name])
            for name in DIMENSIONS
        ]

    def score(self, preference: Any, profile: Any) -> ScoreResult:
        """
        Compute the compatibility score and the reasons behind it.

        Args:
            preference: Preference record (ORM row, pydantic model or dict)
            profile: Candidate profile (ORM row, pydantic model or dict)

        Returns:
            ScoreResult with an int score in [0, 100], reasons in fixed
            dimension order, and the per-dimension breakdown
        """
        dimension_scores = self.evaluate(preference, profile)
        by_name = {d.name: d for d in dimension_scores}

        reasons = [
            by_name[name].reason
            for name in dimensions.REASON_ORDER
            if by_name[name].matched and by_name[name].reason
        ]

        return ScoreResult(
            score=aggregate_score(dimension_scores),
            reasons=reasons,
            dimensions=dimension_scores
        )
