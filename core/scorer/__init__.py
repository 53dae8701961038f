#!/usr/bin/env python3
"""
Scoring Module - preference-weighted match scoring.

Public API:
- MatchScorer: score(preference, profile) -> ScoreResult
- ScoreResult / DimensionScore: scoring outcome and per-dimension breakdown
- MatchResult / InterestedUser: transient results of the matching services

- models.py: Data structures
- dimensions.py: Per-dimension membership tests and reason strings
- service.py: MatchScorer and the weighted aggregate
"""

from core.scorer.models import (
    ScoreResult,
    DimensionScore,
    MatchResult,
    InterestedUser,
    DIMENSIONS,
    DEFAULT_CRITERIA_WEIGHTS,
)
from core.scorer.service import MatchScorer, round_half_up, exact

__all__ = [
    'MatchScorer',
    'ScoreResult',
    'DimensionScore',
    'MatchResult',
    'InterestedUser',
    'DIMENSIONS',
    'DEFAULT_CRITERIA_WEIGHTS',
    'round_half_up',
    'exact',
]
