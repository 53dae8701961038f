#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field


DIMENSIONS = ('age', 'education', 'occupation', 'location', 'cultural', 'lifestyle')

DEFAULT_CRITERIA_WEIGHTS: Dict[str, float] = {
    'age': 20,
    'education': 15,
    'occupation': 15,
    'location': 20,
    'cultural': 20,
    'lifestyle': 10,
}


@dataclass
class DimensionScore:
    """Outcome of one scoring dimension for a (preference, profile) pair."""
    name: str
    evaluable: bool
    score: int = 0  # 100 or 0, meaningful only when evaluable
    weight: float = 0.0
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.evaluable and self.score == 100


@dataclass
class ScoreResult:
    """Aggregate compatibility score with the reasons that contributed to it."""
    score: int = 0
    reasons: List[str] = field(default_factory=list)
    dimensions: List[DimensionScore] = field(default_factory=list)


@dataclass
class MatchResult:
    """A scored candidate profile. Recomputed on demand, never persisted."""
    profile: Any
    match_score: int
    match_reasons: List[str] = field(default_factory=list)


@dataclass
class InterestedUser:
    """A preference owner whose threshold is met by a newly created profile."""
    user_id: str
    match_score: int
    match_reasons: List[str] = field(default_factory=list)
