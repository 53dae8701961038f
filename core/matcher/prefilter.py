#!/usr/bin/env python3
"""
Candidate pre-filter - cheap storage-side narrowing before full scoring.

A dimension is "hard" for a preference when failing it alone already makes
the threshold unreachable. With W the total weight of the dimensions the
preference constrains, the best score a candidate can reach while failing
dimension d is (W - w_d) / W * 100 (every other dimension evaluable and
matching). If that still rounds below the threshold, any candidate that is
evaluable on d and fails it can be dropped before scoring.

Candidates missing the attribute are always kept (the dimension is then not
evaluable for them), so the pre-filter never changes the final result set.
Location is not pushed down because the city lives inside a JSON document.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from core.scorer import round_half_up, exact
from core.scorer import dimensions

logger = logging.getLogger(__name__)

# Dimension -> profile attribute for membership dimensions that can be pushed down
PUSHDOWN_ATTRIBUTES = {
    'education': ('highest_qualification', ('preferred_education', 'preferredEducation')),
    'occupation': ('occupation', ('preferred_occupation', 'preferredOccupation')),
    'cultural': ('sub_caste', ('preferred_caste', 'preferredCaste')),
    'lifestyle': ('marital_status', ('preferred_marital_status', 'preferredMaritalStatus')),
}


@dataclass
class CandidateFilter:
    """Storage-side constraints derived from a preference."""
    age_range: Optional[Tuple[Optional[float], Optional[float]]] = None
    memberships: Dict[str, FrozenSet[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.age_range is None and not self.memberships


def _constrained_dimensions(preference: Any) -> Dict[str, Any]:
    """Constraint per dimension the preference actually restricts."""
    constrained = {}

    bounds = dimensions.age_bounds(preference)
    if bounds is not None:
        constrained['age'] = bounds

    for name, (_, pref_fields) in PUSHDOWN_ATTRIBUTES.items():
        choices = dimensions.as_choices(dimensions.get_field(preference, *pref_fields))
        if choices:
            constrained[name] = choices

    cities = dimensions.as_choices(dimensions.get_field(preference, 'preferred_cities', 'preferredCities'))
    if cities:
        constrained['location'] = cities

    return constrained


def build_candidate_filter(preference: Any) -> CandidateFilter:
    """
    Derive the output-preserving CandidateFilter for a preference.

    Returns an empty filter when nothing can be safely pushed down.
    """
    threshold = dimensions.as_number(dimensions.get_field(preference, 'match_threshold', 'matchThreshold'))
    if threshold is None or threshold <= 0:
        return CandidateFilter()

    weights = {name: exact(value) for name, value in dimensions.resolve_weights(preference).items()}
    constrained = _constrained_dimensions(preference)
    total_weight = sum(weights[name] for name in constrained)
    if total_weight <= 0:
        return CandidateFilter()

    candidate_filter = CandidateFilter()
    for name, constraint in constrained.items():
        weight = weights[name]
        if weight <= 0 or name == 'location':
            continue

        best_without = round_half_up((total_weight - weight) / total_weight * 100)
        if best_without >= threshold:
            continue

        if name == 'age':
            candidate_filter.age_range = constraint
        else:
            attribute = PUSHDOWN_ATTRIBUTES[name][0]
            candidate_filter.memberships[attribute] = constraint

    if not candidate_filter.is_empty:
        logger.debug(
            f"Pre-filter hard constraints: age={candidate_filter.age_range is not None}, "
            f"attributes={sorted(candidate_filter.memberships)}"
        )
    return candidate_filter
