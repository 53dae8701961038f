#!/usr/bin/env python3
"""
Dimension evaluators - one binary membership test per scoring dimension.

Each evaluator returns a DimensionScore. A dimension is evaluable only when
the preference constrains it AND the profile carries a value for it; an
evaluable dimension scores 100 on a match and 0 otherwise.

Inputs may be ORM rows, pydantic models, namespaces or plain dicts. Dict
inputs may use either the Python attribute names or the camelCase wire
names (HighestQualification, currentAddress, ...). Malformed values are
treated as missing, so evaluators never raise.
"""

import math
from decimal import Decimal
from typing import Any, Optional, Tuple, FrozenSet, Dict

from core.scorer.models import DimensionScore, DEFAULT_CRITERIA_WEIGHTS

REASON_AGE = 'Age matches your preference'
REASON_EDUCATION = 'Education matches your preference'
REASON_LOCATION = 'Location matches your preference'
REASON_OCCUPATION = 'Occupation matches your preference'
REASON_CULTURAL = 'Cultural background matches your preference'


def get_field(obj: Any, *names: str) -> Any:
    """Return the first non-None attribute/key among `names`."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def as_number(value: Any) -> Optional[float]:
    """Coerce to a finite float; bools, NaN and non-numeric strings give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def as_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value != '':
        return value
    return None


def as_choices(values: Any) -> FrozenSet[str]:
    """Acceptable values of a list constraint; non-string and empty entries are ignored."""
    if isinstance(values, str) or not isinstance(values, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(v for v in values if isinstance(v, str) and v != '')


def age_bounds(preference: Any) -> Optional[Tuple[Optional[float], Optional[float]]]:
    """
    (min, max) of the preferred age range, either bound may be open.

    Returns None when the preference does not constrain age.
    """
    age_range = get_field(preference, 'preferred_age_range', 'preferredAgeRange')
    if age_range is None:
        return None

    age_min = as_number(get_field(age_range, 'min'))
    age_max = as_number(get_field(age_range, 'max'))
    if age_min is None and age_max is None:
        return None
    return age_min, age_max


def resolve_weights(preference: Any) -> Dict[str, float]:
    """
    Criteria weights with defaults for missing keys.

    Negative or non-numeric weights count as 0.
    """
    raw = get_field(preference, 'criteria_weights', 'criteriaWeights')
    weights = {}
    for name, default in DEFAULT_CRITERIA_WEIGHTS.items():
        value = get_field(raw, name) if raw is not None else None
        if value is None:
            weights[name] = float(default)
            continue
        number = as_number(value)
        weights[name] = number if number is not None and number > 0 else 0.0
    return weights


def _membership(name: str, choices: FrozenSet[str], value: Optional[str], weight: float,
                reason: Optional[str]) -> DimensionScore:
    if not choices or value is None:
        return DimensionScore(name=name, evaluable=False, weight=weight)
    if value in choices:
        return DimensionScore(name=name, evaluable=True, score=100, weight=weight, reason=reason)
    return DimensionScore(name=name, evaluable=True, score=0, weight=weight)


def evaluate_age(preference: Any, profile: Any, weight: float) -> DimensionScore:
    bounds = age_bounds(preference)
    age = as_number(get_field(profile, 'age'))
    if bounds is None or age is None:
        return DimensionScore(name='age', evaluable=False, weight=weight)

    age_min, age_max = bounds
    in_range = (age_min is None or age >= age_min) and (age_max is None or age <= age_max)
    if in_range:
        return DimensionScore(name='age', evaluable=True, score=100, weight=weight, reason=REASON_AGE)
    return DimensionScore(name='age', evaluable=True, score=0, weight=weight)


def evaluate_education(preference: Any, profile: Any, weight: float) -> DimensionScore:
    return _membership(
        'education',
        as_choices(get_field(preference, 'preferred_education', 'preferredEducation')),
        as_text(get_field(profile, 'highest_qualification', 'HighestQualification')),
        weight,
        REASON_EDUCATION
    )


def evaluate_occupation(preference: Any, profile: Any, weight: float) -> DimensionScore:
    return _membership(
        'occupation',
        as_choices(get_field(preference, 'preferred_occupation', 'preferredOccupation')),
        as_text(get_field(profile, 'occupation')),
        weight,
        REASON_OCCUPATION
    )


def evaluate_location(preference: Any, profile: Any, weight: float) -> DimensionScore:
    address = get_field(profile, 'current_address', 'currentAddress')
    return _membership(
        'location',
        as_choices(get_field(preference, 'preferred_cities', 'preferredCities')),
        as_text(get_field(address, 'city')),
        weight,
        REASON_LOCATION
    )


def evaluate_cultural(preference: Any, profile: Any, weight: float) -> DimensionScore:
    return _membership(
        'cultural',
        as_choices(get_field(preference, 'preferred_caste', 'preferredCaste')),
        as_text(get_field(profile, 'sub_caste', 'subCaste')),
        weight,
        REASON_CULTURAL
    )


def evaluate_lifestyle(preference: Any, profile: Any, weight: float) -> DimensionScore:
    # Lifestyle matches carry no reason string.
    return _membership(
        'lifestyle',
        as_choices(get_field(preference, 'preferred_marital_status', 'preferredMaritalStatus')),
        as_text(get_field(profile, 'marital_status', 'maritalStatus')),
        weight,
        None
    )


EVALUATORS = {
    'age': evaluate_age,
    'education': evaluate_education,
    'occupation': evaluate_occupation,
    'location': evaluate_location,
    'cultural': evaluate_cultural,
    'lifestyle': evaluate_lifestyle,
}

# Order in which reasons are reported, independent of weights
REASON_ORDER = ('age', 'education', 'location', 'occupation', 'cultural')
