"""
Preference store - validated, one-per-user preference records.

- schema.py: PreferenceRecord / PreferenceUpdate validation models
- defaults.py: reset-to-defaults record
- service.py: PreferenceService (upsert, get, reset, delete)
"""

from core.preferences.schema import (
    PreferenceRecord,
    PreferenceUpdate,
    CriteriaWeights,
    AgeRange,
    TextRange,
    NotificationFrequency,
)
from core.preferences.defaults import default_preference_record
from core.preferences.service import PreferenceService, record_from_model, validate_record

__all__ = [
    'PreferenceRecord',
    'PreferenceUpdate',
    'CriteriaWeights',
    'AgeRange',
    'TextRange',
    'NotificationFrequency',
    'default_preference_record',
    'PreferenceService',
    'record_from_model',
    'validate_record',
]
