"""Defaults applied by "reset to defaults"."""

from core.preferences.schema import PreferenceRecord, AgeRange


def default_preference_record() -> PreferenceRecord:
    """Schema defaults plus the full supported age range."""
    return PreferenceRecord(preferred_age_range=AgeRange(min=18, max=80))
