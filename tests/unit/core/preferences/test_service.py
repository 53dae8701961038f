#!/usr/bin/env python3
"""
Tests for PreferenceService against mocked repositories.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import Mock

from core.exceptions import (
    PreferenceNotFoundException,
    PreferenceValidationException,
    ProfileRequiredException,
)
from core.preferences import PreferenceService, PreferenceUpdate, PreferenceRecord


def stored_preference(**overrides):
    values = PreferenceRecord().model_dump(mode='json')
    values.update(overrides)
    return SimpleNamespace(user_id='u1', **values)


class TestPreferenceService(unittest.TestCase):

    def setUp(self):
        self.preference_repo = Mock()
        self.preference_repo.upsert.side_effect = lambda user_id, values: SimpleNamespace(user_id=user_id, **values)
        self.profile_repo = Mock()
        self.profile_repo.has_profile.return_value = True
        self.service = PreferenceService(self.preference_repo, self.profile_repo)

    def test_get_missing_raises(self):
        self.preference_repo.get_by_user_id.return_value = None
        with self.assertRaises(PreferenceNotFoundException):
            self.service.get_preferences('u1')

    def test_first_write_starts_from_defaults(self):
        self.preference_repo.get_by_user_id.return_value = None
        update = PreferenceUpdate.model_validate({'preferredCities': ['Pune']})

        saved = self.service.upsert_preferences('u1', update)

        values = self.preference_repo.upsert.call_args[0][1]
        self.assertEqual(values['preferred_cities'], ['Pune'])
        self.assertEqual(values['match_threshold'], 70)
        self.assertEqual(values['criteria_weights']['age'], 20)
        self.assertEqual(saved.preferred_cities, ['Pune'])

    def test_update_merges_onto_existing_record(self):
        self.preference_repo.get_by_user_id.return_value = stored_preference(
            preferred_education=['MBA'], match_threshold=80
        )
        update = PreferenceUpdate.model_validate({'preferredCities': ['Pune']})

        self.service.upsert_preferences('u1', update)

        values = self.preference_repo.upsert.call_args[0][1]
        self.assertEqual(values['preferred_education'], ['MBA'])
        self.assertEqual(values['preferred_cities'], ['Pune'])
        self.assertEqual(values['match_threshold'], 80)

    def test_merged_record_is_validated(self):
        # A stored threshold outside [0, 100] fails even when the update does not touch it
        self.preference_repo.get_by_user_id.return_value = stored_preference(match_threshold=150)
        update = PreferenceUpdate.model_validate({'preferredCities': ['Pune']})

        with self.assertRaises(PreferenceValidationException) as ctx:
            self.service.upsert_preferences('u1', update)
        self.assertTrue(ctx.exception.errors)
        self.preference_repo.upsert.assert_not_called()

    def test_profile_required(self):
        self.profile_repo.has_profile.return_value = False
        with self.assertRaises(ProfileRequiredException):
            self.service.upsert_preferences('u1', PreferenceUpdate())
        with self.assertRaises(ProfileRequiredException):
            self.service.reset_to_defaults('u1')

    def test_profile_check_can_be_disabled(self):
        self.profile_repo.has_profile.return_value = False
        self.preference_repo.get_by_user_id.return_value = None
        service = PreferenceService(self.preference_repo, self.profile_repo, require_profile=False)
        service.upsert_preferences('u1', PreferenceUpdate())
        self.preference_repo.upsert.assert_called_once()

    def test_reset_writes_defaults(self):
        saved = self.service.reset_to_defaults('u1')
        self.assertEqual(saved.preferred_age_range, {'min': 18.0, 'max': 80.0})
        self.assertEqual(saved.preferred_cities, [])
        self.assertEqual(saved.match_threshold, 70)

    def test_delete_missing_raises(self):
        self.preference_repo.delete_by_user_id.return_value = False
        with self.assertRaises(PreferenceNotFoundException):
            self.service.delete_preferences('u1')
