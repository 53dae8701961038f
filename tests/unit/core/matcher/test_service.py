#!/usr/bin/env python3
"""
Tests for MatchFinder: threshold filtering, ordering, pagination and
self-exclusion.
"""

import math
import unittest
import uuid
from unittest.mock import Mock

import pytest

from core.exceptions import PreferenceNotFoundException, InvalidPaginationException
from core.matcher import MatchFinder, paginate, rank_matches
from core.scorer import MatchResult
from tests.mocks.matching_mocks import (
    make_preference,
    make_profile,
    InMemoryPreferenceRepository,
    InMemoryProfileRepository,
)


def build_pool(count=25):
    """Profiles of ages 20..20+count-1, half of them engineers."""
    return [
        make_profile(
            age=20 + i,
            occupation='Engineer' if i % 2 == 0 else 'Doctor',
            highest_qualification='B.Tech',
        )
        for i in range(count)
    ]


class TestMatchFinder(unittest.TestCase):

    def setUp(self):
        self.preference = make_preference(
            user_id='seeker',
            preferred_age_range={'min': 25, 'max': 40},
            preferred_occupation=['Engineer'],
            preferred_education=['B.Tech'],
            match_threshold=50,
        )
        self.own_profile = make_profile(user_id='seeker', age=30, occupation='Engineer',
                                        highest_qualification='B.Tech')
        self.pool = build_pool() + [self.own_profile]
        self.finder = MatchFinder(
            InMemoryPreferenceRepository([self.preference]),
            InMemoryProfileRepository(self.pool),
        )

    def _all_matches(self, finder=None, user_id='seeker', page_size=7):
        finder = finder or self.finder
        first = finder.find_matches(user_id, page=1, page_size=page_size)
        results = list(first.matches)
        for page in range(2, first.total_pages + 1):
            results.extend(finder.find_matches(user_id, page=page, page_size=page_size).matches)
        return first, results

    def test_missing_preference_raises(self):
        with self.assertRaises(PreferenceNotFoundException):
            self.finder.find_matches('nobody')

    def test_never_returns_own_profile(self):
        _, results = self._all_matches()
        self.assertTrue(results)
        self.assertTrue(all(r.profile.user_id != 'seeker' for r in results))

    def test_own_profile_excluded_even_if_repository_returns_it(self):
        profile_repo = Mock()
        profile_repo.list_candidates.return_value = [self.own_profile]
        finder = MatchFinder(InMemoryPreferenceRepository([self.preference]), profile_repo)
        page = finder.find_matches('seeker')
        self.assertEqual(page.total_matches, 0)

    def test_results_meet_threshold_and_are_sorted(self):
        _, results = self._all_matches()
        scores = [r.match_score for r in results]
        self.assertTrue(all(s >= 50 for s in scores))
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_pagination_reproduces_full_list(self):
        first, paged = self._all_matches(page_size=4)
        _, single = self._all_matches(page_size=100)
        self.assertEqual(first.total_pages, math.ceil(first.total_matches / 4))
        self.assertEqual([r.profile.id for r in paged], [r.profile.id for r in single])
        self.assertEqual(len({r.profile.id for r in paged}), first.total_matches)

    def test_page_past_end_is_empty(self):
        first = self.finder.find_matches('seeker', page=1, page_size=5)
        beyond = self.finder.find_matches('seeker', page=first.total_pages + 1, page_size=5)
        self.assertEqual(beyond.matches, [])
        self.assertEqual(beyond.total_matches, first.total_matches)

    def test_raising_threshold_never_grows_result(self):
        sizes = []
        for threshold in (0, 25, 50, 57, 75, 90, 100):
            self.preference.match_threshold = threshold
            sizes.append(self.finder.find_matches('seeker', page_size=100).total_matches)
        self.assertEqual(sizes, sorted(sizes, reverse=True))

    def test_invalid_pagination(self):
        with self.assertRaises(InvalidPaginationException):
            self.finder.find_matches('seeker', page=0)
        with self.assertRaises(InvalidPaginationException):
            self.finder.find_matches('seeker', page_size=0)

    def test_prefilter_does_not_change_results(self):
        plain = MatchFinder(
            InMemoryPreferenceRepository([self.preference]),
            InMemoryProfileRepository(self.pool),
            prefilter_enabled=False,
        )
        for threshold in (0, 40, 57, 70, 100):
            self.preference.match_threshold = threshold
            _, with_filter = self._all_matches()
            _, without = self._all_matches(finder=plain)
            self.assertEqual(
                [(r.profile.id, r.match_score) for r in with_filter],
                [(r.profile.id, r.match_score) for r in without],
            )


def test_rank_matches_breaks_ties_by_profile_id():
    a = make_profile(id=uuid.UUID(int=2))
    b = make_profile(id=uuid.UUID(int=1))
    c = make_profile(id=uuid.UUID(int=3))
    ranked = rank_matches([
        MatchResult(profile=a, match_score=80),
        MatchResult(profile=c, match_score=90),
        MatchResult(profile=b, match_score=80),
    ])
    assert [r.profile.id.int for r in ranked] == [3, 1, 2]


def test_paginate_empty_result_has_zero_pages():
    page = paginate([], page=1, page_size=20)
    assert page.total_matches == 0
    assert page.total_pages == 0
    assert page.matches == []


def test_paginate_rejects_non_positive_values():
    with pytest.raises(InvalidPaginationException):
        paginate([], page=1, page_size=-1)
