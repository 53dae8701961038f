#!/usr/bin/env python3
"""
Match Finder - "explore" candidates for a user.

Loads the user's preference and the candidate pool, scores every candidate,
keeps those meeting the user's threshold, sorts and paginates.

This is a full scan over the candidate pool on every call; the optional
pre-filter only narrows the pool storage-side without changing results.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from core.exceptions import PreferenceNotFoundException, InvalidPaginationException
from core.matcher.prefilter import build_candidate_filter
from core.scorer import MatchScorer, MatchResult

logger = logging.getLogger(__name__)


@dataclass
class MatchPage:
    """One page of ranked matches plus totals over the unpaginated set."""
    matches: List[MatchResult] = field(default_factory=list)
    total_matches: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 20


def _candidate_key(profile: Any) -> str:
    return str(getattr(profile, 'id', '') or '')


def rank_matches(results: List[MatchResult]) -> List[MatchResult]:
    """Score descending, then candidate id ascending for a stable order."""
    return sorted(results, key=lambda r: (-r.match_score, _candidate_key(r.profile)))


def paginate(results: List[MatchResult], page: int, page_size: int) -> MatchPage:
    if page < 1 or page_size < 1:
        raise InvalidPaginationException(
            f"page and page_size must be positive integers (got page={page}, page_size={page_size})"
        )

    total = len(results)
    skip = (page - 1) * page_size
    return MatchPage(
        matches=results[skip:skip + page_size],
        total_matches=total,
        total_pages=math.ceil(total / page_size),
        page=page,
        page_size=page_size
    )


class MatchFinder:
    """
    Find candidates compatible with a user's saved preference.

    Depends on a preference repository (get_by_user_id) and a profile
    repository (list_candidates); both are read once per call.
    """

    def __init__(
        self,
        preference_repo,
        profile_repo,
        scorer: Optional[MatchScorer] = None,
        prefilter_enabled: bool = True
    ):
        self.preference_repo = preference_repo
        self.profile_repo = profile_repo
        self.scorer = scorer or MatchScorer()
        self.prefilter_enabled = prefilter_enabled

    def score_candidates(self, preference: Any, candidates: List[Any]) -> List[MatchResult]:
        """Score every candidate and keep those meeting the preference's threshold."""
        threshold = preference.match_threshold
        results = []
        for profile in candidates:
            scored = self.scorer.score(preference, profile)
            if scored.score >= threshold:
                results.append(MatchResult(
                    profile=profile,
                    match_score=scored.score,
                    match_reasons=scored.reasons
                ))
        return results

    def find_matches(self, user_id: str, page: int = 1, page_size: int = 20) -> MatchPage:
        """
        Rank the candidate pool for a user and return one page.

        Args:
            user_id: Requesting user
            page: 1-based page number
            page_size: Matches per page

        Returns:
            MatchPage with the page's matches, total_matches and total_pages

        Raises:
            PreferenceNotFoundException: If the user has no saved preference
            InvalidPaginationException: If page or page_size is below 1
        """
        if page < 1 or page_size < 1:
            raise InvalidPaginationException(
                f"page and page_size must be positive integers (got page={page}, page_size={page_size})"
            )

        preference = self.preference_repo.get_by_user_id(user_id)
        if preference is None:
            raise PreferenceNotFoundException(
                f"No preferences found for user {user_id}. Please set your preferences first."
            )

        candidate_filter = build_candidate_filter(preference) if self.prefilter_enabled else None
        if candidate_filter is not None and candidate_filter.is_empty:
            candidate_filter = None

        candidates = self.profile_repo.list_candidates(
            exclude_user_id=user_id,
            candidate_filter=candidate_filter
        )

        # Self-exclusion is also enforced here, independent of the repository
        candidates = [c for c in candidates if str(getattr(c, 'user_id', '')) != str(user_id)]

        ranked = rank_matches(self.score_candidates(preference, candidates))

        logger.info(
            f"Found {len(ranked)} matches for user {user_id} "
            f"out of {len(candidates)} candidates (threshold {preference.match_threshold})"
        )

        return paginate(ranked, page, page_size)
