"""
Matching Module - candidate ranking and new-profile fanout.

- service.py: MatchFinder (ranked, paginated explore results)
- fanout.py: InterestedUserFanout (owners interested in a new profile)
- prefilter.py: output-preserving storage-side candidate filter
"""

from core.matcher.service import MatchFinder, MatchPage, rank_matches, paginate
from core.matcher.fanout import InterestedUserFanout
from core.matcher.prefilter import CandidateFilter, build_candidate_filter

__all__ = [
    'MatchFinder',
    'MatchPage',
    'rank_matches',
    'paginate',
    'InterestedUserFanout',
    'CandidateFilter',
    'build_candidate_filter',
]
