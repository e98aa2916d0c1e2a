"""
Matching subpackage for the Rides domain.

Public API:
- match_rides
- match_with_fallback
- score_ride
- MatchingPolicy
"""

from .engine import bookable_rides, match_rides
from .fallback import match_with_fallback
from .policy import MatchingPolicy, default_policy, policy_from_env, relaxed_policy, strict_policy
from .scoring import classify, score_ride

__all__ = [
    "bookable_rides",
    "match_rides",
    "match_with_fallback",
    "score_ride",
    "classify",
    "MatchingPolicy",
    "default_policy",
    "strict_policy",
    "relaxed_policy",
    "policy_from_env",
]
