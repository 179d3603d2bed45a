"""Bounded textual similarity between food names and queries.

The score is a ranking heuristic rather than a metric: three fast paths
(exact, prefix and substring matches) short-circuit to fixed scores before
falling back to a normalized Levenshtein distance. Callers must not rely on
triangle inequality or on the fast paths agreeing with the edit distance.
"""

from rapidfuzz.distance import Levenshtein

EXACT_MATCH_SCORE = 1.0
PREFIX_MATCH_SCORE = 0.9
SUBSTRING_MATCH_SCORE = 0.8


def similarity(candidate_name: str, query: str) -> float:
    """Return a similarity in [0, 1] between a candidate name and a query.

    Comparison is case-insensitive and the first matching rule wins:

    1. exact match scores 1.0
    2. either string is a prefix of the other scores 0.9
    3. either string contains the other scores 0.8
    4. otherwise ``1 - distance / max(len(a), len(b))``

    An empty string is a prefix of every string, so ``similarity("", "egg")``
    lands on the prefix rule.
    """
    name = candidate_name.lower()
    term = query.lower()

    if name == term:
        return EXACT_MATCH_SCORE
    if name.startswith(term) or term.startswith(name):
        return PREFIX_MATCH_SCORE
    if term in name or name in term:
        return SUBSTRING_MATCH_SCORE

    max_length = max(len(name), len(term))
    if max_length == 0:
        return 0.0
    distance = Levenshtein.distance(name, term)
    return 1.0 - distance / max_length
