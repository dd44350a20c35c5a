# ABOUTME: Heuristic ranking of recommendation candidates.
# ABOUTME: Blends a catalog score, a genre-preference score, and a Reddit-mention score.

import math

from readdit.catalog.types import Candidate, CommunityPost
from readdit.prefs import Preferences
from readdit.recommend.types import ScoredCandidate
from readdit.text.labels import genre_subject_hints

# Catalog score is 1 plus up to this bonus, reached at _OL_TITLE_SCALE characters.
_OL_MAX_BONUS = 0.5
_OL_TITLE_SCALE = 200

# Shorter candidate titles match too many unrelated posts.
_MIN_MENTION_TITLE_LENGTH = 4


def ol_score(candidate: Candidate) -> float:
    """Bounded proxy for catalog richness, in [1.0, 1.5]."""
    return 1 + min(_OL_MAX_BONUS, len(candidate.title or "") / _OL_TITLE_SCALE)


def prefs_score(candidate: Candidate, prefs: Preferences | None) -> float:
    """Share of the user's genres the candidate's subjects hit, in [0.0, 1.0]."""
    if prefs is None or not prefs.genres:
        return 0.0
    subjects = set(candidate.subjects)
    hits = sum(
        1 for genre in prefs.genres if any(h in subjects for h in genre_subject_hints(genre))
    )
    return min(1.0, hits / len(prefs.genres))


def reddit_score(candidate_title: str, posts: list[CommunityPost]) -> float:
    """log10(1 + best score) among cached posts that mention the candidate title.

    Zero with no posts, a title under four characters, or no mention.
    """
    if not posts:
        return 0.0
    title = (candidate_title or "").lower()
    if len(title) < _MIN_MENTION_TITLE_LENGTH:
        return 0.0

    best = 0.0
    for post in posts:
        if title in post.title.lower():
            best = max(best, post.score)
    return math.log10(best + 1) if best > 0 else 0.0


def score_candidate(
    candidate: Candidate, prefs: Preferences | None, posts: list[CommunityPost]
) -> ScoredCandidate:
    return ScoredCandidate(
        candidate=candidate,
        ol=ol_score(candidate),
        pref=prefs_score(candidate, prefs),
        reddit=reddit_score(candidate.title, posts),
    )


def score_candidates(
    candidates: list[Candidate],
    prefs: Preferences | None,
    posts: list[CommunityPost],
) -> list[ScoredCandidate]:
    """Score every candidate and rank them by final score, highest first.

    The sort is stable: equal scores keep their input order.
    """
    scored = [score_candidate(candidate, prefs, posts) for candidate in candidates]
    scored.sort(key=lambda s: s.final_score, reverse=True)
    return scored
