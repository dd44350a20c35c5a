# ABOUTME: Recommendation package: caches, dedup, scoring, language filter, and the engine.
# ABOUTME: Exports RecommendationEngine and the request/response records it works with.

from readdit.recommend.cache import EngineCache
from readdit.recommend.engine import RecommendationEngine
from readdit.recommend.types import BaseWork, Recommendation, ScoredCandidate

__all__ = [
    "BaseWork",
    "EngineCache",
    "Recommendation",
    "RecommendationEngine",
    "ScoredCandidate",
]
