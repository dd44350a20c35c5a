# ABOUTME: The recommendation engine: fan-out retrieval, dedup, scoring, language filter, reasons.
# ABOUTME: Owns the session caches and exposes the operations the CLI and detail views consume.

import asyncio
import logging
from typing import Any

from readdit.catalog.community import RedditCommunitySource
from readdit.catalog.openlibrary import OpenLibrarySource, author_id
from readdit.catalog.openlibrary_parser import build_cover_url, pick_cover_id
from readdit.catalog.types import UNKNOWN_AUTHOR, Candidate, CommunityPost, LanguageSet, WorkMeta
from readdit.prefs import Preferences
from readdit.recommend.cache import EngineCache, community_cache_key
from readdit.recommend.dedup import dedupe_by_key, dedupe_titles, exclude_base, normalize_title
from readdit.recommend.language import filter_by_language
from readdit.recommend.scoring import score_candidates
from readdit.recommend.types import BaseWork, Recommendation, ScoredCandidate
from readdit.result import Empty, Ok, Result
from readdit.text.facts import FunFact, build_fun_facts
from readdit.text.generator import (
    ReasonSignals,
    generate_recommendation_reason,
    overview_from_work,
    safe_author_name,
)
from readdit.text.labels import shared_labels

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 3
# Language-checked shortlist; larger than the final count so title dedup has slack.
_SHORTLIST_SIZE = 6
_SOURCE_LIMIT = 20
_SUBJECT_SOURCES = 2
# A preference score above this is worth mentioning in the reason text.
_PREFS_BOOST_THRESHOLD = 0.2

NO_RECOMMENDATIONS = "No recommendations available today."
NO_MATCHES = "No matching recommendations found."


def is_same_author(base: BaseWork, candidate: Candidate) -> bool:
    """Same author by key when both have one, otherwise by known, matching names."""
    if base.author_key and candidate.author_key:
        return author_id(base.author_key) == author_id(candidate.author_key)
    base_author = safe_author_name(base.author_name)
    author = safe_author_name(candidate.author_name)
    return bool(base_author and author and normalize_title(base_author) == normalize_title(author))


class RecommendationEngine:
    """Related-work recommendations for a base work, plus detail-view helpers.

    One engine lives for a whole session and owns the three caches; every
    network-bound operation goes through them. All public operations resolve
    to a value or a Result and never raise for provider failures.
    """

    def __init__(
        self,
        source: OpenLibrarySource,
        community: RedditCommunitySource,
        cache: EngineCache | None = None,
    ) -> None:
        self._source = source
        self._community = community
        self.cache = cache or EngineCache()

    async def search(self, query: str, limit: int = 10) -> Result[list[Candidate]]:
        return await self._source.search_works(query, limit=limit)

    async def work_details(self, work_key: str | None) -> Result[dict[str, Any]]:
        """Full works record, fetched once per key. Failures are retried next time."""
        if not work_key:
            return Empty("no work key")
        return await self.cache.load(
            self.cache.work_details, work_key, lambda: self._source.work_details(work_key)
        )

    async def edition_languages(self, work_key: str | None) -> LanguageSet:
        """Languages across a work's editions, probed once per key.

        A failed probe is cached as the empty set, which the language filter
        treats as unknown.
        """
        if not work_key:
            return frozenset()

        async def probe() -> Result[LanguageSet]:
            result = await self._source.edition_languages(work_key)
            return Ok(result.unwrap_or(frozenset()))

        result = await self.cache.load(self.cache.edition_languages, work_key, probe)
        return result.unwrap_or(frozenset())

    async def load_voices(self, title: str) -> list[CommunityPost]:
        """Community posts mentioning ``title``, searched once per title.

        When no community could be reached nothing is cached.
        """
        if not title.strip():
            return []
        result = await self.cache.load(
            self.cache.community_posts,
            community_cache_key(title),
            lambda: self._community.posts_across_communities(title),
        )
        return result.unwrap_or([])

    def cached_voices(self, title: str) -> list[CommunityPost]:
        """Posts already cached for ``title``; never touches the network."""
        return self.cache.community_posts.get(community_cache_key(title), [])

    async def overview(self, meta: WorkMeta) -> str:
        details = await self.work_details(meta.work_key)
        return overview_from_work(meta, details.unwrap_or(None))

    async def cover_url(self, meta: WorkMeta) -> str | None:
        """Cover image URL; the works record's first cover beats the search hit's."""
        details = await self.work_details(meta.work_key)
        cover_id = pick_cover_id(details.unwrap_or(None)) or meta.cover_id
        return build_cover_url(cover_id) if cover_id else None

    async def fun_facts(self, meta: WorkMeta) -> list[FunFact]:
        details = await self.work_details(meta.work_key)
        languages = await self.edition_languages(meta.work_key)
        return build_fun_facts(
            meta, details.unwrap_or(None), languages, self.cached_voices(meta.title)
        )

    async def recommend(
        self,
        base: BaseWork,
        prefs: Preferences | None = None,
        want_count: int = RECOMMENDATION_COUNT,
    ) -> Result[list[Recommendation]]:
        """Up to ``want_count`` related works for ``base``, each with a reason.

        Returns Empty with a user-facing message when every source failed or
        nothing survived deduplication and filtering.
        """
        candidates = await self._gather_candidates(base)
        if candidates is None:
            return Empty(NO_RECOMMENDATIONS)

        candidates = exclude_base(dedupe_by_key(candidates), base.title, base.work_key)
        ranked = score_candidates(candidates, prefs, self.cached_voices(base.title))
        logger.debug("Ranked %d candidates for %r", len(ranked), base.title)

        shortlist = await filter_by_language(
            ranked, self.edition_languages, max(_SHORTLIST_SIZE, want_count)
        )
        picked = dedupe_titles(shortlist, want_count)
        if not picked:
            return Empty(NO_MATCHES)

        return Ok([self._to_recommendation(base, scored) for scored in picked])

    async def _gather_candidates(self, base: BaseWork) -> list[Candidate] | None:
        """Author works and the top two subjects' works, fetched concurrently.

        Returns None only when every source failed; otherwise whatever the
        successful ones produced, author works first.
        """
        subjects = list(base.subjects[:_SUBJECT_SOURCES])
        subjects += [None] * (_SUBJECT_SOURCES - len(subjects))
        results = await asyncio.gather(
            self._source.works_by_author(base.author_key, _SOURCE_LIMIT),
            *(self._source.works_by_subject(s, _SOURCE_LIMIT) for s in subjects),
        )
        if all(result.is_empty for result in results):
            logger.warning("All recommendation sources failed for %r", base.title)
            return None
        return [c for result in results for c in result.unwrap_or([])]

    def _to_recommendation(self, base: BaseWork, scored: ScoredCandidate) -> Recommendation:
        candidate = scored.candidate
        same_author = is_same_author(base, candidate)
        base_author = safe_author_name(base.author_name)
        # Author-works entries carry only the author key, not the name.
        display_author = (
            safe_author_name(candidate.author_name)
            or (base_author if same_author else "")
            or UNKNOWN_AUTHOR
        )

        signals = ReasonSignals(
            same_author=same_author,
            shared_labels=shared_labels(base.subjects, candidate.subjects),
            prefs_boost=scored.pref > _PREFS_BOOST_THRESHOLD,
            community_boost=scored.reddit > 0,
        )
        reason = generate_recommendation_reason(
            base.title, candidate.title, display_author, signals
        )
        return Recommendation(
            title=candidate.title,
            author_name=display_author,
            reason_text=reason,
            key=candidate.key,
            subjects=list(candidate.subjects),
            cover_id=candidate.cover_id,
            first_publish_year=candidate.first_publish_year,
            edition_count=candidate.edition_count,
            author_key=candidate.author_key or base.author_key,
        )
