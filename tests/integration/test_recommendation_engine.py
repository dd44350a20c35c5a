# ABOUTME: Integration tests for the full recommendation flow against canned provider data.
# ABOUTME: Exercises fan-out, dedup, scoring, the language filter, reasons, and caching together.

import asyncio
from typing import Any

import pytest

from readdit.catalog.http import CatalogFetchError
from readdit.prefs import Preferences
from readdit.recommend.engine import NO_MATCHES, NO_RECOMMENDATIONS
from readdit.recommend.types import BaseWork
from tests.fixtures.fakes import FakeHttpClient, make_engine
from tests.fixtures.openlibrary_responses import (
    AUTHOR_WORKS_RESPONSE,
    EDITIONS_FRENCH_ONLY,
    EDITIONS_GERMAN,
    SEARCH_RESPONSE,
    SUBJECT_RESPONSE,
    SUBJECT_RESPONSE_SPACE,
)
from tests.fixtures.reddit_responses import (
    BOOKS_LISTING,
    BOOKSUGGESTIONS_LISTING,
    BUECHER_LISTING,
)


def _dune_responses() -> dict:
    return {
        "openlibrary.org/search.json": SEARCH_RESPONSE,
        "/authors/OL79034A/works.json": AUTHOR_WORKS_RESPONSE,
        "/subjects/science_fiction.json": SUBJECT_RESPONSE,
        "/subjects/space_colonies.json": SUBJECT_RESPONSE_SPACE,
        "/r/books/search": BOOKS_LISTING,
        "/r/booksuggestions/search": BOOKSUGGESTIONS_LISTING,
        "/r/buecher/search": BUECHER_LISTING,
    }


def _fantasy_shelf(count: int) -> dict:
    """A subject listing whose titles get shorter, so rank follows list order."""
    return {
        "works": [
            {
                "key": f"/works/OLF{i}W",
                "title": f"{'Long ' * (count - i)}Tale {i}",
                "authors": [{"key": f"/authors/OLA{i}A", "name": f"Author {i}"}],
                "subject": ["fantasy"],
            }
            for i in range(count)
        ]
    }


class InFlightClient(FakeHttpClient):
    """FakeHttpClient that holds each request open briefly and tracks the peak overlap."""

    def __init__(self, responses: dict[str, Any]) -> None:
        super().__init__(responses)
        self.in_flight = 0
        self.peak = 0

    async def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            return await super().get(url, params)
        finally:
            self.in_flight -= 1


async def _dune_base(engine) -> BaseWork:
    result = await engine.search("Dune")
    return BaseWork.from_candidate(result.value[0])


class TestRecommendFlow:
    """End-to-end recommend() behaviour."""

    @pytest.mark.asyncio
    async def test_dune_recommendations(self) -> None:
        client = FakeHttpClient(_dune_responses())
        engine = make_engine(client)
        base = await _dune_base(engine)

        result = await engine.recommend(base)

        recs = result.value
        assert [r.title for r in recs] == [
            "The Moon Is a Harsh Mistress",
            "The Left Hand of Darkness",
            "Children of Dune",
        ]
        assert all(r.key != base.work_key for r in recs)
        assert recs[0].author_name == "Robert A. Heinlein"

    @pytest.mark.asyncio
    async def test_same_author_work_gets_base_author_and_reason(self) -> None:
        client = FakeHttpClient(_dune_responses())
        engine = make_engine(client)
        base = await _dune_base(engine)

        recs = (await engine.recommend(base)).value
        children = next(r for r in recs if r.title == "Children of Dune")

        assert children.author_name == "Frank Herbert"
        assert children.author_key == "/authors/OL79034A"
        assert children.reason_text.startswith("Same author's hand (Frank Herbert)")
        assert len(children.reason_text) <= 220

    @pytest.mark.asyncio
    async def test_sources_fetched_once_each(self) -> None:
        client = FakeHttpClient(_dune_responses())
        engine = make_engine(client)
        await engine.recommend(await _dune_base(engine))

        assert client.count("/authors/OL79034A/works.json") == 1
        assert client.count("/subjects/science_fiction.json") == 1
        assert client.count("/subjects/space_colonies.json") == 1
        assert client.count("/subjects/dune") == 0

    @pytest.mark.asyncio
    async def test_author_and_subject_lookups_overlap(self) -> None:
        client = InFlightClient(_dune_responses())
        engine = make_engine(client)
        base = BaseWork(
            title="Dune", author_key="OL79034A", subjects=["science fiction", "space colonies"]
        )

        await engine.recommend(base)

        # Language probes run one at a time, so only the fan-out can overlap.
        assert client.peak == 3

    @pytest.mark.asyncio
    async def test_cached_voices_lift_mentioned_candidate(self) -> None:
        client = FakeHttpClient(_dune_responses())
        engine = make_engine(client)
        base = await _dune_base(engine)

        voices = await engine.load_voices(base.title)
        recs = (await engine.recommend(base)).value

        assert [p.id for p in voices] == ["a2", "a1", "c1", "b1"]
        assert recs[0].title == "Dune Messiah"

    @pytest.mark.asyncio
    async def test_all_sources_failing(self) -> None:
        client = FakeHttpClient({"openlibrary.org": CatalogFetchError("HTTP 503")})
        engine = make_engine(client)
        base = BaseWork(
            title="Dune", author_key="OL79034A", subjects=["science fiction", "space colonies"]
        )

        result = await engine.recommend(base)

        assert result.is_empty
        assert result.reason == NO_RECOMMENDATIONS

    @pytest.mark.asyncio
    async def test_partial_failure_still_recommends(self) -> None:
        responses = _dune_responses()
        responses["/authors/OL79034A/works.json"] = CatalogFetchError("HTTP 500")
        engine = make_engine(FakeHttpClient(responses))
        base = await _dune_base(engine)

        recs = (await engine.recommend(base)).value

        assert "Children of Dune" not in [r.title for r in recs]
        assert len(recs) == 3

    @pytest.mark.asyncio
    async def test_only_the_base_work_found(self) -> None:
        only_dune = {"entries": [AUTHOR_WORKS_RESPONSE["entries"][0]]}
        engine = make_engine(FakeHttpClient({"/authors/": only_dune}))
        base = BaseWork(title="Dune", author_key="OL79034A", work_key="/works/OL893415W")

        result = await engine.recommend(base)

        assert result.is_empty
        assert result.reason == NO_MATCHES


class TestLanguageFiltering:
    """The language filter inside recommend()."""

    @pytest.mark.asyncio
    async def test_foreign_only_work_is_skipped(self) -> None:
        client = FakeHttpClient(
            {
                "/subjects/fantasy.json": _fantasy_shelf(8),
                "/works/OLF0W/editions.json": EDITIONS_FRENCH_ONLY,
                "/works/OLF1W/editions.json": EDITIONS_GERMAN,
            }
        )
        engine = make_engine(client)
        base = BaseWork(title="Seed", subjects=["fantasy"], work_key="/works/OLBASE")

        recs = (await engine.recommend(base)).value

        assert [r.key for r in recs] == ["/works/OLF1W", "/works/OLF2W", "/works/OLF3W"]
        # Probing stops once six candidates passed.
        assert client.count("/editions.json") == 7
        assert client.count("/works/OLF7W/editions.json") == 0

    @pytest.mark.asyncio
    async def test_language_probes_are_cached(self) -> None:
        client = FakeHttpClient({"/subjects/fantasy.json": _fantasy_shelf(8)})
        engine = make_engine(client)
        base = BaseWork(title="Seed", subjects=["fantasy"])

        await engine.recommend(base)
        probes = client.count("/editions.json")
        await engine.recommend(base)

        assert probes == 6
        assert client.count("/editions.json") == probes
        assert client.count("/subjects/fantasy.json") == 2

    @pytest.mark.asyncio
    async def test_falls_back_when_too_few_pass(self) -> None:
        client = FakeHttpClient(
            {
                "/subjects/fantasy.json": _fantasy_shelf(4),
                "/editions.json": EDITIONS_FRENCH_ONLY,
            }
        )
        engine = make_engine(client)
        base = BaseWork(title="Seed", subjects=["fantasy"])

        recs = (await engine.recommend(base)).value

        assert [r.key for r in recs] == ["/works/OLF0W", "/works/OLF1W", "/works/OLF2W"]


class TestPreferencesInFlow:
    """Genre preferences inside recommend()."""

    @pytest.mark.asyncio
    async def test_preferred_genre_ranks_first(self) -> None:
        shelf = _fantasy_shelf(3)
        shelf["works"][2]["subject"] = ["fantasy", "mystery"]
        client = FakeHttpClient({"/subjects/fantasy.json": shelf})
        engine = make_engine(client)
        base = BaseWork(title="Seed", subjects=["fantasy"])

        recs = (await engine.recommend(base, Preferences(genres=("mystery",)))).value

        assert recs[0].key == "/works/OLF2W"
        assert "Matches your genre picks" in recs[0].reason_text
