# ABOUTME: Wiring shared by the CLI commands: one engine per invocation over one HTTP client.
# ABOUTME: Also resolves a free-text title to the catalog work the commands operate on.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from readdit.catalog.community import RedditCommunitySource
from readdit.catalog.http import ReadditHttpClient
from readdit.catalog.openlibrary import OpenLibrarySource
from readdit.catalog.types import Candidate
from readdit.recommend.engine import RecommendationEngine


@asynccontextmanager
async def engine_session() -> AsyncIterator[RecommendationEngine]:
    """Yield an engine whose HTTP client is closed when the command finishes."""
    async with ReadditHttpClient() as http:
        yield RecommendationEngine(
            source=OpenLibrarySource(http_client=http),
            community=RedditCommunitySource(http_client=http),
        )


async def resolve_work(engine: RecommendationEngine, title: str) -> Candidate | None:
    """The first catalog hit for ``title``, or None when the search found nothing."""
    result = await engine.search(title, limit=1)
    hits = result.unwrap_or([])
    return hits[0] if hits else None
