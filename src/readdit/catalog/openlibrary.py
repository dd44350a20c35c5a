# ABOUTME: Open Library source adapter for the recommendation engine and catalog search.
# ABOUTME: Fetches author works, subject works, work details, and edition languages; fails soft.

import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from readdit.catalog.http import CatalogFetchError, HttpClient
from readdit.catalog.openlibrary_parser import (
    parse_author_works,
    parse_edition_languages,
    parse_search_results,
    parse_subject_works,
    work_key_to_id,
)
from readdit.catalog.types import Candidate, LanguageSet
from readdit.result import Empty, Ok, Result

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = 10
_WORKS_LIMIT = 20
_EDITIONS_LIMIT = 20

_WHITESPACE_RE = re.compile(r"\s+")


def subject_slug(subject: str) -> str:
    """Lowercase a subject and join its words with underscores, as OL subject URLs expect."""
    return _WHITESPACE_RE.sub("_", subject.strip().lower())


def author_id(author_key: str) -> str:
    """Accept '/authors/OL23919A' or 'OL23919A' and return the bare id."""
    return author_key.rstrip("/").rsplit("/", 1)[-1]


class OpenLibrarySource:
    """Catalog provider backed by the Open Library API.

    Every lookup returns a Result: Ok with the parsed data, or Empty when the
    request or decoding failed. Missing inputs are not failures and return
    Ok with an empty value. Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    async def works_by_author(
        self, author_key: str | None, limit: int = _WORKS_LIMIT
    ) -> Result[list[Candidate]]:
        """Up to ``limit`` works credited to an author."""
        if not author_key:
            return Ok([])
        url = f"{_OL_BASE}/authors/{quote(author_id(author_key))}/works.json"
        data = await self._get_json(url, {"limit": str(limit)})
        if data is None:
            return Empty(f"author works unavailable for {author_key}")
        return self._parse(parse_author_works, data, url, limit)

    async def works_by_subject(
        self, subject: str | None, limit: int = _WORKS_LIMIT
    ) -> Result[list[Candidate]]:
        """Up to ``limit`` works filed under a subject."""
        if not subject or not subject.strip():
            return Ok([])
        url = f"{_OL_BASE}/subjects/{quote(subject_slug(subject))}.json"
        data = await self._get_json(url, {"limit": str(limit)})
        if data is None:
            return Empty(f"subject works unavailable for {subject}")
        return self._parse(parse_subject_works, data, url, limit)

    async def search_works(
        self, query: str, limit: int = _SEARCH_LIMIT
    ) -> Result[list[Candidate]]:
        """Title search over the whole catalog."""
        query = query.strip()
        if not query:
            return Ok([])
        data = await self._get_json(
            f"{_OL_BASE}/search.json", {"title": query, "limit": str(limit)}
        )
        if data is None:
            return Empty(f"search unavailable for {query}")
        return self._parse(parse_search_results, data, "search", limit)

    async def work_details(self, work_key: str | None) -> Result[dict[str, Any]]:
        """The full works record, e.g. for ``/works/OL45883W``."""
        if not work_key:
            return Empty("no work key")
        data = await self._get_json(f"{_OL_BASE}/works/{quote(work_key_to_id(work_key))}.json")
        if data is None:
            return Empty(f"work details unavailable for {work_key}")
        return Ok(data)

    async def edition_languages(
        self, work_key: str | None, limit: int = _EDITIONS_LIMIT
    ) -> Result[LanguageSet]:
        """Language codes across the first ``limit`` editions of a work."""
        if not work_key:
            return Ok(frozenset())
        url = f"{_OL_BASE}/works/{quote(work_key_to_id(work_key))}/editions.json"
        data = await self._get_json(url, {"limit": str(limit)})
        if data is None:
            return Empty(f"editions unavailable for {work_key}")
        try:
            return Ok(parse_edition_languages(data))
        except (AttributeError, TypeError) as exc:
            logger.warning("Malformed editions payload for %s: %s", work_key, exc)
            return Empty(f"malformed editions for {work_key}")

    @staticmethod
    def _parse(
        parser: Callable[[Any], list[Candidate]], data: dict[str, Any], source: str, limit: int
    ) -> Result[list[Candidate]]:
        """Run a parser over a payload, treating an unexpected shape as a failed lookup."""
        try:
            return Ok(parser(data)[:limit])
        except (AttributeError, TypeError) as exc:
            logger.warning("Malformed Open Library payload from %s: %s", source, exc)
            return Empty(f"malformed payload from {source}")

    async def _get_json(
        self, url: str, params: dict[str, str] | None = None
    ) -> dict[str, Any] | None:
        try:
            return await self._http.get(url, params=params)
        except CatalogFetchError as exc:
            logger.warning("Open Library request failed: %s", exc)
            return None
