# ABOUTME: Process-lifetime read-through caches owned by the recommendation engine.
# ABOUTME: Holds work details, edition languages, and community posts; no eviction or expiry.

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from readdit.catalog.types import CommunityPost, LanguageSet
from readdit.result import Ok, Result

logger = logging.getLogger(__name__)

V = TypeVar("V")


def community_cache_key(title: str) -> str:
    """Cache key for community posts about a base work title."""
    return title.strip().lower()


@dataclass
class EngineCache:
    """The engine's three independent caches.

    Created empty when the engine is built and kept for the whole session.
    Only the engine writes to them, through ``load``.
    """

    work_details: dict[str, dict[str, Any]] = field(default_factory=dict)
    edition_languages: dict[str, LanguageSet] = field(default_factory=dict)
    community_posts: dict[str, list[CommunityPost]] = field(default_factory=dict)

    async def load(
        self,
        store: dict[str, V],
        key: str,
        loader: Callable[[], Awaitable[Result[V]]],
    ) -> Result[V]:
        """Serve ``store[key]`` or run ``loader`` and keep what it found.

        A hit never calls the loader. Only Ok values are stored; an Empty
        result is handed back uncached so a later call tries again.
        """
        if key in store:
            logger.debug("Cache hit for %s", key)
            return Ok(store[key])

        result = await loader()
        if isinstance(result, Ok):
            store[key] = result.value
        return result
