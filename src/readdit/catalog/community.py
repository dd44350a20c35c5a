# ABOUTME: Reddit community source adapter ("voices") queried through a CORS-free proxy.
# ABOUTME: Merges a fixed set of subreddits, keeps engaged on-topic posts, and ranks them.

import asyncio
import logging
from urllib.parse import urlencode

from readdit.catalog.http import CatalogFetchError, HttpClient
from readdit.catalog.schemas import RedditChild, RedditListing
from readdit.catalog.types import CommunityPost
from readdit.result import Empty, Ok, Result

logger = logging.getLogger(__name__)

REDDIT_PROXY_BASE = "https://reddit-proxy.fbn.workers.dev"
REDDIT_BASE = "https://www.reddit.com"
COMMUNITIES = ("books", "booksuggestions", "buecher")

# A post counts as a signal with this many upvotes OR this many comments.
_MIN_UPS = 20
_MIN_COMMENTS = 5
_MAX_POSTS = 5


def build_search_path(community: str, query: str) -> str:
    """Relative Reddit search path restricted to one subreddit."""
    params = urlencode(
        {"q": query, "restrict_sr": "on", "type": "link", "sort": "relevance"}
    )
    return f"/r/{community}/search.json?{params}"


def parse_post(child: RedditChild) -> CommunityPost | None:
    """Map one listing child onto a CommunityPost; None if it has no post data."""
    data = child.get("data") or {}
    if not data:
        return None
    permalink = data.get("permalink") or ""
    return CommunityPost(
        id=str(data.get("id") or ""),
        title=data.get("title") or "",
        permalink=f"{REDDIT_BASE}{permalink}" if permalink.startswith("/") else permalink,
        ups=max(0, int(data.get("ups") or 0)),
        num_comments=max(0, int(data.get("num_comments") or 0)),
        community=data.get("subreddit") or "",
        created_utc=int(data.get("created_utc") or 0),
    )


def parse_listing(listing: RedditListing) -> list[CommunityPost]:
    children = (listing.get("data") or {}).get("children") or []
    return [post for post in map(parse_post, children) if post is not None]


def is_signal(post: CommunityPost, query: str) -> bool:
    """Engaged enough and actually about the query (case-insensitive title match)."""
    engaged = post.ups >= _MIN_UPS or post.num_comments >= _MIN_COMMENTS
    return engaged and query.lower() in post.title.lower()


def rank_posts(
    posts: list[CommunityPost], query: str, limit: int = _MAX_POSTS
) -> list[CommunityPost]:
    """Filter to signal posts and return the top ``limit`` by score."""
    kept = [post for post in posts if is_signal(post, query)]
    kept.sort(key=lambda post: post.score, reverse=True)
    return kept[:limit]


class RedditCommunitySource:
    """Searches a fixed list of subreddits for threads mentioning a book.

    Each subreddit is queried independently; one that fails contributes no
    posts and the others are still used.
    """

    def __init__(
        self,
        http_client: HttpClient,
        communities: tuple[str, ...] = COMMUNITIES,
        proxy_base: str = REDDIT_PROXY_BASE,
    ) -> None:
        self._http = http_client
        self._communities = communities
        self._proxy_base = proxy_base

    async def posts_across_communities(self, query: str) -> Result[list[CommunityPost]]:
        """Top engaged posts across all communities whose title mentions ``query``.

        Empty only when every community failed; partial results are Ok.
        """
        query = query.strip()
        if not query:
            return Ok([])
        per_community = await asyncio.gather(
            *(self._search_community(community, query) for community in self._communities)
        )
        if all(posts is None for posts in per_community):
            return Empty(f"no community reachable for {query}")
        merged = [post for posts in per_community if posts for post in posts]
        return Ok(rank_posts(merged, query))

    async def _search_community(self, community: str, query: str) -> list[CommunityPost] | None:
        path = build_search_path(community, query)
        try:
            listing = await self._http.get(self._proxy_base, params={"url": path})
        except CatalogFetchError as exc:
            logger.warning("Reddit search failed for r/%s: %s", community, exc)
            return None
        try:
            return parse_listing(listing)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Malformed Reddit listing from r/%s: %s", community, exc)
            return None
