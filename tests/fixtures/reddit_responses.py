# ABOUTME: Canned Reddit search listings, as returned through the proxy, for testing.
# ABOUTME: Covers engaged, low-signal, and off-topic posts.


def _child(
    post_id: str,
    title: str,
    ups: int,
    num_comments: int,
    subreddit: str = "books",
    created_utc: float = 1700000000.0,
) -> dict:
    return {
        "kind": "t3",
        "data": {
            "id": post_id,
            "title": title,
            "permalink": f"/r/{subreddit}/comments/{post_id}/slug/",
            "ups": ups,
            "num_comments": num_comments,
            "subreddit": subreddit,
            "created_utc": created_utc,
        },
    }


def listing(*children: dict) -> dict:
    return {"kind": "Listing", "data": {"children": list(children)}}


BOOKS_LISTING = listing(
    _child("a1", "Dune review, a masterpiece", 50, 2),
    _child("a2", "Just finished Dune and Dune Messiah", 300, 120),
    _child("a3", "Is Dune worth it?", 3, 1),
    _child("a4", "Best fantasy of the year", 900, 400),
)

BOOKSUGGESTIONS_LISTING = listing(
    _child("b1", "Books like Dune?", 10, 30, subreddit="booksuggestions"),
)

BUECHER_LISTING = listing(
    _child("c1", "Dune auf Deutsch", 25, 0, subreddit="buecher"),
)

EMPTY_LISTING = listing()

BRACKETED_LISTING = listing(
    _child("x[1]", "Dune [spoilers] discussion", 80, 12),
)
