# ABOUTME: Core catalog data structures shared by the source adapters and the engine.
# ABOUTME: Candidate is the canonical related-work record; CommunityPost models a Reddit thread.

from dataclasses import dataclass, field

# Lowercase language codes seen across a work's editions. Empty means unknown.
LanguageSet = frozenset[str]

UNKNOWN_AUTHOR = "Unknown author"


@dataclass(frozen=True)
class Candidate:
    """A catalog work under consideration as a recommendation.

    Every provider shape (author works, subject works, search docs) is mapped
    into this record by the parser before it reaches deduplication or scoring.
    Only ``key`` is required; the rest is whatever the provider knew.
    """

    key: str
    title: str
    author_name: str = UNKNOWN_AUTHOR
    author_key: str | None = None
    subjects: list[str] = field(default_factory=list)
    cover_id: int | None = None
    first_publish_year: int | None = None
    edition_count: int | None = None

    def __post_init__(self) -> None:
        if not self.key:
            msg = f"candidate {self.title!r} has no key"
            raise ValueError(msg)


@dataclass(frozen=True)
class CommunityPost:
    """A community discussion thread that mentions a work."""

    id: str
    title: str
    permalink: str
    ups: int
    num_comments: int
    community: str
    created_utc: int

    @property
    def score(self) -> float:
        """Engagement score: upvotes weigh more than comments."""
        return self.ups * 0.7 + self.num_comments * 0.3


@dataclass
class WorkMeta:
    """Metadata for a single work as shown in the detail view.

    Feeds the overview text and fun facts; built from a search hit or a
    recommendation.
    """

    title: str
    work_key: str | None = None
    author_name: str = ""
    first_publish_year: int | None = None
    subjects: list[str] = field(default_factory=list)
    cover_id: int | None = None

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "WorkMeta":
        return cls(
            title=candidate.title,
            work_key=candidate.key,
            author_name=candidate.author_name,
            first_publish_year=candidate.first_publish_year,
            subjects=list(candidate.subjects),
            cover_id=candidate.cover_id,
        )
