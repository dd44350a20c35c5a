# ABOUTME: Data structures flowing through the recommendation pipeline.
# ABOUTME: BaseWork is the request, ScoredCandidate the ranked item, Recommendation the output.

from dataclasses import dataclass, field

from readdit.catalog.types import Candidate, LanguageSet

# Composite weights: catalog, community, preferences.
WEIGHT_OL = 0.55
WEIGHT_REDDIT = 0.25
WEIGHT_PREF = 0.20


@dataclass
class BaseWork:
    """The work recommendations are generated for."""

    title: str
    author_key: str | None = None
    subjects: list[str] = field(default_factory=list)
    work_key: str | None = None
    author_name: str = ""

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "BaseWork":
        return cls(
            title=candidate.title,
            author_key=candidate.author_key,
            subjects=list(candidate.subjects),
            work_key=candidate.key,
            author_name=candidate.author_name,
        )


@dataclass(frozen=True)
class ScoredCandidate:
    """A Candidate with its three sub-scores.

    ``languages`` stays empty until the language filter tags the candidate
    with what its editions were found to be in.
    """

    candidate: Candidate
    ol: float
    pref: float
    reddit: float
    languages: LanguageSet = frozenset()

    def __post_init__(self) -> None:
        for name in ("ol", "pref", "reddit"):
            if getattr(self, name) < 0:
                msg = f"{name} sub-score must be >= 0, got {getattr(self, name)}"
                raise ValueError(msg)

    @property
    def final_score(self) -> float:
        return WEIGHT_OL * self.ol + WEIGHT_REDDIT * self.reddit + WEIGHT_PREF * self.pref

    @property
    def key(self) -> str:
        return self.candidate.key

    @property
    def title(self) -> str:
        return self.candidate.title


@dataclass(frozen=True)
class Recommendation:
    """One recommendation as handed to the presentation layer."""

    title: str
    author_name: str
    reason_text: str
    key: str
    subjects: list[str] = field(default_factory=list)
    cover_id: int | None = None
    first_publish_year: int | None = None
    edition_count: int | None = None
    author_key: str | None = None
