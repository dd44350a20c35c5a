# ABOUTME: Curated labels derived from raw Open Library subjects, and genre subject hints.
# ABOUTME: Shared vocabulary for the text engine, the reason generator, and preference scoring.

# Ordered: the first rule whose keywords occur in the subject wins.
_LABEL_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("science fiction", "science_fiction", "sci-fi", "scifi"), "Sci-Fi"),
    (("fantasy",), "Fantasy"),
    (("mystery", "detective"), "Mystery"),
    (("thriller", "crime"), "Suspense"),
    (("romance", "love"), "Romance"),
    (("classic", "literature"), "Classics"),
    (("history", "biography", "nonfiction", "essays"), "Nonfiction"),
    (("philosophy",), "Philosophy"),
    (("politic",), "Politics"),
    (("space",), "Space"),
    (("dystopia",), "Dystopia"),
    (("adventure",), "Adventure"),
)

GENRE_SUBJECT_HINTS: dict[str, tuple[str, ...]] = {
    "fantasy": ("fantasy",),
    "scifi": ("science_fiction", "sci-fi", "space", "dystopia"),
    "mystery": ("mystery", "detective", "crime", "thriller"),
    "romance": ("romance", "love"),
    "nonfiction": ("nonfiction", "history", "biography", "essays"),
    "classics": ("classic", "classics", "literature"),
}

KNOWN_GENRES = tuple(GENRE_SUBJECT_HINTS)


def subject_to_label(subject: str) -> str:
    """Map a raw subject onto a curated label, or "" when none applies."""
    value = str(subject or "").lower()
    for keywords, label in _LABEL_RULES:
        if any(keyword in value for keyword in keywords):
            return label
    return ""


def pick_top_labels(subjects: list[str] | None, max_labels: int = 3) -> list[str]:
    """Distinct labels in subject order, at most ``max_labels``."""
    labels: list[str] = []
    for subject in subjects or []:
        label = subject_to_label(subject)
        if label and label not in labels:
            labels.append(label)
    return labels[:max_labels]


def shared_labels(
    base_subjects: list[str] | None, candidate_subjects: list[str] | None
) -> list[str]:
    """Labels of the candidate that the base work also carries, in candidate order."""
    base = set(pick_top_labels(base_subjects, 6))
    return [label for label in pick_top_labels(candidate_subjects, 6) if label in base]


def genre_subject_hints(genre: str) -> tuple[str, ...]:
    """Subject tokens that count as a hit for a genre; unknown genres have none."""
    return GENRE_SUBJECT_HINTS.get(genre, ())
