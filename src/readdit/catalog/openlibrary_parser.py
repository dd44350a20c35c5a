# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Maps each endpoint's work shape onto the canonical Candidate record.

import re
from typing import Any

from readdit.catalog.schemas import (
    AuthorObject,
    AuthorWorkEntry,
    AuthorWorksResponse,
    EditionsResponse,
    SearchDoc,
    SearchResponse,
    SubjectResponse,
    SubjectWork,
)
from readdit.catalog.types import UNKNOWN_AUTHOR, Candidate, LanguageSet

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"
_UNTITLED = "Untitled"

# Candidates keep only the leading subjects; OL works can carry hundreds.
MAX_CANDIDATE_SUBJECTS = 12

_YEAR_RE = re.compile(r"\b(\d{4})\b")


def resolve_author(
    authors: list[AuthorObject] | None, flat_names: list[str] | None = None
) -> str:
    """Resolve a display name for a work's first author.

    Order: the author object's own name, then the name of the author nested
    inside it, then the first entry of a flat name list, then the sentinel.
    """
    first = authors[0] if authors else None
    if first:
        name = first.get("name") or (first.get("author") or {}).get("name")
        if name:
            return name
    if flat_names and flat_names[0]:
        return flat_names[0]
    return UNKNOWN_AUTHOR


def resolve_author_key(
    authors: list[AuthorObject] | None, flat_keys: list[str] | None = None
) -> str | None:
    """Resolve the first author's key, mirroring resolve_author's order."""
    first = authors[0] if authors else None
    if first:
        key = first.get("key") or (first.get("author") or {}).get("key")
        if key:
            return key
    if flat_keys and flat_keys[0]:
        return flat_keys[0]
    return None


def _lower_subjects(subjects: list[str] | None) -> list[str]:
    if not subjects:
        return []
    return [str(s).lower() for s in subjects[:MAX_CANDIDATE_SUBJECTS]]


def _as_int(value: Any) -> int | None:
    """Return value as an int if it is numeric, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _parse_year(value: Any) -> int | None:
    """Accept either an integer year or a date string like 'March 1965'."""
    year = _as_int(value)
    if year is not None:
        return year if year > 0 else None
    if isinstance(value, str):
        match = _YEAR_RE.search(value)
        if match:
            return int(match.group(1))
    return None


def candidate_from_author_entry(entry: AuthorWorkEntry) -> Candidate | None:
    """Map an author-works entry. Returns None when the entry has no key."""
    key = entry.get("key")
    if not key:
        return None
    authors = entry.get("authors")
    covers = entry.get("covers") or []
    return Candidate(
        key=key,
        title=entry.get("title") or _UNTITLED,
        author_name=resolve_author(authors),
        author_key=resolve_author_key(authors),
        subjects=_lower_subjects(entry.get("subjects")),
        cover_id=_as_int(covers[0]) if covers else None,
        first_publish_year=_parse_year(entry.get("first_publish_date")),
    )


def candidate_from_subject_work(work: SubjectWork) -> Candidate | None:
    """Map a subject-works record. Returns None when the record has no key."""
    key = work.get("key")
    if not key:
        return None
    authors = work.get("authors")
    return Candidate(
        key=key,
        title=work.get("title") or _UNTITLED,
        author_name=resolve_author(authors),
        author_key=resolve_author_key(authors),
        subjects=_lower_subjects(work.get("subject")),
        cover_id=_as_int(work.get("cover_id")),
        first_publish_year=_parse_year(work.get("first_publish_year")),
        edition_count=_as_int(work.get("edition_count")),
    )


def candidate_from_search_doc(doc: SearchDoc) -> Candidate | None:
    """Map a search doc, whose authors come as flat parallel lists."""
    key = doc.get("key")
    if not key:
        return None
    return Candidate(
        key=key,
        title=doc.get("title") or _UNTITLED,
        author_name=resolve_author(None, doc.get("author_name")),
        author_key=resolve_author_key(None, doc.get("author_key")),
        subjects=_lower_subjects(doc.get("subject")),
        cover_id=_as_int(doc.get("cover_i")),
        first_publish_year=_parse_year(doc.get("first_publish_year")),
        edition_count=_as_int(doc.get("edition_count")),
    )


def parse_author_works(data: AuthorWorksResponse) -> list[Candidate]:
    """Parse ``/authors/{id}/works.json`` into Candidates, dropping keyless entries."""
    entries = data.get("entries") or []
    return [c for c in map(candidate_from_author_entry, entries) if c is not None]


def parse_subject_works(data: SubjectResponse) -> list[Candidate]:
    """Parse ``/subjects/{subject}.json`` into Candidates, dropping keyless works."""
    works = data.get("works") or []
    return [c for c in map(candidate_from_subject_work, works) if c is not None]


def parse_search_results(data: SearchResponse) -> list[Candidate]:
    """Parse a ``/search.json`` response into Candidates."""
    docs = data.get("docs") or []
    return [c for c in map(candidate_from_search_doc, docs) if c is not None]


def parse_edition_languages(data: EditionsResponse) -> LanguageSet:
    """Collect the language codes across all editions of a work.

    Language refs look like ``{"key": "/languages/eng"}``; only the last path
    segment is kept.
    """
    codes: set[str] = set()
    for edition in data.get("entries") or []:
        for lang in edition.get("languages") or []:
            code = (lang.get("key") or "").lower().rsplit("/", 1)[-1]
            if code:
                codes.add(code)
    return frozenset(codes)


def parse_work_description(work: dict[str, Any] | None) -> str:
    """Extract the description from an Open Library Works response.

    Handles the OL quirk where description can be either a plain string
    or a dict with {"type": ..., "value": "actual text"}.
    """
    if not work:
        return ""
    desc = work.get("description")
    if isinstance(desc, str):
        return desc.strip()
    if isinstance(desc, dict) and isinstance(desc.get("value"), str):
        return desc["value"].strip()
    return ""


def pick_work_subjects(work: dict[str, Any] | None, max_subjects: int = 10) -> list[str]:
    subjects = (work or {}).get("subjects")
    if not isinstance(subjects, list):
        return []
    return [str(s) for s in subjects[:max_subjects]]


def pick_cover_id(work: dict[str, Any] | None) -> int | None:
    """First numeric cover id of a work record, if any."""
    covers = (work or {}).get("covers")
    if isinstance(covers, list) and covers:
        return _as_int(covers[0])
    return None


def work_key_to_id(work_key: str) -> str:
    """'/works/OL45883W' -> 'OL45883W'."""
    return work_key.rsplit("/", 1)[-1]


def build_cover_url(cover_id: int, size: str = "L") -> str:
    """Build an Open Library cover image URL for a cover id.

    Args:
        cover_id: The numeric cover id.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"
