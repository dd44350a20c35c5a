# ABOUTME: Text engine: search snippets, overview text, and recommendation reasons.
# ABOUTME: Deterministic; variation comes from a stable string hash, never from randomness.

import time
from dataclasses import dataclass, field
from typing import Any

from readdit.catalog.openlibrary_parser import parse_work_description, pick_work_subjects
from readdit.catalog.types import WorkMeta
from readdit.text.labels import pick_top_labels

REASON_MAX_LENGTH = 220
OVERVIEW_MAX_LENGTH = 260
_MAX_SIGNAL_SENTENCES = 2
# Never cut back to a space at or before this index; a raw cut is better than a stub.
_MIN_WORD_CUT = 40
_ELLIPSIS = "…"

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619

_CLOSING_SENTENCES = (
    "Not a random pick, more of a curated one.",
    "Reads like a sensible follow-up.",
    "If you want to stay in this lane, this fits.",
    "Related rather than random.",
)


def smart_trim(text: str, max_length: int) -> str:
    """Trim to at most ``max_length`` characters, preferring a word boundary.

    Cuts back to the last space when it lies beyond index 40 and appends an
    ellipsis. Text that already fits is returned unchanged.
    """
    text = str(text or "")
    if len(text) <= max_length:
        return text
    cut = text[: max_length - 1]
    last_space = cut.rfind(" ")
    if last_space > _MIN_WORD_CUT:
        cut = cut[:last_space]
    return cut.strip() + _ELLIPSIS


def safe_author_name(name: str | None) -> str:
    """The author name, or "" when it is blank or a placeholder like 'Unknown author'."""
    author = str(name or "").strip()
    if not author or "unknown" in author.lower():
        return ""
    return author


def format_year(year: Any) -> str:
    try:
        value = int(year)
    except (TypeError, ValueError):
        return ""
    return str(value) if value > 0 else ""


def stable_hash(text: str) -> int:
    """32-bit FNV-1a hash of a string; identical input always gives identical output."""
    h = _FNV_OFFSET
    for ch in text:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


def format_relative_time(created_utc: int | None, now: float | None = None) -> str:
    """Human 'x ago' for a unix timestamp; "" when the timestamp is missing."""
    if not created_utc:
        return ""
    now = time.time() if now is None else now
    seconds = max(0, int(now - created_utc))
    minutes = seconds // 60
    hours = seconds // 3600
    days = seconds // 86400
    years = days // 365

    for amount, unit in ((years, "year"), (days, "day"), (hours, "hour"), (minutes, "minute")):
        if amount > 0:
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
    return "just now"


def generate_search_snippet(meta: WorkMeta) -> str:
    """Short neutral line for a search hit: author, year, and up to two labels."""
    author = safe_author_name(meta.author_name)
    year = format_year(meta.first_publish_year)
    labels = pick_top_labels(meta.subjects, 2)

    parts = [part for part in (author, year) if part]
    if labels:
        parts.append(" · ".join(labels))

    if parts:
        return " · ".join(parts)
    return f"A short overview of “{smart_trim(meta.title or 'Untitled', 40)}”."


def generate_overview_text(meta: WorkMeta) -> str:
    """Overview used when the catalog has no description for a work."""
    title = meta.title or "This book"
    author = safe_author_name(meta.author_name)
    year = format_year(meta.first_publish_year)
    labels = pick_top_labels(meta.subjects, 3)

    year_part = f" ({year})" if year else ""
    if author:
        sentences = [f"“{title}” by {author}{year_part}."]
    else:
        sentences = [f"“{title}”{year_part}."]

    if labels:
        sentences.append(f"Labels: {' · '.join(labels)}.")
        sentences.append("Thematically it reads focused rather than a random mix.")
    else:
        sentences.append("Find more in the voices, recommendations, and fun facts.")

    return smart_trim(" ".join(sentences), OVERVIEW_MAX_LENGTH)


def overview_from_work(meta: WorkMeta, work: dict[str, Any] | None) -> str:
    """Overview built from the work's own description, falling back to generated text.

    The facts line deliberately leaves out edition data; that belongs to the
    fun facts.
    """
    description = parse_work_description(work)
    if not description:
        return generate_overview_text(meta)

    labels = pick_top_labels(pick_work_subjects(work, 12), 3)
    facts = []
    year = format_year(meta.first_publish_year)
    if year:
        facts.append(f"First published: {year}")
    if labels:
        facts.append(f"Labels: {' · '.join(labels)}")

    if not facts:
        return description
    return f"{description}\n\n{' · '.join(facts)}"


@dataclass
class ReasonSignals:
    """Why a candidate surfaced, in the order the reason text considers them."""

    same_author: bool = False
    shared_labels: list[str] = field(default_factory=list)
    prefs_boost: bool = False
    community_boost: bool = False


def _signal_sentences(author: str, signals: ReasonSignals) -> list[str]:
    sentences = []
    if signals.same_author and author:
        sentences.append(f"Same author's hand ({author}), a natural next step.")
    if signals.shared_labels:
        sentences.append(f"Thematically close: {' · '.join(signals.shared_labels[:2])}.")
    if signals.prefs_boost:
        sentences.append("Matches your genre picks, so it ranks higher.")
    if signals.community_boost:
        sentences.append("Mentioned on Reddit in a similar context.")
    return sentences[:_MAX_SIGNAL_SENTENCES]


def closing_sentence(title: str, author: str) -> str:
    """Pick the closing sentence for a candidate from its title and author."""
    seed = stable_hash(f"{title}|{author}")
    return _CLOSING_SENTENCES[seed % len(_CLOSING_SENTENCES)]


def generate_recommendation_reason(
    base_title: str, title: str, author_name: str, signals: ReasonSignals
) -> str:
    """Explain in one or two sentences why ``title`` is recommended for ``base_title``."""
    author = safe_author_name(author_name)
    sentences = _signal_sentences(author, signals)

    if not sentences:
        author_part = f" by {author}" if author else ""
        base = smart_trim(base_title or "your book", 40)
        sentences.append(f"Could fit with “{base}”, a solid candidate{author_part}.")

    sentences.append(closing_sentence(title or "this title", author))
    return smart_trim(" ".join(sentences), REASON_MAX_LENGTH)
