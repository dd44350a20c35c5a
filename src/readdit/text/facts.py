# ABOUTME: Fun facts for a work: light trivia built from catalog, edition, and Reddit data.
# ABOUTME: Kept separate from the overview so the two never repeat each other.

from dataclasses import dataclass
from typing import Any

from readdit.catalog.openlibrary_parser import pick_work_subjects
from readdit.catalog.types import CommunityPost, LanguageSet, WorkMeta
from readdit.text.generator import format_year
from readdit.text.labels import pick_top_labels

_LANGUAGE_SAMPLE = 6
_ENGLISH_OR_GERMAN = frozenset({"eng", "ger", "deu"})


@dataclass(frozen=True)
class FunFact:
    icon: str
    text: str


def build_fun_facts(
    meta: WorkMeta,
    work: dict[str, Any] | None,
    languages: LanguageSet,
    posts: list[CommunityPost],
) -> list[FunFact]:
    """Assemble the fun facts list.

    Args:
        meta: What the caller already knows about the work.
        work: The full works record, or None when it could not be loaded.
        languages: Edition languages of the work (may be empty).
        posts: Cached community posts for the work's title (may be empty).
    """
    subjects = pick_work_subjects(work, 30) if work else list(meta.subjects)
    labels = pick_top_labels(subjects, 3)
    facts: list[FunFact] = []

    year = format_year(meta.first_publish_year)
    if year:
        facts.append(FunFact("📅", f"First published: {year}, a few winters ago."))

    covers = (work or {}).get("covers")
    if isinstance(covers, list) and covers:
        facts.append(
            FunFact("🖼️", f"Open Library knows {len(covers)} cover variant(s); we show one.")
        )

    if labels:
        facts.append(FunFact("🏷️", f"Curated shelf: {' · '.join(labels)}."))

    sample = sorted(languages)[:_LANGUAGE_SAMPLE]
    if sample:
        note = " (English/German included)" if _ENGLISH_OR_GERMAN & set(sample) else ""
        facts.append(FunFact("🌍", f"Edition languages (sample): {', '.join(sample)}{note}."))
    else:
        facts.append(
            FunFact("🌍", "Edition languages are unavailable right now (Open Library is moody).")
        )

    if posts:
        ups = sum(post.ups for post in posts)
        comments = sum(post.num_comments for post in posts)
        facts.append(
            FunFact(
                "👀",
                f"Reddit radar: {len(posts)} top thread(s) cached · "
                f"🗳️ {ups:,} upvotes · 💬 {comments:,} comments.",
            )
        )
    else:
        facts.append(
            FunFact("👀", "Reddit radar: nothing cached yet; load the voices and check back.")
        )

    work_subjects = (work or {}).get("subjects")
    subject_count = len(work_subjects) if isinstance(work_subjects, list) else len(meta.subjects)
    if subject_count:
        facts.append(
            FunFact("🧩", f"Open Library lists {subject_count} subjects (we keep the key ones).")
        )

    return facts
