# ABOUTME: Duplicate removal for recommendation candidates.
# ABOUTME: Dedup by work key, exclude the base work, and drop repeated titles in the final pick.

import re
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from readdit.catalog.types import Candidate

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


class _Titled(Protocol):
    @property
    def key(self) -> str: ...

    @property
    def title(self) -> str: ...


T = TypeVar("T", bound=_Titled)


def normalize_title(title: str | None) -> str:
    """Comparison form of a title: lowercase, '&' as 'and', alphanumerics only.

    "The Hobbit!" and "the hobbit" normalize alike; "The Hobbits" does not.
    """
    lowered = str(title or "").lower().replace("&", "and")
    return _NON_ALNUM_RE.sub("", lowered)


def dedupe_by_key(items: Iterable[T]) -> list[T]:
    """Keep the first item seen per key, in input order. Keyless items are dropped."""
    seen: dict[str, T] = {}
    for item in items:
        if item.key and item.key not in seen:
            seen[item.key] = item
    return list(seen.values())


def exclude_base(
    candidates: Iterable[Candidate], base_title: str, base_key: str | None
) -> list[Candidate]:
    """Drop the base work itself, matched by key or by normalized title."""
    base_norm = normalize_title(base_title)
    kept = []
    for candidate in candidates:
        if base_key and candidate.key == base_key:
            continue
        if normalize_title(candidate.title) == base_norm:
            continue
        kept.append(candidate)
    return kept


def dedupe_titles(items: Sequence[T], limit: int) -> list[T]:
    """Take up to ``limit`` items in order, skipping titles already taken.

    Keeps several editions of one work from filling the final list.
    """
    picked: list[T] = []
    seen: set[str] = set()
    for item in items:
        norm = normalize_title(item.title)
        if norm in seen:
            continue
        seen.add(norm)
        picked.append(item)
        if len(picked) >= limit:
            break
    return picked
