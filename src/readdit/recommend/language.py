# ABOUTME: Edition-language filter for ranked recommendation candidates.
# ABOUTME: Probes candidates one at a time within a budget and falls back to the unfiltered top.

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace

from readdit.catalog.types import LanguageSet
from readdit.recommend.types import ScoredCandidate

logger = logging.getLogger(__name__)

# English, and German under both of its Open Library codes.
ALLOWED_LANGUAGES = frozenset({"eng", "ger", "deu"})
PROBE_BUDGET = 15

LanguageProbe = Callable[[str], Awaitable[LanguageSet]]


def is_allowed_language_set(languages: LanguageSet) -> bool:
    """True when the languages are unknown (empty) or include an allowed one."""
    return not languages or bool(languages & ALLOWED_LANGUAGES)


async def filter_by_language(
    ranked: list[ScoredCandidate],
    probe: LanguageProbe,
    want_count: int,
    budget: int = PROBE_BUDGET,
) -> list[ScoredCandidate]:
    """Return ``want_count`` candidates readable in an allowed language.

    Probes run sequentially in rank order, at most ``min(budget, len(ranked))``
    of them, and stop as soon as enough candidates pass. Each passing
    candidate is tagged with its language set.

    If the budget runs out first, the language constraint is dropped: the
    first ``want_count`` of ``ranked`` are returned as they are, tagged with
    an empty language set. Showing something beats showing nothing.
    """
    if want_count <= 0:
        return []
    picked: list[ScoredCandidate] = []
    for scored in ranked[: min(budget, len(ranked))]:
        languages = await probe(scored.key)
        if is_allowed_language_set(languages):
            picked.append(replace(scored, languages=languages))
            if len(picked) >= want_count:
                return picked
        else:
            logger.debug("Skipping %s: editions only in %s", scored.key, sorted(languages))

    logger.debug(
        "Language filter found %d of %d within budget; using unfiltered ranking",
        len(picked),
        want_count,
    )
    return [replace(scored, languages=frozenset()) for scored in ranked[:want_count]]
