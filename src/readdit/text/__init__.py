# ABOUTME: Text engine package: curated labels, snippets, overviews, reasons, and fun facts.
# ABOUTME: Everything here is pure and deterministic; no network access.

from readdit.text.facts import FunFact, build_fun_facts
from readdit.text.generator import (
    ReasonSignals,
    generate_overview_text,
    generate_recommendation_reason,
    generate_search_snippet,
    overview_from_work,
    smart_trim,
    stable_hash,
)
from readdit.text.labels import pick_top_labels, shared_labels, subject_to_label

__all__ = [
    "FunFact",
    "ReasonSignals",
    "build_fun_facts",
    "generate_overview_text",
    "generate_recommendation_reason",
    "generate_search_snippet",
    "overview_from_work",
    "pick_top_labels",
    "shared_labels",
    "smart_trim",
    "stable_hash",
    "subject_to_label",
]
