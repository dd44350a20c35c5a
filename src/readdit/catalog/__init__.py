# ABOUTME: Catalog package: Open Library and Reddit source adapters plus their record types.
# ABOUTME: Exports the canonical Candidate record and the adapters the engine fans out to.

from readdit.catalog.community import RedditCommunitySource
from readdit.catalog.openlibrary import OpenLibrarySource
from readdit.catalog.types import UNKNOWN_AUTHOR, Candidate, CommunityPost, LanguageSet, WorkMeta

__all__ = [
    "UNKNOWN_AUTHOR",
    "Candidate",
    "CommunityPost",
    "LanguageSet",
    "OpenLibrarySource",
    "RedditCommunitySource",
    "WorkMeta",
]
