# ABOUTME: Declared JSON shapes of the Open Library and Reddit endpoints the adapters read.
# ABOUTME: All fields are optional; the parser defaults anything a provider leaves out.

from typing import TypedDict


class NestedAuthor(TypedDict, total=False):
    key: str
    name: str


class AuthorObject(TypedDict, total=False):
    """Author entry inside a work record.

    Subject works carry ``{key, name}``; author works carry
    ``{author: {key}, type: {...}}``.
    """

    key: str
    name: str
    author: NestedAuthor


class AuthorWorkEntry(TypedDict, total=False):
    """One entry of ``/authors/{id}/works.json``."""

    key: str
    title: str
    authors: list[AuthorObject]
    subjects: list[str]
    covers: list[int]
    first_publish_date: str


class AuthorWorksResponse(TypedDict, total=False):
    size: int
    entries: list[AuthorWorkEntry]


class SubjectWork(TypedDict, total=False):
    """One work of ``/subjects/{subject}.json``."""

    key: str
    title: str
    authors: list[AuthorObject]
    subject: list[str]
    cover_id: int
    cover_edition_key: str
    first_publish_year: int
    edition_count: int


class SubjectResponse(TypedDict, total=False):
    name: str
    work_count: int
    works: list[SubjectWork]


class SearchDoc(TypedDict, total=False):
    """One doc of ``/search.json``."""

    key: str
    title: str
    author_name: list[str]
    author_key: list[str]
    subject: list[str]
    cover_i: int
    first_publish_year: int
    edition_count: int


class SearchResponse(TypedDict, total=False):
    numFound: int
    docs: list[SearchDoc]


class LanguageRef(TypedDict, total=False):
    key: str


class EditionEntry(TypedDict, total=False):
    key: str
    title: str
    languages: list[LanguageRef]


class EditionsResponse(TypedDict, total=False):
    size: int
    entries: list[EditionEntry]


class RedditPostData(TypedDict, total=False):
    id: str
    title: str
    permalink: str
    ups: int
    num_comments: int
    subreddit: str
    created_utc: float


class RedditChild(TypedDict, total=False):
    kind: str
    data: RedditPostData


class RedditListingData(TypedDict, total=False):
    children: list[RedditChild]


class RedditListing(TypedDict, total=False):
    kind: str
    data: RedditListingData
