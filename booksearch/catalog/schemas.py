"""
Pydantic schema definitions for the catalog module.

``ResultRecord`` is the one place where the loosely shaped ``docs``
entries returned by Open Library are tamed: every field is optional,
list fields always come out as lists of strings and numeric fields
come out as ``int`` or ``None``. Code downstream of this module can
therefore read any attribute without guarding against missing keys.

``BookCard`` and ``BookDetail`` are the display models produced by
``render.py``; ``SearchPage`` bundles cards with pagination metadata
for the JSON API.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


FILTER_FIELDS = ("title", "author", "subject", "isbn")


class FilterSet(BaseModel):
    """The four user-editable search fields."""

    title: str = ""
    author: str = ""
    subject: str = ""
    isbn: str = ""

    @field_validator("title", "author", "subject", "isbn", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def is_empty(self) -> bool:
        return not any(getattr(self, name).strip() for name in FILTER_FIELDS)


class ResultRecord(BaseModel):
    """A single ``docs`` entry from the search endpoint.

    Only the fields the interface reads are declared. Anything else the
    API sends is kept as an extra attribute and otherwise ignored.
    """

    model_config = ConfigDict(extra="allow")

    key: Optional[str] = None
    title: Optional[str] = None
    author_name: List[str] = Field(default_factory=list)
    author_key: List[str] = Field(default_factory=list)
    first_publish_year: Optional[int] = None
    edition_count: Optional[int] = None
    language: List[str] = Field(default_factory=list)
    subject: List[str] = Field(default_factory=list)
    cover_i: Optional[int] = None
    isbn: List[str] = Field(default_factory=list)
    id_amazon: List[str] = Field(default_factory=list)

    @field_validator(
        "author_name", "author_key", "language", "subject", "isbn", "id_amazon",
        mode="before",
    )
    @classmethod
    def _as_str_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [v for v in value if isinstance(v, str)]
        return []

    @field_validator("first_publish_year", "edition_count", "cover_i", mode="before")
    @classmethod
    def _as_int(cls, value: Any) -> Optional[int]:
        # bool is an int subclass but never a meaningful value here
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @field_validator("key", "title", mode="before")
    @classmethod
    def _as_str(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class SearchResultSet(BaseModel):
    """One successful response, replaced wholesale on every fetch."""

    records: List[ResultRecord] = Field(default_factory=list)
    total_found: int = 0
    current_page: int = 1


class AuthorLink(BaseModel):
    name: str
    # None when the record has no author key at this position
    url: Optional[str] = None


class BookCard(BaseModel):
    """Summary shown in the result grid."""

    title: str
    authors: str
    year: str
    cover_url: Optional[str] = None
    work_url: Optional[str] = None


class BookDetail(BaseModel):
    """Everything the detail overlay shows for one record."""

    title: str
    authors: List[AuthorLink] = Field(default_factory=list)
    subjects: List[str] = Field(default_factory=list)
    first_published: str
    edition_count: str
    languages: str
    cover_url: Optional[str] = None
    work_url: Optional[str] = None
    amazon_url: Optional[str] = None


class SearchPage(BaseModel):
    """A wrapper for results returned from the ``/api/search`` endpoint."""

    url: str
    page: int
    page_size: int
    total_found: int
    total_pages: int
    items: List[BookCard]
