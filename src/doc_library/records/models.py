"""Record types held by the record store.

Attributes are snake_case in Python; the JSON representation uses the
camelCase names the browser client expects (``fullName``, ``fileSize``...).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

KNOWN_CATEGORIES = ("novela", "cuento", "ensayo", "poesia", "tecnico", "academico")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UserCreate(_CamelModel):
    """Registration payload."""

    full_name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(
        ...,
        min_length=3,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Unique, compared exactly",
    )
    phone: Optional[str] = Field(None, description="Phone number")
    institution: Optional[str] = Field(None, description="Institution")
    area_of_interest: Optional[str] = Field(None, description="Area of interest")

    @field_validator("phone", "institution", "area_of_interest", mode="before")
    @classmethod
    def blank_optionals(cls, value):
        return _blank_to_none(value)


class User(UserCreate):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="User ID")
    created_at: datetime = Field(..., description="Registration timestamp")


class DocumentCreate(_CamelModel):
    """Document metadata supplied alongside an upload."""

    title: str = Field(..., min_length=1, description="Document title")
    author: str = Field(..., min_length=1, description="Author")
    category: str = Field(..., min_length=1, description="Category, matched exactly")
    year: Optional[int] = Field(None, description="Publication year")
    description: Optional[str] = Field(None, description="Short description")
    keywords: Optional[str] = Field(None, description="Comma separated keywords")
    uploaded_by: Optional[str] = Field(None, description="Uploader user id, not validated")

    @field_validator("year", "description", "keywords", "uploaded_by", mode="before")
    @classmethod
    def blank_optionals(cls, value):
        return _blank_to_none(value)


class Document(DocumentCreate):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Document ID")
    file_name: str = Field(..., description="Generated storage filename")
    file_path: str = Field(..., description="Full storage path")
    file_size: int = Field(..., ge=0, description="File size in bytes")
    created_at: datetime = Field(..., description="Upload timestamp")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, author, keywords or description."""
        if not query:
            return True
        needle = query.lower()
        haystacks = (self.title, self.author, self.keywords, self.description)
        return any(h is not None and needle in h.lower() for h in haystacks)
