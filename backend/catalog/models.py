"""Catalog entity types. All frozen; list fields are stored as tuples."""
import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


def _required_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class FaqItem(_Entity):
    question: str
    answer: str

    @field_validator("question", "answer")
    @classmethod
    def text_present(cls, v: str) -> str:
        return _required_text(v)


class Tool(_Entity):
    title: str
    href: str
    description: str
    category: str
    icon: str | None = None
    color: str | None = None
    featured: bool = False
    steps: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    image: str | None = None
    updated: datetime.date | None = None

    @field_validator("title", "description", "category")
    @classmethod
    def text_present(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("href")
    @classmethod
    def href_is_path(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("/") or v == "/":
            raise ValueError("href must be a site path like /json-formatter")
        return v


class ToolCategory(_Entity):
    id: str
    name: str
    description: str
    keywords: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    faqs: tuple[FaqItem, ...] = Field(default=(), alias="faq")

    @field_validator("id", "name", "description")
    @classmethod
    def text_present(cls, v: str) -> str:
        return _required_text(v)


class BlogPost(_Entity):
    title: str
    slug: str
    excerpt: str
    date: datetime.date
    author: str | None = None
    category: str | None = None
    updated: datetime.date | None = None
    image: str | None = None
    tags: tuple[str, ...] = ()

    @field_validator("title", "excerpt")
    @classmethod
    def text_present(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("slug")
    @classmethod
    def slug_is_segment(cls, v: str) -> str:
        v = _required_text(v).strip("/")
        if "/" in v:
            raise ValueError("slug must be a single path segment")
        return v


class BreadcrumbItem(_Entity):
    name: str
    url: str

    @field_validator("name", "url")
    @classmethod
    def text_present(cls, v: str) -> str:
        return _required_text(v)
