"""Pydantic models for the blog REST API payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

FALLBACK_ERROR_STATUS = 500
FALLBACK_ERROR_MESSAGE = "An unexpected error has occurred"


class Category(BaseModel):
    """A post category."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(description="Category ID")
    name: str = Field(description="Category name, unique by backend convention")
    post_count: int | None = Field(
        default=None, alias="postCount", description="Number of posts in the category"
    )


class Tag(BaseModel):
    """A post tag."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(description="Tag ID")
    name: str = Field(description="Tag name")
    post_count: int | None = Field(
        default=None, alias="postCount", description="Number of posts carrying the tag"
    )


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class Author(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str


class Post(BaseModel):
    """A blog post with its category and tags embedded."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(description="Post ID")
    title: str
    content: str
    author: Author | None = None
    category: Category = Field(description="Embedded category, not just its ID")
    tags: list[Tag] = Field(default_factory=list, description="Tags in backend order")
    reading_time: int | None = Field(
        default=None, alias="readingTime", description="Estimated reading time in minutes"
    )
    created_at: str = Field(alias="createdAt", description="Opaque serialized instant")
    updated_at: str = Field(alias="updatedAt", description="Opaque serialized instant")
    status: PostStatus | None = None


class CreatePostRequest(BaseModel):
    """Body for creating a post. References category and tags by ID."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    content: str
    category_id: str = Field(alias="categoryId")
    tag_ids: list[str] = Field(default_factory=list, alias="tagIds")
    status: PostStatus


class UpdatePostRequest(CreatePostRequest):
    """Body for updating a post. ``id`` identifies the post being changed."""

    id: str = Field(description="ID of the post to update")


class LoginRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str = Field(repr=False)


class AuthResponse(BaseModel):
    """Successful login response."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    token: str = Field(repr=False, description="Bearer credential")
    expires_in: int = Field(
        alias="expiresIn", description="Seconds-to-live hint; not enforced client-side"
    )


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="allow")

    field: str
    message: str


class ApiError(BaseModel):
    """Normalized failure shape surfaced to every caller.

    Validation is strict so that a body only counts as structured when it
    really has an integer ``status`` and a string ``message``. Extra keys, at
    the top level and inside ``errors`` items, are kept so that a structured
    body round-trips unchanged.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="allow")

    status: int = Field(description="HTTP status reported by the backend")
    message: str = Field(description="Human-readable error message")
    errors: list[FieldError] | None = Field(
        default=None, description="Per-field validation errors"
    )

    @classmethod
    def fallback(cls) -> ApiError:
        """The error used when no structured body is available."""
        return cls(status=FALLBACK_ERROR_STATUS, message=FALLBACK_ERROR_MESSAGE)

    def to_payload(self) -> dict[str, object]:
        """Dump back to wire form, leaving out fields the backend did not send."""
        return self.model_dump(exclude_unset=True)
