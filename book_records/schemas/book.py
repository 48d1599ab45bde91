"""
Book Pydantic Schemas

Request and response bodies for the books endpoints.

Every book field is a free-form string. There is no validation beyond
"the body is a JSON object whose book fields are strings":
- null and missing fields become the empty string
- unknown fields (including a client-supplied id) are ignored
- the year is exposed as publishedYear; published_year is accepted on input
- request keys match case-insensitively ("Title" sets title)
"""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class BookBase(BaseModel):
    """
    Base schema with the shared book fields.

    None is normalised to "" so that a stored NULL and an empty string look
    the same to clients.
    """

    title: str = Field(
        default="",
        description="Book title",
        examples=["Dune"],
    )

    author: str = Field(
        default="",
        description="Book author",
        examples=["Herbert"],
    )

    published_year: str = Field(
        default="",
        validation_alias=AliasChoices("publishedYear", "published_year"),
        serialization_alias="publishedYear",
        description="Year of publication, stored as text",
        examples=["1965"],
    )

    genre: str = Field(
        default="",
        description="Book genre",
        examples=["SF"],
    )

    @field_validator("title", "author", "published_year", "genre", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat null the same as an empty string."""
        if v is None:
            return ""
        return v


# Lower-cased request key -> validation alias
PAYLOAD_KEYS = {
    "title": "title",
    "author": "author",
    "publishedyear": "publishedYear",
    "published_year": "publishedYear",
    "genre": "genre",
}


class BookPayload(BookBase):
    """
    Schema for create and update request bodies.

    Any id in the body is dropped: create generates a fresh one and update
    takes the id from the path.

    Example request body:
    {
        "title": "Dune",
        "author": "Herbert",
        "publishedYear": "1965",
        "genre": "SF"
    }
    """

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def fold_key_case(cls, data: Any) -> Any:
        """
        Map request keys onto the book fields regardless of case.

        When two keys name the same field, the later one wins.
        """
        if not isinstance(data, dict):
            return data
        folded = {}
        for key, value in data.items():
            field = PAYLOAD_KEYS.get(key.lower()) if isinstance(key, str) else None
            if field is not None:
                folded[field] = value
        return folded


class BookResponse(BookBase):
    """Schema for book responses, including the generated id."""

    id: str = Field(..., description="Unique identifier (UUID)")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "0b6e1b1c-4c57-4b8f-8a43-1c7f5d1f0d7e",
                "title": "Dune",
                "author": "Herbert",
                "publishedYear": "1965",
                "genre": "SF",
            }
        },
    )


class MessageResponse(BaseModel):
    """Confirmation body returned by update and delete."""

    message: str = Field(
        ...,
        examples=["Book updated successfully"],
    )
