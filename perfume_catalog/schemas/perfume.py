"""Pydantic schemas for perfume resources."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictBool,
    StrictStr,
    TypeAdapter,
    field_validator,
)


class Category(str, Enum):
    """Fragrance family a listing is filed under."""

    NICHE = "niche"
    DESIGNER = "designer"
    NATURAL = "natural"
    ORIENTAL = "oriental"
    FRESH = "fresh"
    WOODY = "woody"
    FLORAL = "floral"
    CITRUS = "citrus"
    GOURMAND = "gourmand"
    OTHER = "other"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"


NonEmptyStr = Annotated[StrictStr, Field(min_length=1, max_length=255)]
DescriptionStr = Annotated[StrictStr, Field(max_length=1000)]
NotesStr = Annotated[StrictStr, Field(max_length=500)]

# Prices leave the API as JSON numbers, not strings.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

_url_adapter = TypeAdapter(AnyUrl)


class PerfumeCreate(BaseModel):
    """Validated payload used for both create and full-replace update."""

    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr = Field(description="Display name of the fragrance")
    brand: NonEmptyStr = Field(description="Perfume house")
    description: DescriptionStr | None = Field(default=None, description="Marketing copy")
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    volume: int | None = Field(default=None, gt=0, description="Bottle volume in ml")
    category: Category | None = Field(default=None)
    notes_top: NotesStr | None = Field(default=None)
    notes_middle: NotesStr | None = Field(default=None)
    notes_base: NotesStr | None = Field(default=None)
    gender: Gender = Field(default=Gender.UNISEX)
    image_url: StrictStr | None = Field(default=None, description="Absolute URL or /uploads/... path")
    stock_quantity: int = Field(default=0, ge=0)
    is_available: StrictBool = Field(default=True)

    @field_validator("name", "brand", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
        return value

    @field_validator("price", "volume", "stock_quantity", mode="before")
    @classmethod
    def require_number(cls, value: Any) -> Any:
        # bool is an int subclass and strings would otherwise be parsed
        if isinstance(value, (str, bool)):
            raise ValueError("must be a number")
        return value

    @field_validator("image_url")
    @classmethod
    def ensure_uri(cls, value: str | None) -> str | None:
        if not value:
            return value
        if value.startswith("/") and not value.startswith("//"):
            if any(ch.isspace() for ch in value):
                raise ValueError("must be a valid uri")
            return value
        try:
            _url_adapter.validate_python(value)
        except ValueError as exc:
            raise ValueError("must be a valid uri") from exc
        return value


class PerfumeRecord(BaseModel):
    """Snapshot of a persisted listing, detached from the ORM session."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str
    description: str | None = None
    price: JsonDecimal | None = None
    volume: int | None = None
    category: Category | None = None
    notes_top: str | None = None
    notes_middle: str | None = None
    notes_base: str | None = None
    gender: Gender = Gender.UNISEX
    image_url: str | None = None
    stock_quantity: int = 0
    is_available: bool = True
    created_at: datetime
    updated_at: datetime


class ValidationIssue(BaseModel):
    """One violated constraint, reported back to the client."""

    field: str
    message: str


class PerfumeResponse(BaseModel):
    success: bool = True
    data: PerfumeRecord


class PerfumeMutationResponse(PerfumeResponse):
    message: str


class PerfumeListResponse(BaseModel):
    success: bool = True
    data: list[PerfumeRecord]
    count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
