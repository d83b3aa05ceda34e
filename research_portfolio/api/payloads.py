"""Request bodies.

Fields are Optional on purpose: FastAPI would answer a missing field with 422,
while this API reports missing or blank required fields as 400 from the route
handler (see `require_fields`).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from research_portfolio.errors import ValidationError


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def as_record(self) -> Dict[str, Any]:
        return self.model_dump()


def require_fields(payload: _Payload, *names: str) -> None:
    """Raise ValidationError unless every named field is present and non-blank."""
    for name in names:
        v = getattr(payload, name, None)
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValidationError("missing_required_fields")


# -----------------------------
# Auth
# -----------------------------


class LoginRequest(_Payload):
    username: Optional[str] = None
    password: Optional[str] = None


class VerifyRequest(_Payload):
    token: Optional[str] = None


# -----------------------------
# Resources
# -----------------------------


class ArticlePayload(_Payload):
    id: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    content: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[List[str]] = None


class StockPayload(_Payload):
    symbol: Optional[str] = None
    company_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("company_name", "companyName")
    )
    current_price: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("current_price", "currentPrice")
    )
    target_price: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("target_price", "targetPrice")
    )
    rating: Optional[str] = None  # conventionally BUY|HOLD|SELL
    notes: Optional[str] = None


class IndicatorPayload(_Payload):
    name: Optional[str] = None
    value: Optional[float] = None
    unit: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None


class BookPayload(_Payload):
    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("cover_image", "coverImage", "coverImageUrl"),
    )
    rating: Optional[int] = None  # 1-5
    status: Optional[str] = None  # read|reading|to-read
