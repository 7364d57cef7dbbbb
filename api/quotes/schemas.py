"""
Quote API schemas (storage record, wire record, request bodies).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

QUOTE_FIELDS = ("quote", "category", "anime", "character")


class QuoteRecord(BaseModel):
    """
    A row of runime.quotes as the database hands it back. Content columns are
    nullable at the storage level even though the API never writes NULL.
    """

    id: int
    quote: str | None = None
    category: str | None = None
    anime: str | None = None
    character: str | None = None


class QuoteResponse(BaseModel):
    id: str
    quote: str
    category: str
    anime: str
    character: str


class CreateQuoteRequest(BaseModel):
    quote: str
    category: str
    anime: str
    character: str


class UpdateQuoteRequest(BaseModel):
    # None means "keep the stored value"; an empty string overwrites it.
    quote: str | None = None
    category: str | None = None
    anime: str | None = None
    character: str | None = None


class QuoteEnvelope(BaseModel):
    status: Literal["success"] = "success"
    result: QuoteResponse


class MessageEnvelope(BaseModel):
    status: Literal["success"] = "success"
    result: str
