"""
Quote API endpoints, mounted under /api.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query, Response, status

from core import db

from . import schemas, service

HEALTHCHECK_MESSAGE = "This is the runime API reporting back in full health!"

router = APIRouter(prefix="/api")


@router.get("/healthcheck")
async def healthcheck() -> schemas.MessageEnvelope:
    return schemas.MessageEnvelope(result=HEALTHCHECK_MESSAGE)


@router.get("/random")
@router.get("/quote", include_in_schema=False)
async def random_quote(
    category: str | None = Query(default=None, min_length=1, max_length=200),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> schemas.QuoteEnvelope:
    """
    Return one quote picked at random, optionally within a category.
    """
    result = await service.random_quote(pool, category=category)
    return schemas.QuoteEnvelope(result=result)


@router.get("/quotes/{quote_id}")
async def get_quote(
    quote_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> schemas.QuoteEnvelope:
    result = await service.get_quote(pool, quote_id)
    return schemas.QuoteEnvelope(result=result)


@router.post("/create")
async def create_quote(
    request: schemas.CreateQuoteRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> schemas.QuoteEnvelope:
    result = await service.create_quote(pool, request)
    return schemas.QuoteEnvelope(result=result)


@router.patch("/update/{quote_id}")
async def update_quote(
    quote_id: int,
    request: schemas.UpdateQuoteRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> schemas.QuoteEnvelope:
    """
    Partially update a quote; omitted fields keep their stored value.
    """
    result = await service.update_quote(pool, quote_id, request)
    return schemas.QuoteEnvelope(result=result)


@router.delete("/delete/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Response:
    await service.delete_quote(pool, quote_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
