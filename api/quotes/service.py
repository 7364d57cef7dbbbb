"""
Quote business logic.

Scope:
- converting storage rows into fully populated wire records
- create / read / partial update / delete over runime.quotes
- translating asyncpg failures into the API error taxonomy
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import asyncpg

from core import db, settings
from core.errors import (
    DataIntegrityError,
    QuoteConflictError,
    QuoteNotFoundError,
    StorageError,
)

from . import repository, schemas

logger = logging.getLogger(__name__)

# runime.quotes.id is a serial (int4) column.
MIN_QUOTE_ID = -(2**31)
MAX_QUOTE_ID = 2**31 - 1


def to_quote_response(record: schemas.QuoteRecord) -> schemas.QuoteResponse:
    """
    Convert a storage record to its wire form. Any NULL content column raises
    DataIntegrityError instead of leaking a partial record.
    """
    values: dict[str, str] = {}
    for field in schemas.QUOTE_FIELDS:
        value = getattr(record, field)
        if value is None:
            raise DataIntegrityError(record.id, field)
        values[field] = value
    return schemas.QuoteResponse(id=str(record.id), **values)


def _row_to_response(row: dict) -> schemas.QuoteResponse:
    return to_quote_response(schemas.QuoteRecord(**row))


@asynccontextmanager
async def _storage_errors(action: str) -> AsyncIterator[None]:
    try:
        yield
    except asyncpg.UniqueViolationError as exc:
        raise QuoteConflictError() from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        logger.exception("storage_failed action=%s", action)
        raise StorageError(str(exc)) from exc


async def _require_quote(conn: db.Executor, quote_id: int) -> dict:
    if not MIN_QUOTE_ID <= quote_id <= MAX_QUOTE_ID:
        raise QuoteNotFoundError(quote_id)
    async with _storage_errors("lookup"):
        row = await repository.get_quote_by_id(conn, quote_id)
    if row is None:
        raise QuoteNotFoundError(quote_id)
    return row


async def random_quote(
    conn: db.Executor,
    *,
    category: str | None = None,
) -> schemas.QuoteResponse:
    async with _storage_errors("random"):
        row = await repository.get_random_quote(
            conn,
            category=category,
            mode=settings.random_quote_mode(),
            probability=settings.random_quote_probability(),
        )
    if row is None:
        raise StorageError("No quote could be selected.")
    return _row_to_response(row)


async def get_quote(conn: db.Executor, quote_id: int) -> schemas.QuoteResponse:
    return _row_to_response(await _require_quote(conn, quote_id))


async def create_quote(
    conn: db.Executor,
    payload: schemas.CreateQuoteRequest,
) -> schemas.QuoteResponse:
    async with _storage_errors("create"):
        await repository.insert_quote(
            conn,
            quote=payload.quote,
            category=payload.category,
            anime=payload.anime,
            character=payload.character,
        )
        # Not tied to the insert: a concurrent insert can win this read.
        row = await repository.get_latest_quote(conn)
    if row is None:
        raise StorageError("Inserted quote could not be read back.")

    logger.info("quote_created id=%s", row["id"])
    return _row_to_response(row)


def merge_update(current: dict, payload: schemas.UpdateQuoteRequest) -> dict[str, str | None]:
    """
    Overlay the fields present in `payload` on the stored snapshot.
    """
    merged: dict[str, str | None] = {}
    for field in schemas.QUOTE_FIELDS:
        value = getattr(payload, field)
        merged[field] = value if value is not None else current.get(field)
    return merged


async def update_quote(
    conn: db.Executor,
    quote_id: int,
    payload: schemas.UpdateQuoteRequest,
) -> schemas.QuoteResponse:
    current = await _require_quote(conn, quote_id)
    # Refuse to build on a corrupt snapshot before anything is written.
    _row_to_response(current)
    merged = merge_update(current, payload)

    async with _storage_errors("update"):
        updated = await repository.update_quote(conn, quote_id, **merged)
    if not updated:
        raise QuoteNotFoundError(quote_id)

    logger.info("quote_updated id=%s fields=%s", quote_id, sorted(payload.model_dump(exclude_none=True)))
    return _row_to_response(await _require_quote(conn, quote_id))


async def delete_quote(conn: db.Executor, quote_id: int) -> None:
    if not MIN_QUOTE_ID <= quote_id <= MAX_QUOTE_ID:
        raise QuoteNotFoundError(quote_id)
    async with _storage_errors("delete"):
        deleted = await repository.delete_quote(conn, quote_id)
    if not deleted:
        raise QuoteNotFoundError(quote_id)
    logger.info("quote_deleted id=%s", quote_id)
