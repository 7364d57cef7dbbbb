"""
Quote persistence (raw SQL).

`character` is a reserved word in PostgreSQL, so the column is always quoted.
"""

from __future__ import annotations

from core import db
from core import settings

QUOTE_COLUMNS = 'id, quote, category, anime, "character"'


async def get_quote_by_id(conn: db.Executor, quote_id: int) -> dict | None:
    return await db.fetch_one(
        conn,
        f"""
        SELECT {QUOTE_COLUMNS}
        FROM runime.quotes
        WHERE id = $1
        """,
        quote_id,
    )


async def get_latest_quote(conn: db.Executor) -> dict | None:
    return await db.fetch_one(
        conn,
        f"""
        SELECT {QUOTE_COLUMNS}
        FROM runime.quotes
        ORDER BY id DESC
        LIMIT 1
        """,
    )


async def get_random_quote(
    conn: db.Executor,
    *,
    category: str | None = None,
    mode: str = settings.RANDOM_MODE_BERNOULLI,
    probability: float = 0.3,
) -> dict | None:
    """
    Pick one row at random.

    "bernoulli" keeps each scanned row with `probability` and stops at the
    first survivor, so rows early in scan order are favoured and an unlucky
    draw returns nothing. "uniform" sorts by random() and takes the first row.
    """
    if mode == settings.RANDOM_MODE_UNIFORM:
        return await db.fetch_one(
            conn,
            f"""
            SELECT {QUOTE_COLUMNS}
            FROM runime.quotes
            WHERE ($1::text IS NULL OR category = $1)
            ORDER BY random()
            LIMIT 1
            """,
            category,
        )

    return await db.fetch_one(
        conn,
        f"""
        SELECT {QUOTE_COLUMNS}
        FROM runime.quotes
        WHERE random() <= $2
          AND ($1::text IS NULL OR category = $1)
        LIMIT 1
        """,
        category,
        probability,
    )


async def insert_quote(
    conn: db.Executor,
    *,
    quote: str,
    category: str,
    anime: str,
    character: str,
) -> None:
    await db.execute(
        conn,
        """
        INSERT INTO runime.quotes (quote, category, anime, "character")
        VALUES ($1, $2, $3, $4)
        """,
        quote,
        category,
        anime,
        character,
    )


async def update_quote(
    conn: db.Executor,
    quote_id: int,
    *,
    quote: str,
    category: str,
    anime: str,
    character: str,
) -> bool:
    """
    Overwrite all content columns of one row. Returns False when no row has
    `quote_id`.
    """
    row = await db.fetch_one(
        conn,
        """
        UPDATE runime.quotes
        SET quote = $1,
            category = $2,
            anime = $3,
            "character" = $4
        WHERE id = $5
        RETURNING id
        """,
        quote,
        category,
        anime,
        character,
        quote_id,
    )
    return row is not None


async def delete_quote(conn: db.Executor, quote_id: int) -> bool:
    row = await db.fetch_one(
        conn,
        """
        DELETE FROM runime.quotes
        WHERE id = $1
        RETURNING id
        """,
        quote_id,
    )
    return row is not None
