"""SQL issued by the quote repository.

Invariants:
    - UPDATE and DELETE are always scoped by `WHERE id = $n`
    - the reserved `character` column is always quoted
    - random selection uses the configured sampling predicate
"""

import pytest

from core import settings
from quotes import repository


class RecordingPool:
    """Stands in for asyncpg.Pool; remembers every statement."""

    def __init__(self, row=None):
        self.row = row
        self.calls: list[tuple[str, tuple]] = []

    async def fetchrow(self, query, *args):
        self.calls.append((query, args))
        return self.row

    async def execute(self, query, *args):
        self.calls.append((query, args))
        return "INSERT 0 1"


def _sql(pool: RecordingPool) -> str:
    return " ".join(pool.calls[-1][0].split())


async def test_update_is_scoped_to_one_id():
    pool = RecordingPool(row={"id": 7})

    updated = await repository.update_quote(
        pool, 7, quote="Z", category="B", anime="C", character="D",
    )

    assert updated is True
    sql = _sql(pool)
    assert "UPDATE runime.quotes" in sql
    assert "WHERE id = $5" in sql
    assert '"character" = $4' in sql
    assert pool.calls[-1][1] == ("Z", "B", "C", "D", 7)


async def test_update_reports_missing_row():
    pool = RecordingPool(row=None)
    assert await repository.update_quote(pool, 9, quote="", category="", anime="", character="") is False


async def test_delete_is_scoped_to_one_id():
    pool = RecordingPool(row={"id": 3})

    assert await repository.delete_quote(pool, 3) is True
    assert "DELETE FROM runime.quotes WHERE id = $1" in _sql(pool)
    assert pool.calls[-1][1] == (3,)


async def test_delete_reports_missing_row():
    assert await repository.delete_quote(RecordingPool(row=None), 3) is False


async def test_insert_quotes_character_column():
    pool = RecordingPool()

    result = await repository.insert_quote(pool, quote="q", category="c", anime="a", character="ch")

    assert result is None

    assert 'INSERT INTO runime.quotes (quote, category, anime, "character")' in _sql(pool)
    assert pool.calls[-1][1] == ("q", "c", "a", "ch")


async def test_latest_quote_orders_by_id_desc():
    pool = RecordingPool(row={"id": 1})

    row = await repository.get_latest_quote(pool)

    assert row == {"id": 1}
    assert "ORDER BY id DESC LIMIT 1" in _sql(pool)


async def test_random_bernoulli_uses_probability_filter():
    pool = RecordingPool()

    await repository.get_random_quote(pool, probability=0.3)

    sql = _sql(pool)
    assert "random() <= $2" in sql
    assert sql.endswith("LIMIT 1")
    assert pool.calls[-1][1] == (None, 0.3)


async def test_random_uniform_orders_by_random():
    pool = RecordingPool()

    await repository.get_random_quote(pool, category="life", mode=settings.RANDOM_MODE_UNIFORM)

    assert "ORDER BY random() LIMIT 1" in _sql(pool)
    assert pool.calls[-1][1] == ("life",)


@pytest.mark.parametrize("row", [None, {"id": 2, "quote": "q"}])
async def test_get_by_id_returns_row_or_none(row):
    pool = RecordingPool(row=row)
    assert await repository.get_quote_by_id(pool, 2) == row
    assert "WHERE id = $1" in _sql(pool)
