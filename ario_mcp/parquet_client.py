"""
DuckDB client for the Parquet query tools.

Each call opens a fresh in-memory DuckDB instance, exposes the configured
Parquet directory as a view, runs its statements and closes both the
connection and the instance, whether the query succeeded or not.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

import duckdb

from .config import ParquetConfig

log = logging.getLogger(__name__)

# Integer types wider than a JSON-safe number; their values are emitted as text
WIDE_INTEGER_TYPES = frozenset({"BIGINT", "UBIGINT", "HUGEINT", "UHUGEINT"})

# Largest integer a JSON client can hold exactly (2**53 - 1)
MAX_SAFE_INTEGER = 9007199254740991

SAMPLE_ROWS = 5


def apply_row_limit(query: str, limit: int) -> str:
    """Append ``LIMIT n`` unless the text already contains ``limit `` (any case)."""
    query = query.strip()
    if "limit " not in query.lower():
        query = f"{query} LIMIT {limit}"
    return query


def quote_literal(text: str) -> str:
    """Single-quoted SQL string literal."""
    return "'" + text.replace("'", "''") + "'"


def json_safe(value: Any) -> Any:
    """Stringify integers beyond MAX_SAFE_INTEGER at any depth of a LIST, STRUCT or MAP value."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value


def _rows(relation: duckdb.DuckDBPyRelation | None) -> List[Dict[str, Any]]:
    """Materialise a relation as column-keyed dicts.

    Wide integer columns become text whatever their value; nested values go
    through json_safe.
    """
    if relation is None:
        return []
    columns = relation.columns
    wide = [str(col_type).upper() in WIDE_INTEGER_TYPES for col_type in relation.types]
    rows = []
    for values in relation.fetchall():
        row = {}
        for name, is_wide, value in zip(columns, wide, values):
            row[name] = str(value) if is_wide and value is not None else json_safe(value)
        rows.append(row)
    return rows


class ParquetClient:
    """
    Per-call DuckDB access to a directory of Parquet files:
      - one in-memory instance and one connection per call
      - the directory is exposed as a view (``tags`` by default)
      - both handles are closed on every exit path
    """

    def __init__(self, cfg: ParquetConfig) -> None:
        self.cfg = cfg
        self.directory = str(Path(cfg.directory))
        self.view_name = cfg.view_name

    @property
    def view_sql(self) -> str:
        glob = quote_literal(f"{self.directory}/*.parquet")
        return (
            f"CREATE VIEW IF NOT EXISTS {self.view_name} AS "
            f"SELECT * FROM read_parquet({glob})"
        )

    @contextmanager
    def session(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Open instance + connection, register the view, always close both."""
        log.debug("Opening DuckDB instance %s over %s", self.cfg.database, self.directory)
        db = duckdb.connect(database=self.cfg.database)
        try:
            con = db.cursor()
            try:
                con.execute(self.view_sql)
                yield con
            finally:
                con.close()
        finally:
            db.close()
            log.debug("Closed DuckDB instance")

    def run_query(self, query: str, limit: int) -> Dict[str, Any]:
        executed = apply_row_limit(query, limit)
        log.info("Executing Parquet query: %s", executed)
        with self.session() as con:
            result = _rows(con.sql(executed))
        return {
            "result": result,
            "rowCount": len(result),
            "query": executed,
        }

    def describe(self) -> Dict[str, Any]:
        with self.session() as con:
            schema = _rows(con.sql(f"DESCRIBE {self.view_name}"))
            sample = _rows(con.sql(f"SELECT * FROM {self.view_name} LIMIT {SAMPLE_ROWS}"))
            count = _rows(con.sql(f"SELECT COUNT(*) AS total FROM {self.view_name}"))
        return {
            "schema": schema,
            "sampleData": sample,
            "totalRows": count[0]["total"] if count else 0,
            "parquetDirectory": self.directory,
        }

    async def query(self, query: str, limit: int | None = None) -> Dict[str, Any]:
        """Run a caller-supplied query with a row cap; see apply_row_limit."""
        return await asyncio.to_thread(self.run_query, query, limit or self.cfg.default_limit)

    async def schema(self) -> Dict[str, Any]:
        """Column description, a few sample rows and the total row count."""
        return await asyncio.to_thread(self.describe)
