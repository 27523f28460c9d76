"""Persistent record store for vehicle listings.

SQLite file with two tables: ``vehicles`` (keyed by id, indexed by brand,
category and condition) and ``auth`` (one boolean flag). Blocking sqlite3
calls run in a worker thread; an asyncio lock serializes transactions so no
two operations interleave.

Usage:
    async with RecordStore(path) as store:
        await store.add(vehicle)
        vehicles = await store.get_all()
"""

import asyncio
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import ValidationError

from autokatalog.exceptions import DuplicateKeyError, StorageError
from autokatalog.models.vehicle import Category, Condition, Vehicle

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_NAME = "vehicle_catalog"
SCHEMA_VERSION = 1
AUTH_KEY = "authenticated"

VEHICLE_COLUMNS = (
    "id",
    "brand",
    "model",
    "type",
    "color",
    "year",
    "engine_capacity",
    "transmission",
    "location",
    "price",
    "category",
    "condition",
    "created_at",
    "updated_at",
)
_COLUMN_LIST = ", ".join(VEHICLE_COLUMNS)
_PLACEHOLDERS = ", ".join(["?"] * len(VEHICLE_COLUMNS))

INSERT_SQL = f"INSERT INTO vehicles ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS})"
UPSERT_SQL = (
    INSERT_SQL
    + " ON CONFLICT(id) DO UPDATE SET "
    + ", ".join(f"{c}=excluded.{c}" for c in VEHICLE_COLUMNS if c != "id")
)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS vehicles (
        id TEXT PRIMARY KEY,
        brand TEXT NOT NULL,
        model TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT '',
        color TEXT NOT NULL DEFAULT '',
        year TEXT NOT NULL,
        engine_capacity TEXT NOT NULL DEFAULT '',
        transmission TEXT NOT NULL DEFAULT '',
        location TEXT NOT NULL DEFAULT '',
        price TEXT NOT NULL,
        category TEXT NOT NULL,
        condition TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_vehicles_brand ON vehicles(brand);
    CREATE INDEX IF NOT EXISTS idx_vehicles_category ON vehicles(category);
    CREATE INDEX IF NOT EXISTS idx_vehicles_condition ON vehicles(condition);
    CREATE TABLE IF NOT EXISTS auth (
        key TEXT PRIMARY KEY,
        value INTEGER NOT NULL
    );
"""


def store_path(data_dir: Path) -> Path:
    """Location of the versioned store file inside a data directory."""
    return Path(data_dir) / f"{STORE_NAME}_v{SCHEMA_VERSION}.db"


def _to_params(vehicle: Vehicle) -> tuple[str, ...]:
    data = vehicle.model_dump(mode="json")
    return tuple(str(data[c]) for c in VEHICLE_COLUMNS)


def _to_vehicle(row: sqlite3.Row) -> Vehicle:
    try:
        return Vehicle.model_validate(dict(row))
    except ValidationError as e:
        raise StorageError("read", f"Stored record {row['id']!r} is invalid: {e}") from e


class RecordStore:
    """Async keyed store for Vehicle records plus the admin session flag.

    The connection is opened on first use and reused for the lifetime of the
    handle. Concurrent first use opens exactly one connection.
    """

    def __init__(self, path: Path) -> None:
        """Initialize store handle.

        Args:
            path: SQLite file path, or ":memory:" for a throwaway store
        """
        self.path = path if str(path) == ":memory:" else Path(path)
        self._conn: Optional[sqlite3.Connection] = None
        self._open_lock = asyncio.Lock()
        self._tx_lock = asyncio.Lock()

    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> "RecordStore":
        """Open the store and apply the schema. Idempotent.

        Raises:
            StorageError: If the file cannot be opened or migrated
        """
        if self._conn is not None:
            return self
        async with self._open_lock:
            if self._conn is None:
                try:
                    self._conn = await asyncio.to_thread(self._connect)
                except (sqlite3.Error, OSError) as e:
                    raise StorageError("open", str(e)) from e
                logger.debug("Record store opened: %s", self.path)
        return self

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.path, Path):
            self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            version = conn.execute("PRAGMA user_version").fetchone()[0]
            if version < SCHEMA_VERSION:
                with conn:
                    conn.executescript(SCHEMA_SQL)
                    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    async def close(self) -> None:
        """Close the connection. The handle may be reopened later."""
        async with self._tx_lock:
            if self._conn is not None:
                conn, self._conn = self._conn, None
                await asyncio.to_thread(conn.close)
                logger.debug("Record store closed: %s", self.path)

    async def __aenter__(self) -> "RecordStore":
        return await self.open()

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def _run(
        self,
        operation: str,
        fn: Callable[[sqlite3.Connection], T],
    ) -> T:
        """Run ``fn`` as one transaction in a worker thread."""
        await self.open()
        async with self._tx_lock:
            conn = self._conn
            if conn is None:
                raise StorageError(operation, "Store is closed")

            def transaction() -> T:
                with conn:
                    return fn(conn)

            try:
                result = await asyncio.to_thread(transaction)
            except sqlite3.IntegrityError:
                raise
            except (sqlite3.Error, OSError) as e:
                logger.error("Store operation %s failed: %s", operation, e)
                raise StorageError(operation, str(e)) from e
        logger.debug("Store operation %s ok", operation)
        return result

    # ─────────────────────────────────────────────────────────────────────
    # Vehicles
    # ─────────────────────────────────────────────────────────────────────

    async def get_all(self) -> list[Vehicle]:
        """All records in storage order."""
        rows = await self._run(
            "get_all",
            lambda conn: conn.execute(f"SELECT {_COLUMN_LIST} FROM vehicles").fetchall(),
        )
        return [_to_vehicle(r) for r in rows]

    async def get(self, vehicle_id: str) -> Optional[Vehicle]:
        """Look up one record by id."""
        row = await self._run(
            "get",
            lambda conn: conn.execute(
                f"SELECT {_COLUMN_LIST} FROM vehicles WHERE id = ?", (vehicle_id,)
            ).fetchone(),
        )
        return _to_vehicle(row) if row else None

    async def find_by(
        self,
        brand: Optional[str] = None,
        category: Optional[Category] = None,
        condition: Optional[Condition] = None,
    ) -> list[Vehicle]:
        """Secondary lookup on the brand/category/condition indexes."""
        clauses: list[str] = []
        params: list[Any] = []
        for column, value in (
            ("brand", brand),
            ("category", category.value if category else None),
            ("condition", condition.value if condition else None),
        ):
            if value is not None:
                clauses.append(f"{column} = ?")
                params.append(value)
        sql = f"SELECT {_COLUMN_LIST} FROM vehicles"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        rows = await self._run(
            "find_by", lambda conn: conn.execute(sql, params).fetchall()
        )
        return [_to_vehicle(r) for r in rows]

    async def count(self) -> int:
        return await self._run(
            "count",
            lambda conn: conn.execute("SELECT COUNT(*) FROM vehicles").fetchone()[0],
        )

    async def add(self, vehicle: Vehicle) -> None:
        """Insert a new record.

        Raises:
            DuplicateKeyError: If a record with the same id exists
            StorageError: On any other storage failure
        """
        params = _to_params(vehicle)
        try:
            await self._run("add", lambda conn: conn.execute(INSERT_SQL, params))
        except sqlite3.IntegrityError as e:
            raise DuplicateKeyError(vehicle.id) from e

    async def update(self, vehicle: Vehicle) -> None:
        """Insert or replace the whole record with this id."""
        params = _to_params(vehicle)
        try:
            await self._run("update", lambda conn: conn.execute(UPSERT_SQL, params))
        except sqlite3.IntegrityError as e:
            raise StorageError("update", str(e)) from e

    async def delete_by_id(self, vehicle_id: str) -> bool:
        """Delete one record. Returns False (no error) if it did not exist."""
        cursor = await self._run(
            "delete",
            lambda conn: conn.execute("DELETE FROM vehicles WHERE id = ?", (vehicle_id,)),
        )
        return cursor.rowcount > 0

    async def clear_all(self) -> None:
        await self._run("clear", lambda conn: conn.execute("DELETE FROM vehicles"))

    # ─────────────────────────────────────────────────────────────────────
    # Session flag
    # ─────────────────────────────────────────────────────────────────────

    async def set_authenticated(self, value: bool) -> None:
        await self._run(
            "set_authenticated",
            lambda conn: conn.execute(
                "INSERT INTO auth (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (AUTH_KEY, int(value)),
            ),
        )

    async def get_authenticated(self) -> bool:
        """Current admin flag; False when never set."""
        row = await self._run(
            "get_authenticated",
            lambda conn: conn.execute(
                "SELECT value FROM auth WHERE key = ?", (AUTH_KEY,)
            ).fetchone(),
        )
        return bool(row["value"]) if row else False
