# src/api_practice/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from ..core.errors import PersistenceFailure
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


def _ts_to_str(ts: datetime) -> str:
    return ts.isoformat(timespec="microseconds")


def _str_to_ts(raw: str) -> datetime:
    return datetime.fromisoformat(raw)


# SQLite INTEGER PRIMARY KEY is a signed 64-bit value.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _id_in_range(task_id: int) -> bool:
    return _MIN_ID <= task_id <= _MAX_ID


class TaskStore:
    """
    SQLite task store (TaskRepo implementation).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Transactions:
    - transaction() binds one connection to the calling thread
    - writers start with BEGIN IMMEDIATE, so read-modify-write blocks are serialized
    - save()/find_by_id() outside transaction() run in their own short transaction
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except PersistenceFailure:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        # isolation_level=None: transactions are controlled explicitly below.
        conn = sqlite3.connect(str(self._db_path), timeout=30.0, isolation_level=None)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("BEGIN IMMEDIATE")

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'TODO',
                    created_at TEXT NOT NULL
                        DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now', 'localtime')),
                    updated_at TEXT NOT NULL
                        DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now', 'localtime'))
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            # ALTER TABLE only accepts constant defaults.
            add_col("description", "TEXT")
            add_col("status", "TEXT NOT NULL DEFAULT 'TODO'")
            add_col("created_at", "TEXT NOT NULL DEFAULT '1970-01-01T00:00:00'")
            add_col("updated_at", "TEXT NOT NULL DEFAULT '1970-01-01T00:00:00'")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at)")

            cur.execute("COMMIT")
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.execute("ROLLBACK")
            raise PersistenceFailure("schema setup", e) from e
        finally:
            conn.close()

    def _conn(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            raise RuntimeError("TaskStore connection used outside of transaction()")
        return conn

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        try:
            return Task.restore(
                id=int(row["id"]),
                title=str(row["title"]),
                description=str(row["description"] or ""),
                status=TaskStatus.from_db(row["status"]),
                created_at=_str_to_ts(row["created_at"]),
                updated_at=_str_to_ts(row["updated_at"]),
            )
        except (TypeError, ValueError) as e:
            raise PersistenceFailure("load", f"corrupted row id={row['id']}: {e}") from e

    # ---- public API ----

    @contextlib.contextmanager
    def transaction(self, *, read_only: bool = False) -> Iterator[None]:
        """
        Atomic boundary.

        Nested calls join the outer transaction. Commit on success,
        roll back on any exception.
        """
        if getattr(self._local, "conn", None) is not None:
            yield
            return

        conn = self._get_conn()
        try:
            conn.execute("BEGIN" if read_only else "BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            conn.close()
            raise PersistenceFailure("begin", e) from e

        self._local.conn = conn
        try:
            yield
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.execute("ROLLBACK")
            raise PersistenceFailure("transaction", e) from e
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.execute("ROLLBACK")
            raise
        finally:
            self._local.conn = None
            conn.close()

    def count_tasks(self) -> int:
        try:
            with self.transaction(read_only=True):
                (n,) = self._conn().execute("SELECT COUNT(*) FROM tasks").fetchone()
                return int(n)
        except sqlite3.Error as e:
            raise PersistenceFailure("count", e) from e

    def save(self, task: Task) -> Task:
        """
        Insert (id is None) or update by primary key.

        Returns the task as stored. Updating an id that does not exist is a failure.
        """
        params = (
            task.title,
            task.description,
            task.status.value,
            _ts_to_str(task.created_at),
            _ts_to_str(task.updated_at),
        )
        try:
            with self.transaction():
                cur = self._conn().cursor()
                if task.id is None:
                    cur.execute(
                        """
                        INSERT INTO tasks(title, description, status, created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        params,
                    )
                    rowid = cur.lastrowid
                    if rowid is None:
                        raise PersistenceFailure("insert", "SQLite did not return lastrowid")
                    task_id = int(rowid)
                else:
                    task_id = int(task.id)
                    if not _id_in_range(task_id):
                        raise PersistenceFailure("update", f"no task with id={task_id}")
                    cur.execute(
                        """
                        UPDATE tasks
                        SET title = ?,
                            description = ?,
                            status = ?,
                            created_at = ?,
                            updated_at = ?
                        WHERE id = ?
                        """,
                        (*params, task_id),
                    )
                    if cur.rowcount != 1:
                        raise PersistenceFailure("update", f"no task with id={task_id}")

                cur.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
                row = cur.fetchone()
        except sqlite3.Error as e:
            raise PersistenceFailure("save", e) from e

        logger.debug("Task saved id=%s status=%s", task_id, task.status.value)
        return self._row_to_task(row)

    def find_by_id(self, task_id: int) -> Task | None:
        if not _id_in_range(int(task_id)):
            return None
        try:
            with self.transaction(read_only=True):
                row = self._conn().execute(
                    "SELECT * FROM tasks WHERE id = ?", (int(task_id),)
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceFailure("find", e) from e
        return self._row_to_task(row) if row else None
