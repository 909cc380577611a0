"""Relational store for task records."""

import asyncio
import logging
from datetime import date

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    text,
)
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from ..config import mask_url
from ..models import TaskRecord, TaskStatus

logger = logging.getLogger(__name__)

# Range of the INTEGER id column; ids outside it cannot match a row.
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

metadata = MetaData()

items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column(
        "status",
        Enum(
            TaskStatus,
            name="item_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=TaskStatus.PENDING,
        server_default=TaskStatus.PENDING.value,
    ),
    Column("due_date", Date, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    sqlite_autoincrement=True,
)


def _row_to_record(row: Row) -> TaskRecord:
    return TaskRecord(
        id=int(row.id),
        name=row.name,
        description=row.description,
        status=TaskStatus(row.status),
        due_date=row.due_date,
        created_at=row.created_at,
    )


class TaskStore:
    """
    Connection-state holder and CRUD operations over the items table.

    `connected` starts False and flips to True on the first successful
    handshake; it is never cleared afterwards. Request handlers check it
    before touching the store.
    """

    def __init__(self, database_url: str) -> None:
        self._url = database_url
        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self._engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_recycle=1800,
            connect_args=connect_args,
        )
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def url(self) -> str:
        return mask_url(self._url)

    def connect(self) -> bool:
        """Run one handshake and create the schema. Returns success."""
        if self._connected:
            return True
        try:
            with self._engine.begin() as conn:
                conn.execute(text("SELECT 1"))
            metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            logger.warning("Store connection to %s failed: %s", self.url, e)
            return False
        self._connected = True
        logger.info("Store connected: %s", self.url)
        return True

    def close(self) -> None:
        self._engine.dispose()

    # ---- CRUD ----

    def list_tasks(self) -> list[TaskRecord]:
        """Get all tasks, newest first."""
        with self._engine.connect() as conn:
            rows = conn.execute(items.select().order_by(items.c.id.desc())).fetchall()
        return [_row_to_record(row) for row in rows]

    def get_task(self, task_id: int) -> TaskRecord | None:
        if not ID_MIN <= task_id <= ID_MAX:
            return None
        with self._engine.connect() as conn:
            row = conn.execute(items.select().where(items.c.id == task_id)).first()
        return _row_to_record(row) if row else None

    def create_task(self, name: str, description: str, due_date: date | None) -> int:
        """Insert a pending task and return its id."""
        with self._engine.begin() as conn:
            result = conn.execute(
                items.insert().values(
                    name=name,
                    description=description,
                    status=TaskStatus.PENDING,
                    due_date=due_date,
                )
            )
            task_id = int(result.inserted_primary_key[0])
        logger.debug("Task created id=%s due_date=%s", task_id, due_date)
        return task_id

    def update_task(
        self,
        task_id: int,
        name: str,
        description: str,
        status: TaskStatus,
        due_date: date | None,
    ) -> bool:
        """Replace every mutable field. Returns False if no row matched."""
        if not ID_MIN <= task_id <= ID_MAX:
            return False
        with self._engine.begin() as conn:
            result = conn.execute(
                items.update()
                .where(items.c.id == task_id)
                .values(
                    name=name,
                    description=description,
                    status=status,
                    due_date=due_date,
                )
            )
        logger.debug("Task update id=%s status=%s matched=%s", task_id, status.value, result.rowcount)
        return result.rowcount > 0

    def delete_task(self, task_id: int) -> bool:
        """Delete a task by ID."""
        if not ID_MIN <= task_id <= ID_MAX:
            return False
        with self._engine.begin() as conn:
            result = conn.execute(items.delete().where(items.c.id == task_id))
        return result.rowcount > 0


async def keep_connecting(store: TaskStore, delay: float) -> None:
    """Retry the store handshake every `delay` seconds until it succeeds."""
    attempt = 1
    while not store.connected:
        logger.info("Retrying store connection in %.1fs (attempt %d failed)", delay, attempt)
        await asyncio.sleep(delay)
        attempt += 1
        await run_in_threadpool(store.connect)
