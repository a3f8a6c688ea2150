# recruitdesk/db/storage.py
"""
Thin SQL executor over DbManager sessions.

The permission and cascade code writes its own SQL text; this module only
runs it, reports affected-row counts, and turns driver failures into
StorageError after the surrounding transaction has been rolled back.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from deskkit import StorageError, get_app_logger
from .db_manager import DbManager

logger = get_app_logger(__name__)

Params = Optional[dict[str, Any]]


@dataclass(frozen=True)
class ExecResult:
    changes: int
    last_id: Optional[int] = None


class SqlTransaction:
    """Statement runner bound to one open session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute(self, sql: str, params: Params = None) -> ExecResult:
        result = await self.session.execute(text(sql), params or {})
        return ExecResult(
            changes=max(result.rowcount or 0, 0),
            last_id=getattr(result, "lastrowid", None),
        )

    async def query_one(self, sql: str, params: Params = None) -> Optional[dict[str, Any]]:
        result = await self.session.execute(text(sql), params or {})
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def query_all(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        result = await self.session.execute(text(sql), params or {})
        return [dict(row) for row in result.mappings().all()]


class SqlStorage:
    """
    Storage collaborator used by the permission and recycle-bin code.

    Usage:
        async with storage.transaction() as tx:
            await tx.execute("UPDATE candidates SET ...", {"id": cid})
        # committed here, or rolled back and StorageError raised

    The one-shot helpers (execute/query_one/query_all) each run in their
    own transaction.
    """

    def __init__(self, db_manager: DbManager):
        self.db_manager = db_manager

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[SqlTransaction, None]:
        try:
            async with self.db_manager.session() as session:
                yield SqlTransaction(session)
        except SQLAlchemyError as e:
            detail = str(getattr(e, "orig", None) or e)
            logger.warning("Transaction rolled back", error=detail)
            raise StorageError(detail) from e

    async def execute(self, sql: str, params: Params = None) -> ExecResult:
        async with self.transaction() as tx:
            return await tx.execute(sql, params)

    async def query_one(self, sql: str, params: Params = None) -> Optional[dict[str, Any]]:
        async with self.transaction() as tx:
            return await tx.query_one(sql, params)

    async def query_all(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        async with self.transaction() as tx:
            return await tx.query_all(sql, params)


__all__ = ["ExecResult", "SqlTransaction", "SqlStorage"]
