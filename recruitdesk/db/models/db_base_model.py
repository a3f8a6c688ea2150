# recruitdesk/db/models/db_base_model.py
from datetime import datetime
from uuid import uuid4
from sqlalchemy import Boolean, DateTime, func, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class DbBaseModel(DeclarativeBase):
    __abstract__ = True  # prevents SQLAlchemy from creating a table for this base

    # Server-side defaults so raw INSERT statements get timestamps too
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @staticmethod
    def generate_uuid() -> str:
        return str(uuid4())


class SoftDeleteMixin:
    """Rows are hidden by flag and only physically removed by a purge."""

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("0"),
        index=True,
    )


__all__ = ["DbBaseModel", "SoftDeleteMixin"]
