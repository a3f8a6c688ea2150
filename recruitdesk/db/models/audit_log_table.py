# recruitdesk/db/models/audit_log_table.py
from typing import Optional
from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class AuditLogEntry(DbBaseModel):
    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # No FK: entries must outlive purged users
    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    username: Mapped[Optional[str]] = mapped_column(String(50))
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    target_type: Mapped[Optional[str]] = mapped_column(String(50))
    target_id: Mapped[Optional[str]] = mapped_column(String(36))
    details: Mapped[Optional[str]] = mapped_column(Text)


__all__ = ["AuditLogEntry"]
