# recruitdesk/db/models/user_table.py
from __future__ import annotations
from typing import Optional
from sqlalchemy import String, Text, Boolean, ForeignKey, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .db_base_model import DbBaseModel


class User(DbBaseModel):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    # super_admin | admin | staff
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        server_default=text("'staff'"),
    )

    # Staff only: the admin who delegates features to this user
    supervisor_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
    )

    # Super admin only: JSON object FeatureKey -> bool (the global policy)
    features: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    supervisor: Mapped[Optional["User"]] = relationship(
        "User",
        remote_side=[id],
        back_populates="staff",
    )
    staff: Mapped[list["User"]] = relationship("User", back_populates="supervisor")


class AdminFeatureAssignment(DbBaseModel):
    """Super admin -> admin delegation. A missing row means granted."""

    __tablename__ = "admin_feature_assignments"

    admin_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
    feature_key: Mapped[str] = mapped_column(String(50), primary_key=True)
    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("0"),
    )


class StaffFeatureGrant(DbBaseModel):
    """Admin -> staff delegation. A missing row means denied."""

    __tablename__ = "staff_feature_grants"

    staff_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
    feature_key: Mapped[str] = mapped_column(String(50), primary_key=True)

    # The admin who recorded the grant
    admin_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("0"),
    )


__all__ = ["User", "AdminFeatureAssignment", "StaffFeatureGrant"]
