# recruitdesk/db/models/employer_table.py
from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Text, Integer, ForeignKey, UniqueConstraint, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db_base_model import DbBaseModel, SoftDeleteMixin

if TYPE_CHECKING:
    from .candidate_table import Candidate


class Employer(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "employers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )
    company_name: Mapped[str] = mapped_column(String(150), nullable=False)
    country: Mapped[Optional[str]] = mapped_column(String(60))
    contact_person: Mapped[Optional[str]] = mapped_column(String(100))
    contact_email: Mapped[Optional[str]] = mapped_column(String(150))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    job_orders: Mapped[list["JobOrder"]] = relationship(back_populates="employer")


class JobOrder(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "job_orders"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )
    employer_id: Mapped[str] = mapped_column(
        ForeignKey("employers.id"),
        nullable=False,
        index=True,
    )
    position_title: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[Optional[str]] = mapped_column(String(60))
    openings_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default=text("1"),
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Open",
        server_default=text("'Open'"),
    )

    employer: Mapped["Employer"] = relationship(back_populates="job_orders")
    placements: Mapped[list["Placement"]] = relationship(back_populates="job_order")


class Placement(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "placements"
    __table_args__ = (UniqueConstraint("candidate_id", "job_order_id"),)

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )
    candidate_id: Mapped[str] = mapped_column(
        ForeignKey("candidates.id"),
        nullable=False,
        index=True,
    )
    job_order_id: Mapped[str] = mapped_column(
        ForeignKey("job_orders.id"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="Assigned",
        server_default=text("'Assigned'"),
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="placements")
    job_order: Mapped["JobOrder"] = relationship(back_populates="placements")


__all__ = ["Employer", "JobOrder", "Placement"]
