# recruitdesk/db/models/candidate_table.py
from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Text, ForeignKey, Float, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db_base_model import DbBaseModel, SoftDeleteMixin

if TYPE_CHECKING:
    from .tracking_tables import (
        PassportTracking,
        VisaTracking,
        MedicalTracking,
        InterviewTracking,
        TravelTracking,
    )
    from .employer_table import Placement


class Candidate(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "candidates"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[Optional[str]] = mapped_column(String(100))
    passport_no: Mapped[Optional[str]] = mapped_column(String(20), unique=True)
    contact: Mapped[Optional[str]] = mapped_column(String(200))
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="New",
        server_default=text("'New'"),
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)

    documents: Mapped[list["Document"]] = relationship(back_populates="candidate")
    payments: Mapped[list["Payment"]] = relationship(back_populates="candidate")
    placements: Mapped[list["Placement"]] = relationship(back_populates="candidate")
    passport_movements: Mapped[list["PassportTracking"]] = relationship(
        back_populates="candidate"
    )
    visas: Mapped[list["VisaTracking"]] = relationship(back_populates="candidate")
    medicals: Mapped[list["MedicalTracking"]] = relationship(back_populates="candidate")
    interviews: Mapped[list["InterviewTracking"]] = relationship(
        back_populates="candidate"
    )
    travels: Mapped[list["TravelTracking"]] = relationship(back_populates="candidate")


class Document(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "documents"

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
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_type: Mapped[Optional[str]] = mapped_column(String(50))
    file_path: Mapped[Optional[str]] = mapped_column(String(500), unique=True)
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="Uncategorized",
        server_default=text("'Uncategorized'"),
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="documents")


class Payment(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "payments"

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
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    amount_paid: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0,
        server_default=text("0"),
    )
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="Pending",
        server_default=text("'Pending'"),
    )
    due_date: Mapped[Optional[str]] = mapped_column(String(10))

    candidate: Mapped["Candidate"] = relationship(back_populates="payments")


class RequiredDocument(SoftDeleteMixin, DbBaseModel):
    """Checklist entry configured in settings (no parent)."""

    __tablename__ = "required_documents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


__all__ = ["Candidate", "Document", "Payment", "RequiredDocument"]
