# recruitdesk/db/models/tracking_tables.py
from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Text, ForeignKey, Enum as sqlalchemy_enum, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db_base_model import DbBaseModel, SoftDeleteMixin

if TYPE_CHECKING:
    from .candidate_table import Candidate
    from .employer_table import JobOrder


class PassportMovement(str, Enum):
    RECEIVE = "RECEIVE"
    SEND = "SEND"


class PassportTracking(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "passport_tracking"

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
    movement_type: Mapped[PassportMovement] = mapped_column(
        sqlalchemy_enum(PassportMovement, name="passport_movement"),
        nullable=False,
    )
    method: Mapped[Optional[str]] = mapped_column(String(50))
    courier_number: Mapped[Optional[str]] = mapped_column(String(50))
    movement_date: Mapped[Optional[str]] = mapped_column(String(10))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    candidate: Mapped["Candidate"] = relationship(back_populates="passport_movements")


class VisaTracking(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "visa_tracking"

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
    country: Mapped[str] = mapped_column(String(60), nullable=False)
    visa_type: Mapped[Optional[str]] = mapped_column(String(50))
    application_date: Mapped[Optional[str]] = mapped_column(String(10))
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="Pending",
        server_default=text("'Pending'"),
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="visas")


class MedicalTracking(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "medical_tracking"

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
    test_date: Mapped[Optional[str]] = mapped_column(String(10))
    certificate_path: Mapped[Optional[str]] = mapped_column(String(500))
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="Pending",
        server_default=text("'Pending'"),
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="medicals")


class InterviewTracking(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "interview_tracking"

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
    # Not a cascade edge: deleting a job order leaves interviews alone
    job_order_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("job_orders.id"),
        nullable=True,
    )
    interview_date: Mapped[str] = mapped_column(String(10), nullable=False)
    round: Mapped[Optional[str]] = mapped_column(String(30))
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="Scheduled",
        server_default=text("'Scheduled'"),
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="interviews")
    job_order: Mapped[Optional["JobOrder"]] = relationship()


class TravelTracking(SoftDeleteMixin, DbBaseModel):
    __tablename__ = "travel_tracking"

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
    pnr: Mapped[Optional[str]] = mapped_column(String(20))
    travel_date: Mapped[Optional[str]] = mapped_column(String(10))
    departure_city: Mapped[Optional[str]] = mapped_column(String(60))
    arrival_city: Mapped[Optional[str]] = mapped_column(String(60))

    candidate: Mapped["Candidate"] = relationship(back_populates="travels")


__all__ = [
    "PassportMovement",
    "PassportTracking",
    "VisaTracking",
    "MedicalTracking",
    "InterviewTracking",
    "TravelTracking",
]
