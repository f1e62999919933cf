# -*- coding: utf-8 -*-
"""
lms_analytics/domain/models.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
SQLAlchemy 2.0 declarative models for the course data the analytics read.

Users are referenced by ``username`` from enrollments and attendance, which
is how mentors are attached to their mentees (``EnrolledUser.mentor_username``).
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (Boolean, Date, DateTime, Enum, Float, ForeignKey,
                        Integer, String, UniqueConstraint, func)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from lms_analytics.domain.enums import AttachmentType, Role


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    image: Mapped[Optional[str]] = mapped_column(String(500))
    role: Mapped[Role] = mapped_column(Enum(Role), default=Role.STUDENT)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    enrollments: Mapped[List["EnrolledUser"]] = relationship(
        back_populates="user",
        foreign_keys="EnrolledUser.username",
    )
    attendance: Mapped[List["Attendance"]] = relationship(back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role={self.role})>"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    enrollments: Mapped[List["EnrolledUser"]] = relationship(back_populates="course")
    classes: Mapped[List["Class"]] = relationship(back_populates="course")
    attachments: Mapped[List["Attachment"]] = relationship(back_populates="course")


class EnrolledUser(Base):
    """A user's enrollment in a course, optionally under a mentor."""

    __tablename__ = "enrolled_users"
    __table_args__ = (
        UniqueConstraint("username", "course_id", name="uq_enrollment_user_course"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(
        ForeignKey("users.username", ondelete="CASCADE"), index=True
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    mentor_username: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.username", ondelete="SET NULL"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped["User"] = relationship(
        back_populates="enrollments", foreign_keys=[username]
    )
    mentor: Mapped[Optional["User"]] = relationship(foreign_keys=[mentor_username])
    course: Mapped["Course"] = relationship(back_populates="enrollments")
    submissions: Mapped[List["Submission"]] = relationship(
        back_populates="enrolled_user"
    )


class Class(Base):
    """A single session of a course; ``created_at`` is its date on charts."""

    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    course: Mapped["Course"] = relationship(back_populates="classes")
    attendance: Mapped[List["Attendance"]] = relationship(back_populates="class_")
    attachments: Mapped[List["Attachment"]] = relationship(back_populates="class_")


class Attendance(Base):
    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(
        ForeignKey("users.username", ondelete="CASCADE"), index=True
    )
    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"), index=True
    )
    attended: Mapped[bool] = mapped_column(Boolean, default=False)

    user: Mapped["User"] = relationship(back_populates="attendance")
    class_: Mapped["Class"] = relationship(back_populates="attendance")


class Attachment(Base):
    """Course resource; an ASSIGNMENT attachment collects submissions."""

    __tablename__ = "attachments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    class_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("classes.id", ondelete="SET NULL")
    )
    attachment_type: Mapped[AttachmentType] = mapped_column(
        Enum(AttachmentType), default=AttachmentType.ASSIGNMENT
    )
    # Expected submissions per enrollment
    max_submissions: Mapped[Optional[int]] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    course: Mapped["Course"] = relationship(back_populates="attachments")
    class_: Mapped[Optional["Class"]] = relationship(back_populates="attachments")
    submissions: Mapped[List["Submission"]] = relationship(
        back_populates="attachment"
    )


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    enrolled_user_id: Mapped[int] = mapped_column(
        ForeignKey("enrolled_users.id", ondelete="CASCADE"), index=True
    )
    attachment_id: Mapped[int] = mapped_column(
        ForeignKey("attachments.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    enrolled_user: Mapped["EnrolledUser"] = relationship(back_populates="submissions")
    attachment: Mapped["Attachment"] = relationship(back_populates="submissions")
    points: Mapped[List["Point"]] = relationship(
        back_populates="submission", order_by="Point.id"
    )

    @property
    def is_evaluated(self) -> bool:
        """A submission counts as evaluated once it has at least one point."""
        return len(self.points) > 0

    @property
    def total_score(self) -> float:
        return sum(point.score for point in self.points)


class Point(Base):
    """One graded score entry of a submission."""

    __tablename__ = "points"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    submission_id: Mapped[int] = mapped_column(
        ForeignKey("submissions.id", ondelete="CASCADE"), index=True
    )
    category: Mapped[Optional[str]] = mapped_column(String(100))
    score: Mapped[float] = mapped_column(Float, default=0)

    submission: Mapped["Submission"] = relationship(back_populates="points")
