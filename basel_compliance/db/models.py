from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, Text, func, text as sql_text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from basel_compliance.db.base import Base
from basel_compliance.forms.fields import FIELD_SPECS

USER_ROLES = frozenset({"user", "admin"})
PACKAGE_STATUSES = frozenset({"draft", "submitted", "archived"})
NOTIFICATION_STATUSES = frozenset({"draft", "submitted", "archived"})


class User(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="user", server_default=sql_text("'user'"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    packages: Mapped[list[SubmissionPackage]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SubmissionPackage(Base):
    """A user's container for one notification and its annexes."""

    __tablename__ = "submission_packages"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft", server_default=sql_text("'draft'"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship(back_populates="packages")
    notification: Mapped[BaselNotification | None] = relationship(
        back_populates="package",
        cascade="all, delete-orphan",
        uselist=False,
    )


class BaselNotification(Base):
    """The notification form of a package.

    Regulatory values live in the ``fields`` JSON column keyed by
    :class:`~basel_compliance.forms.fields.FieldId` values; writes are
    validated by :func:`~basel_compliance.forms.values.coerce_updates`
    before they get here.
    """

    __tablename__ = "basel_notifications"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    submission_package_id: Mapped[UUID] = mapped_column(
        ForeignKey("submission_packages.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    created_by_user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft", server_default=sql_text("'draft'"))
    progress_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sql_text("0")
    )
    fields: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    package: Mapped[SubmissionPackage] = relationship(back_populates="notification")

    def to_record(self) -> dict[str, Any]:
        """Flatten into a Notification Record: every field id plus metadata."""
        stored = self.fields or {}
        record: dict[str, Any] = {
            spec.field_id.value: stored.get(spec.field_id.value) for spec in FIELD_SPECS
        }
        record.update(
            id=self.id,
            submission_package_id=self.submission_package_id,
            created_by_user_id=self.created_by_user_id,
            status=self.status,
            progress_percentage=self.progress_percentage,
            created_at=self.created_at,
            updated_at=self.updated_at,
            submitted_at=self.submitted_at,
        )
        return record
