from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from basel_compliance.db import models
from basel_compliance.forms.values import calculate_progress

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def create(self, **kwargs) -> ModelT:
        entity = self.model(**kwargs)
        self.db.add(entity)
        self.db.flush()
        return entity

    def get(self, entity_id: UUID) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def list(self, limit: int = 100, offset: int = 0) -> list[ModelT]:
        stmt = select(self.model).offset(offset).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def update(self, entity: ModelT, **kwargs) -> ModelT:
        for key, value in kwargs.items():
            setattr(entity, key, value)
        self.db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()


class UserRepository(BaseRepository[models.User]):
    model = models.User

    def get_by_username(self, username: str) -> models.User | None:
        stmt = select(models.User).where(models.User.username == username)
        return self.db.execute(stmt).scalar_one_or_none()

    def exists(self, username: str, email: str | None = None) -> bool:
        conditions = [models.User.username == username]
        if email:
            conditions.append(models.User.email == email)
        stmt = select(models.User.id).where(or_(*conditions)).limit(1)
        return self.db.execute(stmt).first() is not None


class PackageRepository(BaseRepository[models.SubmissionPackage]):
    model = models.SubmissionPackage

    def list_for_user(self, user_id: UUID) -> list[models.SubmissionPackage]:
        stmt = (
            select(models.SubmissionPackage)
            .where(models.SubmissionPackage.user_id == user_id)
            .order_by(models.SubmissionPackage.updated_at.desc(), models.SubmissionPackage.created_at.desc())
        )
        return self.db.execute(stmt).scalars().all()

    def count_by_status(self, user_id: UUID) -> dict[str, int]:
        stmt = (
            select(models.SubmissionPackage.status, func.count())
            .where(models.SubmissionPackage.user_id == user_id)
            .group_by(models.SubmissionPackage.status)
        )
        counts = {status: 0 for status in sorted(models.PACKAGE_STATUSES)}
        for status, count in self.db.execute(stmt).all():
            counts[status] = count
        return counts

    def set_status(self, package: models.SubmissionPackage, status: str) -> models.SubmissionPackage:
        package.status = status
        if status == "submitted":
            package.submitted_at = datetime.now(timezone.utc)
        self.db.flush()
        return package

    def is_owner(self, package_id: UUID, user_id: UUID) -> bool:
        package = self.get(package_id)
        return package is not None and package.user_id == user_id


class NotificationRepository(BaseRepository[models.BaselNotification]):
    model = models.BaselNotification

    def get_by_package(self, package_id: UUID) -> models.BaselNotification | None:
        stmt = select(models.BaselNotification).where(
            models.BaselNotification.submission_package_id == package_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create_for_package(self, package_id: UUID, user_id: UUID) -> models.BaselNotification:
        return self.create(
            submission_package_id=package_id,
            created_by_user_id=user_id,
            status="draft",
            progress_percentage=0,
            fields={},
        )

    def apply_updates(
        self,
        notification: models.BaselNotification,
        updates: Mapping[str, Any],
        status: str | None = None,
    ) -> models.BaselNotification:
        """Merge already-coerced field values into the JSON column.

        A new dict is assigned so the JSON column is flagged dirty.
        """
        merged = dict(notification.fields or {})
        merged.update(updates)
        notification.fields = merged
        if status is not None:
            notification.status = status
            if status == "submitted":
                notification.submitted_at = datetime.now(timezone.utc)
        self.db.flush()
        return notification

    def update_progress(self, notification: models.BaselNotification) -> models.BaselNotification:
        notification.progress_percentage = calculate_progress(notification.to_record())
        self.db.flush()
        return notification

    def is_owner(self, notification_id: UUID, user_id: UUID) -> bool:
        """True when *user_id* owns the package the notification belongs to."""
        stmt = (
            select(models.BaselNotification.id)
            .join(
                models.SubmissionPackage,
                models.BaselNotification.submission_package_id == models.SubmissionPackage.id,
            )
            .where(
                models.BaselNotification.id == notification_id,
                models.SubmissionPackage.user_id == user_id,
            )
        )
        return self.db.execute(stmt).first() is not None
