"""Basel notification routes.

GET   /notifications/package/{package_id}          notification of a package (created on first access)
GET   /notifications/{id}                          full record
PUT   /notifications/{id}                          partial update, returns the record
PATCH /notifications/{id}/autosave                 partial update, minimal response
POST  /notifications/{id}/load-test-data           apply the sample scenario
GET   /notifications/{id}/generate-pdf             official template, AcroForm filled
GET   /notifications/{id}/generate-custom-pdf      four-page custom report

The two exports are owner-only; admins can read and edit any notification
but not export it.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from basel_compliance.api.deps import get_acroform_filler, get_current_user, get_db, get_report_renderer
from basel_compliance.api.errors import success
from basel_compliance.api.routes.packages import load_package_for_access
from basel_compliance.core.settings import get_settings
from basel_compliance.db.models import NOTIFICATION_STATUSES, BaselNotification, User
from basel_compliance.db.repositories import NotificationRepository
from basel_compliance.forms.fields import METADATA_KEYS
from basel_compliance.forms.sample_data import load_sample_scenario
from basel_compliance.forms.values import FieldValueError, coerce_updates
from basel_compliance.pdf.acroform_filler import AcroFormFiller
from basel_compliance.pdf.errors import PdfError
from basel_compliance.reports.html_report import HtmlReportRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/package/{package_id}", summary="Get (or create) a package's notification")
def get_notification_by_package(
    package_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    package = load_package_for_access(db, package_id, user)
    repo = NotificationRepository(db)
    notification = repo.get_by_package(package.id)
    if notification is None:
        notification = repo.create_for_package(package.id, package.user_id)
        logger.info("Created notification %s for package %s", notification.id, package.id)
    return success(_notification_dict(notification))


@router.get("/{notification_id}", summary="Get a notification")
def get_notification(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = _load_for_access(db, notification_id, user)
    return success(_notification_dict(notification))


@router.put("/{notification_id}", summary="Update notification fields")
def update_notification(
    notification_id: UUID,
    updates: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = _load_for_access(db, notification_id, user)
    notification = _apply(db, notification, updates)
    return success(_notification_dict(notification))


@router.patch("/{notification_id}/autosave", summary="Auto-save notification fields")
def autosave_notification(
    notification_id: UUID,
    updates: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = _load_for_access(db, notification_id, user)
    notification = _apply(db, notification, updates)
    return success({
        "id": str(notification.id),
        "progress_percentage": notification.progress_percentage,
        "updated_at": _iso(notification.updated_at),
    })


@router.post("/{notification_id}/load-test-data", summary="Load the sample scenario")
def load_test_data(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = _load_for_access(db, notification_id, user)
    try:
        scenario = load_sample_scenario(get_settings().test_data_path)
    except FileNotFoundError:
        raise HTTPException(status_code=500, detail="Test data file not found")

    repo = NotificationRepository(db)
    repo.apply_updates(notification, scenario.data)
    repo.update_progress(notification)
    logger.info("Loaded test data into notification %s", notification.id)
    return success(
        _notification_dict(notification),
        message=f"Test data loaded: {scenario.scenario}",
    )


@router.get("/{notification_id}/generate-pdf", summary="Export the filled official form")
def generate_pdf(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    filler: AcroFormFiller = Depends(get_acroform_filler),
):
    notification = _load_for_access(db, notification_id, user, owner_only=True)
    try:
        result = filler.fill(notification.to_record())
    except PdfError as exc:
        logger.exception("AcroForm export failed for notification %s", notification_id)
        raise HTTPException(status_code=500, detail=str(exc))

    logger.info("Exported notification %s (%d fields filled)", notification_id, result.filled_count)
    return _pdf_response(result.pdf_bytes, f"Basel_Notification_{notification_id}.pdf")


@router.get("/{notification_id}/generate-custom-pdf", summary="Export the custom report")
def generate_custom_pdf(
    notification_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    renderer: HtmlReportRenderer = Depends(get_report_renderer),
):
    notification = _load_for_access(db, notification_id, user, owner_only=True)
    try:
        pdf_bytes = renderer.render(notification.to_record())
    except PdfError as exc:
        logger.exception("Custom report failed for notification %s", notification_id)
        raise HTTPException(status_code=500, detail=str(exc))

    return _pdf_response(pdf_bytes, f"Basel_Notification_Custom_{notification_id}.pdf")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_for_access(
    db: Session,
    notification_id: UUID,
    user: User,
    owner_only: bool = False,
) -> BaselNotification:
    """Return the notification or raise 404, then 403."""
    repo = NotificationRepository(db)
    notification = repo.get(notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    if notification.created_by_user_id == user.id or repo.is_owner(notification_id, user.id):
        return notification
    if user.is_admin and not owner_only:
        return notification
    raise HTTPException(status_code=403, detail="Access denied")


def _apply(db: Session, notification: BaselNotification, updates: dict[str, Any]) -> BaselNotification:
    updates = dict(updates)
    status = updates.pop("status", None)
    if status is not None and status not in NOTIFICATION_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    # Remaining metadata keys are read-only and dropped.
    for key in METADATA_KEYS:
        updates.pop(key, None)

    try:
        coerced = coerce_updates(updates)
    except FieldValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    repo = NotificationRepository(db)
    repo.apply_updates(notification, coerced, status=status)
    repo.update_progress(notification)
    return notification


def _pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _notification_dict(n: BaselNotification) -> dict:
    record = n.to_record()
    for key in ("id", "submission_package_id", "created_by_user_id"):
        record[key] = str(record[key]) if record[key] is not None else None
    for key in ("created_at", "updated_at", "submitted_at"):
        record[key] = _iso(record[key])
    return record
