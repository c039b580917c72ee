"""Submission package routes.

GET    /packages        caller's packages with per-status counts
POST   /packages        create package
GET    /packages/{id}   package detail
PUT    /packages/{id}   update title, description, status
DELETE /packages/{id}   delete package and its notification
"""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from basel_compliance.api.deps import get_current_user, get_db
from basel_compliance.api.errors import success
from basel_compliance.db.models import PACKAGE_STATUSES, SubmissionPackage, User
from basel_compliance.db.repositories import PackageRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/packages", tags=["packages"])


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class CreatePackageBody(BaseModel):
    title: str | None = None
    description: str | None = None


class UpdatePackageBody(BaseModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("", summary="List the caller's packages")
def list_packages(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    repo = PackageRepository(db)
    packages = repo.list_for_user(user.id)
    counts = repo.count_by_status(user.id)
    return success({
        "packages": [_package_summary(p) for p in packages],
        "counts": {**counts, "total": len(packages)},
    })


@router.post("", status_code=201, summary="Create a package")
def create_package(
    body: CreatePackageBody,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    title = (body.title or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    package = PackageRepository(db).create(
        user_id=user.id,
        title=title,
        description=body.description,
        status="draft",
    )
    logger.info("Created package %s", package.id)
    return success(_package_summary(package))


@router.get("/{package_id}", summary="Get a package")
def get_package(
    package_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    package = load_package_for_access(db, package_id, user)
    return success(_package_summary(package))


@router.put("/{package_id}", summary="Update a package")
def update_package(
    package_id: UUID,
    body: UpdatePackageBody,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    repo = PackageRepository(db)
    package = load_package_for_access(db, package_id, user)

    if body.title is not None:
        if not body.title.strip():
            raise HTTPException(status_code=400, detail="Title cannot be empty")
        package.title = body.title.strip()
    if body.description is not None:
        package.description = body.description
    if body.status is not None:
        if body.status not in PACKAGE_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status")
        repo.set_status(package, body.status)

    db.flush()
    return success(_package_summary(package))


@router.delete("/{package_id}", summary="Delete a package")
def delete_package(
    package_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    package = load_package_for_access(db, package_id, user)
    PackageRepository(db).delete(package)
    logger.info("Deleted package %s", package_id)
    return success({"message": "Package deleted successfully"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def load_package_for_access(db: Session, package_id: UUID, user: User) -> SubmissionPackage:
    """Return the package or raise 404 / 403 (owner or admin only)."""
    package = PackageRepository(db).get(package_id)
    if package is None:
        raise HTTPException(status_code=404, detail="Package not found")
    if package.user_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Access denied")
    return package


def _package_summary(p: SubmissionPackage) -> dict:
    return {
        "id": str(p.id),
        "user_id": str(p.user_id),
        "title": p.title,
        "description": p.description,
        "status": p.status,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
        "submitted_at": p.submitted_at.isoformat() if p.submitted_at else None,
    }
