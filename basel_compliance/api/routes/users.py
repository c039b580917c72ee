"""Account routes for the signed-in user.

GET    /users/me                   current user
PUT    /users/me                   update e-mail, full name, organization
POST   /users/me/change-password   verify current password, set a new one
DELETE /users/me                   delete account (cascades to packages)
GET    /users                      all users (admin only)
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from basel_compliance.api.deps import get_current_user, get_db, require_admin
from basel_compliance.api.errors import success
from basel_compliance.core.security import hash_password, verify_password
from basel_compliance.core.settings import get_settings
from basel_compliance.db.models import User
from basel_compliance.db.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class UpdateUserBody(BaseModel):
    email: str | None = None
    full_name: str | None = None
    organization: str | None = None


class ChangePasswordBody(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/me", summary="Current user")
def get_me(user: User = Depends(get_current_user)):
    return success(user_summary(user))


@router.put("/me", summary="Update current user")
def update_me(
    body: UpdateUserBody,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if body.email is not None and body.email != user.email:
        taken = db.execute(
            select(User.id).where(User.email == body.email, User.id != user.id)
        ).first()
        if taken is not None:
            raise HTTPException(status_code=409, detail="Email already in use")
        user.email = body.email or None
    if body.full_name is not None:
        user.full_name = body.full_name
    if body.organization is not None:
        user.organization = body.organization

    db.flush()
    return success(user_summary(user))


@router.post("/me/change-password", summary="Change password")
def change_password(
    body: ChangePasswordBody,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not verify_password(body.current_password, user.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.password_hash = hash_password(body.new_password, rounds=get_settings().bcrypt_rounds)
    db.flush()
    logger.info("Password changed for user %s", user.id)
    return success({"message": "Password changed successfully"})


@router.delete("/me", summary="Delete current user")
def delete_me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_id = user.id
    UserRepository(db).delete(user)
    logger.info("Deleted user %s", user_id)
    return success({"message": "Account deleted successfully"})


@router.get("", summary="List all users")
def list_users(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    users = db.execute(select(User).order_by(User.created_at.desc())).scalars().all()
    return success([user_summary(u) for u in users])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def user_summary(u: User) -> dict:
    return {
        "id": str(u.id),
        "username": u.username,
        "email": u.email,
        "full_name": u.full_name,
        "organization": u.organization,
        "role": u.role,
        "created_at": u.created_at.isoformat() if u.created_at else None,
        "updated_at": u.updated_at.isoformat() if u.updated_at else None,
    }
