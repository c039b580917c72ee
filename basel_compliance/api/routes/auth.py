"""Registration and login.

POST /auth/register   create an account
POST /auth/login      exchange credentials for a bearer token
GET  /auth/me         current user
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from basel_compliance.api.deps import get_current_user, get_db, get_token_service
from basel_compliance.api.errors import success
from basel_compliance.api.routes.users import user_summary
from basel_compliance.core.security import TokenService, hash_password, verify_password
from basel_compliance.core.settings import get_settings
from basel_compliance.db.models import User
from basel_compliance.db.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterBody(BaseModel):
    username: str = Field(min_length=3, max_length=128)
    password: str = Field(min_length=8)
    email: str | None = None
    full_name: str | None = None
    organization: str | None = None


class LoginBody(BaseModel):
    username: str
    password: str


@router.post("/register", status_code=201, summary="Register a new user")
def register(body: RegisterBody, db: Session = Depends(get_db)):
    users = UserRepository(db)
    if users.exists(body.username, body.email):
        raise HTTPException(status_code=409, detail="Username or email already exists")

    user = users.create(
        username=body.username,
        password_hash=hash_password(body.password, rounds=get_settings().bcrypt_rounds),
        email=body.email or None,
        full_name=body.full_name,
        organization=body.organization,
        role="user",
    )
    logger.info("Registered user %s", user.id)
    return success(user_summary(user))


@router.post("/login", summary="Log in")
def login(
    body: LoginBody,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = UserRepository(db).get_by_username(body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    token = tokens.create_access_token(str(user.id), user.username)
    logger.info("User %s logged in", user.id)
    return success({"token": token, "user": user_summary(user)})


@router.get("/me", summary="Current user")
def me(user: User = Depends(get_current_user)):
    return success(user_summary(user))
