"""FastAPI dependency injection: database sessions, the current user and
the two PDF renderers."""
from __future__ import annotations

from collections.abc import Generator
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from basel_compliance.core.security import InvalidTokenError, TokenService
from basel_compliance.core.settings import get_settings
from basel_compliance.db.models import User
from basel_compliance.db.session import get_session_factory
from basel_compliance.pdf.acroform_filler import AcroFormFiller
from basel_compliance.pdf.acroform_filler import get_acroform_filler as _build_acroform_filler
from basel_compliance.reports.converters import get_converter
from basel_compliance.reports.html_report import HtmlReportRenderer

_bearer = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_token_service() -> TokenService:
    return TokenService.from_settings()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated", headers=_UNAUTHORIZED_HEADERS)
    try:
        payload = tokens.decode_token(credentials.credentials)
        user_id = UUID(str(payload["sub"]))
    except (InvalidTokenError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired token", headers=_UNAUTHORIZED_HEADERS)

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found", headers=_UNAUTHORIZED_HEADERS)
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def get_acroform_filler() -> AcroFormFiller:
    return _build_acroform_filler()


def get_report_renderer() -> HtmlReportRenderer:
    settings = get_settings()
    converter = get_converter(settings.pdf_renderer_backend, settings.renderer_launch_timeout_seconds)
    return HtmlReportRenderer(converter)
