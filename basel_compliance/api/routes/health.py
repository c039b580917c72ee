from fastapi import APIRouter

from basel_compliance.api.errors import success
from basel_compliance.core.settings import get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Basic health check")
def health_check() -> dict:
    settings = get_settings()
    return success({
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
    })
