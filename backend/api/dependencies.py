"""
Shared FastAPI dependencies: repositories, the report analyzer and admin auth.
"""

import logging
from typing import Optional

from bson import ObjectId
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from database import get_database
from models.admin import Admin
from repositories.admin import AdminRepository
from repositories.report import ReportRepository
from services.auth import InvalidTokenError, TokenExpiredError, decode_access_token
from services.report_analyzer import ReportAnalyzer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_report_repository(db=Depends(get_database)) -> ReportRepository:
    """Dependency injection for ReportRepository."""
    return ReportRepository(db)


def get_admin_repository(db=Depends(get_database)) -> AdminRepository:
    """Dependency injection for AdminRepository."""
    return AdminRepository(db)


def get_report_analyzer(request: Request) -> ReportAnalyzer:
    """The analyzer built at startup and stored on app.state."""
    return request.app.state.report_analyzer


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    admin_repo: AdminRepository = Depends(get_admin_repository),
) -> Admin:
    """
    Resolve the admin behind the bearer token.

    Raises 401 when the header is missing, the token is expired or invalid,
    or the admin no longer exists or was deactivated.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Authentication required")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenExpiredError:
        raise _unauthorized("Token expired")
    except InvalidTokenError:
        raise _unauthorized("Invalid token")

    admin_id = payload["admin_id"]
    if not ObjectId.is_valid(admin_id):
        raise _unauthorized("Invalid token")

    # Token may outlive the account
    admin = await admin_repo.find_by_id(admin_id)
    if not admin or not admin.is_active:
        raise _unauthorized("Admin account not found or inactive")

    return admin
