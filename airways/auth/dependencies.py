from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from airways.database import get_db
from airways.auth.utils import decode_access_token
from airways.auth.service import UserService
from airways.exceptions import ForbiddenError, UnauthorizedError
from airways.models import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Get current authenticated user"""
    if not token:
        raise UnauthorizedError("Not authenticated")

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedError()

    user = UserService.get_user_by_id(db, payload["sub"])
    if user is None:
        raise UnauthorizedError()

    return user

def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require admin role for access"""
    if current_user.role != UserRole.ADMIN:
        raise ForbiddenError()
    return current_user
