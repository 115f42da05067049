from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from airways.database import get_db
from airways.auth.schemas import LoginRequest, RegisterRequest, JwtResponse, UserResponse
from airways.auth.service import UserService
from airways.auth.utils import create_access_token
from airways.auth.dependencies import get_current_user
from airways.exceptions import AuthenticationError, RegistrationError
from airways.logger_config import logger
from airways.models import User

router = APIRouter()

def _issue_token(db: Session, username: str, password: str) -> JwtResponse:
    """Authenticate the credentials and build the token response"""
    user = UserService.authenticate(db, username, password)
    if not user:
        logger.info(f"Failed login for {username!r}")
        raise AuthenticationError()

    return JwtResponse(
        token=create_access_token(user),
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role
    )

@router.post("/login", response_model=JwtResponse)
def login(login_request: LoginRequest, db: Session = Depends(get_db)):
    """Log in with username and password"""
    return _issue_token(db, login_request.username, login_request.password)

@router.post("/register", response_model=JwtResponse)
def register(register_request: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and log them in"""
    try:
        UserService.create_user(
            db,
            username=register_request.username,
            email=register_request.email,
            password=register_request.password
        )
        return _issue_token(db, register_request.username, register_request.password)
    except (ValueError, AuthenticationError) as e:
        raise RegistrationError(str(e))

@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current user profile"""
    return current_user
