from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from airways.models import User, UserRole
from airways.auth.utils import get_password_hash, verify_password
from airways.logger_config import logger
from typing import Optional

class UserService:
    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def create_user(
        db: Session,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.CUSTOMER
    ) -> User:
        """Create a new user"""
        if UserService.get_user_by_username(db, username):
            raise ValueError("Username is already taken")
        if UserService.get_user_by_email(db, email):
            raise ValueError("Email is already in use")

        db_user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            role=role
        )

        try:
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
        except IntegrityError:
            db.rollback()
            raise ValueError("Username or email already registered")

        logger.info(f"Registered user {db_user.username} ({db_user.role.value})")
        return db_user

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = UserService.get_user_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user
