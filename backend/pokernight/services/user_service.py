from __future__ import annotations

import logging

from sqlalchemy.orm import Session as DBSession

from ..core.exceptions import ErrorMessages, NotFoundError, ValidationError
from ..core.security import hash_password, verify_password
from ..models.db import User
from .repositories import commit

logger = logging.getLogger(__name__)

ROLES = ("admin", "editor", "viewer")
MIN_PASSWORD_LENGTH = 4


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValidationError(ErrorMessages.INVALID_ROLE, details={"role": role})


def _check_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(ErrorMessages.PASSWORD_TOO_SHORT)


class UserService:
    @staticmethod
    def authenticate(db: DBSession, username: str, password: str) -> User | None:
        user = db.query(User).filter(User.username == username.strip()).first()
        if user is None or not user.password_hash:
            return None
        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed for '{username}'")
            return None
        return user

    @staticmethod
    def require(db: DBSession, user_id: str) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND, details={"user_id": user_id})
        return user

    @staticmethod
    def list_users(db: DBSession) -> list[User]:
        return db.query(User).order_by(User.username.asc()).all()

    @staticmethod
    def register(db: DBSession, username: str, password: str, role: str) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError(ErrorMessages.NAME_REQUIRED)
        _check_role(role)
        _check_password(password)
        if db.query(User).filter(User.username == username).first():
            raise ValidationError(ErrorMessages.USERNAME_EXISTS, details={"username": username})

        user = User(username=username, password_hash=hash_password(password), role=role)
        db.add(user)
        commit(db)
        db.refresh(user)
        logger.info(f"User registered: {user.id} '{username}' role={role}")
        return user

    @staticmethod
    def update_role(db: DBSession, user_id: str, role: str) -> User:
        _check_role(role)
        user = UserService.require(db, user_id)
        user.role = role
        commit(db)
        db.refresh(user)
        logger.info(f"User role updated: {user_id} -> {role}")
        return user

    @staticmethod
    def update_password(db: DBSession, user_id: str, password: str) -> User:
        _check_password(password)
        user = UserService.require(db, user_id)
        user.password_hash = hash_password(password)
        commit(db)
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: DBSession, user_id: str) -> None:
        user = UserService.require(db, user_id)
        db.delete(user)
        commit(db)
        logger.info(f"User deleted: {user_id}")

    @staticmethod
    def ensure_admin(db: DBSession, username: str, password: str) -> User:
        """Create the bootstrap admin account when no admin exists yet."""
        existing = db.query(User).filter(User.role == "admin").first()
        if existing:
            return existing
        return UserService.register(db, username, password, "admin")
