"""User management operations."""

import uuid
import logging
from typing import List, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from adminpanel.auth import hash_password, verify_password
from adminpanel.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from adminpanel.models import User
from adminpanel.schemas import UserCreate, UserRegister, UserUpdateMe
from adminpanel.services.media import delete_all_media, purge_objects
from adminpanel.storage import StorageClient

logger = logging.getLogger(__name__)


def _validate_email(email: str) -> str:
    email = (email or "").strip()
    if not email:
        raise ValidationError("Email cannot be empty")
    return email


def create_user(db: Session, user_data: UserRegister) -> User:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        user_data: Signup or admin creation payload

    Returns:
        User: The persisted user

    Raises:
        ValidationError: If the email is empty
        ConflictError: If the email is already registered
    """
    email = _validate_email(user_data.email)
    logger.info(f"Creating user: {email}")

    if db.query(User).filter(User.email == email).first():
        logger.warning(f"User creation failed: Email already exists - {email}")
        raise ConflictError("The user with this email already exists in the system")

    new_user = User(
        email=email,
        full_name=user_data.full_name or "",
        password_hash=hash_password(user_data.password),
    )
    if isinstance(user_data, UserCreate):
        new_user.is_active = user_data.is_active
        new_user.is_superuser = user_data.is_superuser

    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"User creation failed: Email already exists - {email}")
        raise ConflictError("The user with this email already exists in the system")
    db.refresh(new_user)

    logger.info(f"User created successfully: {email}")
    return new_user


def get_user_by_id_full(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"User not found: {user_id}")
        raise NotFoundError("User not found")
    return user


# Routers project the returned model through UserPublic
get_user_by_id = get_user_by_id_full


def get_user_by_email(db: Session, email: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.warning(f"User not found: {email}")
        raise NotFoundError("User not found")
    return user


def list_users(db: Session, skip: int = 0, limit: int = 100) -> Tuple[List[User], int]:
    count = db.query(func.count(User.id)).scalar()
    users = db.query(User).order_by(User.created_at).offset(skip).limit(limit).all()
    logger.info(f"Found {len(users)} of {count} users")
    return users, count


def update_user_by_id(db: Session, user_id: uuid.UUID, update_data: UserUpdateMe) -> User:
    """
    Partially update a user profile.

    Only non-empty supplied values overwrite stored ones.

    Raises:
        NotFoundError: If the user doesn't exist
        ConflictError: If the new email belongs to another user
    """
    user = get_user_by_id_full(db, user_id)

    if update_data.full_name:
        user.full_name = update_data.full_name
        logger.debug(f"Updated full_name for user {user_id}")

    if update_data.email:
        email = _validate_email(update_data.email)
        existing = db.query(User).filter(User.email == email).first()
        if existing and existing.id != user.id:
            logger.warning(f"Email update rejected, already in use: {email}")
            raise ConflictError("User with this email already exists")
        user.email = email
        logger.debug(f"Updated email for user {user_id}")

    db.commit()
    db.refresh(user)

    logger.info(f"User {user_id} updated successfully")
    return user


def update_current_user_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """
    Change a user's password after checking the current one.

    Raises:
        ValidationError: If the current password is wrong or the new password
            equals the current one. The stored hash is left unchanged.
    """
    if not verify_password(current_password, user.password_hash):
        logger.warning(f"Password update failed: Incorrect password - {user.email}")
        raise ValidationError("Incorrect password")

    if current_password == new_password:
        logger.warning(f"Password update failed: New password equals current - {user.email}")
        raise ValidationError("New password cannot be the same as the current one")

    user.password_hash = hash_password(new_password)
    db.commit()

    logger.info(f"Password updated successfully for: {user.email}")


def reset_current_user_password(db: Session, email: str, new_password: str) -> None:
    """
    Overwrite the password of the user owning ``email``.

    Callers must have verified a password reset token for ``email`` first.
    """
    user = get_user_by_email(db, email)
    user.password_hash = hash_password(new_password)
    db.commit()

    logger.info(f"Password reset successfully for: {email}")


def delete_user_by_id(db: Session, storage: StorageClient, user_id: uuid.UUID, current_user: User) -> None:
    """
    Delete a user and everything they own, media of their posts and items included.

    Raises:
        NotFoundError: If the user doesn't exist
        AuthorizationError: If a superuser tries to delete themselves
    """
    user = get_user_by_id_full(db, user_id)

    if user.id == current_user.id:
        logger.warning(f"Superuser attempted self deletion: {current_user.email}")
        raise AuthorizationError("Super users are not allowed to delete themselves")

    keys = []
    for content in list(user.blogs) + list(user.items):
        keys.extend(delete_all_media(db, content.id))
    db.delete(user)
    db.commit()
    purge_objects(storage, keys)

    logger.info(f"User {user_id} deleted with {len(keys)} media files")


def is_superuser(db: Session, user_id: uuid.UUID) -> bool:
    """
    Tell whether the user is a superuser.

    Raises:
        NotFoundError: If the user doesn't exist
    """
    return get_user_by_id_full(db, user_id).is_superuser
