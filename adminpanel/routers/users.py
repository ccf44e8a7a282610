"""Users router for signup, profile and user administration."""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from adminpanel.auth import get_current_active_superuser, get_current_user
from adminpanel.database import get_db
from adminpanel.exceptions import AuthorizationError
from adminpanel.models import User
from adminpanel.schemas import (
    Message,
    UpdatePassword,
    UserCreate,
    UserPublic,
    UserRegister,
    UsersPublic,
    UserUpdateMe,
)
from adminpanel.services import users as user_service
from adminpanel.storage import StorageClient, get_storage
from adminpanel.utils import parse_id

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserPublic)
def register_user(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Create a new user without the need to be logged in.

    Raises:
        ValidationError: If the email is empty
        ConflictError: If the email is already registered
    """
    logger.info(f"Signup attempt for email: {user_data.email}")
    return user_service.create_user(db, user_data)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UserPublic)
def create_user(
    user_data: UserCreate,
    current_user: User = Depends(get_current_active_superuser),
    db: Session = Depends(get_db)
):
    """Create a user. Superusers only."""
    logger.info(f"User creation by {current_user.email}: {user_data.email}")
    return user_service.create_user(db, user_data)


@router.get("/", response_model=UsersPublic)
def read_users(
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(get_current_active_superuser),
    db: Session = Depends(get_db)
):
    """List users with pagination. Superusers only."""
    users, count = user_service.list_users(db, skip=skip, limit=limit)
    return UsersPublic(data=[UserPublic.model_validate(u) for u in users], count=count)


@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserPublic)
def update_user_me(
    update_data: UserUpdateMe,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update own profile. Empty fields are ignored."""
    return user_service.update_user_by_id(db, current_user.id, update_data)


@router.patch("/me/password/", response_model=Message)
def update_password_me(
    body: UpdatePassword,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Change own password.

    Raises:
        ValidationError: If the current password is wrong or unchanged
    """
    user_service.update_current_user_password(
        db, current_user, body.current_password, body.new_password
    )
    return {"message": "Password updated successfully"}


@router.get("/{user_id}", response_model=UserPublic)
def read_user_by_id(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a user by id. Users may read themselves, superusers anyone."""
    uid = parse_id(user_id, "User ID")
    if uid != current_user.id and not current_user.is_superuser:
        raise AuthorizationError("The user doesn't have enough privileges")
    return user_service.get_user_by_id(db, uid)


@router.delete("/{user_id}", response_model=Message)
def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_active_superuser),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """
    Delete a user. Superusers only.

    Raises:
        NotFoundError: If the user doesn't exist
    """
    user_service.delete_user_by_id(db, storage, parse_id(user_id, "User ID"), current_user)
    return {"message": "User deleted successfully"}
