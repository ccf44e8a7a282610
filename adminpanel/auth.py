"""Authentication utilities for JWT and password hashing."""

import uuid
import logging
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from adminpanel.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
    RESET_TOKEN_EXPIRE_MINUTES,
)
from adminpanel.database import get_db
from adminpanel.exceptions import AuthenticationError
from adminpanel.models import User

# Configure logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
RESET_TOKEN_TYPE = "password_reset"

# HTTP Bearer for JWT authentication; missing headers are reported as 401 below
security = HTTPBearer(auto_error=False)


def _truncate(password: str) -> str:
    # Bcrypt has a 72-byte limit
    password_bytes = password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Bcrypt has a maximum password length of 72 bytes. Passwords longer than
    this are truncated to prevent errors.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password (salted, so two calls differ)
    """
    logger.debug("Hashing password")
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to verify against

    Returns:
        bool: True if password matches, False otherwise
    """
    logger.debug("Verifying password")
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except ValueError:
        logger.warning("Stored password hash is not a recognized bcrypt hash")
        return False


compare_passwords = verify_password


def _encode(claims: dict, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a time-bound JWT access token.

    Args:
        subject: User identifier stored in the ``sub`` claim
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        str: Encoded JWT token
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    logger.info(f"Creating access token for user: {subject}")
    return _encode({"sub": str(subject), "type": ACCESS_TOKEN_TYPE}, expires_delta)


def create_password_reset_token(email: str) -> str:
    """Create a short-lived JWT that authorizes a password reset for ``email``."""
    logger.info(f"Creating password reset token for: {email}")
    return _encode(
        {"sub": email, "type": RESET_TOKEN_TYPE},
        timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES),
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> dict:
    """
    Decode and verify a JWT token.

    Args:
        token: JWT token string
        expected_type: Required value of the ``type`` claim

    Returns:
        dict: Decoded token payload

    Raises:
        AuthenticationError: If the signature, expiry or type is invalid
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token decode error: {e}")
        raise AuthenticationError("Could not validate credentials")

    if payload.get("type") != expected_type:
        logger.warning(f"Unexpected token type: {payload.get('type')}")
        raise AuthenticationError("Could not validate credentials")

    if not payload.get("sub"):
        logger.warning("Token missing subject claim")
        raise AuthenticationError("Could not validate credentials")

    logger.debug("Token decoded successfully")
    return payload


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check login credentials.

    Raises:
        AuthenticationError: If the email is unknown, the password is wrong
            or the user is inactive
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        logger.warning(f"Login failed: User not found - {email}")
        raise AuthenticationError("Incorrect email or password")

    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: Invalid password - {email}")
        raise AuthenticationError("Incorrect email or password")

    if not user.is_active:
        logger.warning(f"Login failed: Inactive user - {email}")
        raise AuthenticationError("Inactive user")

    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Authorization credentials containing JWT token
        db: Database session

    Returns:
        User: The authenticated user

    Raises:
        HTTPException: If authentication fails
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        logger.warning("Missing bearer token")
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
        user_id = uuid.UUID(payload["sub"])
    except (AuthenticationError, ValueError):
        logger.warning("Invalid token received")
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"User not found: {user_id}")
        raise credentials_exception

    if not user.is_active:
        logger.warning(f"Inactive user: {user_id}")
        raise credentials_exception

    logger.info(f"User authenticated: {user.email}")
    return user


def get_current_active_superuser(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets superusers through."""
    if not current_user.is_superuser:
        logger.warning(f"Superuser privileges required: {current_user.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user doesn't have enough privileges"
        )
    return current_user
