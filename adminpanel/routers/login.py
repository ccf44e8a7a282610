"""Login and password recovery router."""

import logging
from datetime import datetime, timedelta
from collections import deque
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_mail import FastMail
from sqlalchemy.orm import Session

from adminpanel.auth import (
    RESET_TOKEN_TYPE,
    authenticate,
    create_access_token,
    create_password_reset_token,
    decode_token,
    get_current_user,
)
from adminpanel.database import get_db
from adminpanel.exceptions import AuthenticationError
from adminpanel.mail import get_mailer, send_reset_password_email
from adminpanel.models import User
from adminpanel.schemas import Message, ResetPasswordRequest, Token, UserLogin, UserPublic
from adminpanel.services import users as user_service

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Login"])

# Rate limiting: Track reset email requests (email -> deque of timestamps)
reset_email_requests = {}
RESET_EMAIL_LIMIT = 3
RESET_EMAIL_WINDOW = timedelta(minutes=5)


@router.post("/login/access-token", response_model=Token)
def login_access_token(user_data: UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate user and return JWT token.

    Args:
        user_data: User login data (email, password)
        db: Database session

    Returns:
        Token: JWT access token

    Raises:
        AuthenticationError: If credentials are invalid
    """
    logger.info(f"Login attempt for email: {user_data.email}")

    user = authenticate(db, user_data.email, user_data.password)
    access_token = create_access_token(str(user.id))

    logger.info(f"User logged in successfully: {user_data.email}")
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login/test-token", response_model=UserPublic)
def test_token(current_user: User = Depends(get_current_user)):
    """Return the user the bearer token belongs to."""
    return current_user


def _check_rate_limit(email: str, now: datetime) -> None:
    email_lower = email.lower()

    if email_lower in reset_email_requests:
        # Remove timestamps older than the window
        reset_email_requests[email_lower] = deque(
            [ts for ts in reset_email_requests[email_lower] if now - ts < RESET_EMAIL_WINDOW],
            maxlen=RESET_EMAIL_LIMIT
        )

        if len(reset_email_requests[email_lower]) >= RESET_EMAIL_LIMIT:
            logger.warning(f"Rate limit exceeded for: {email}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many reset requests. Please try again in 5 minutes."
            )


@router.post("/password-recovery/{email}", response_model=Message)
async def recover_password(
    email: str,
    db: Session = Depends(get_db),
    mailer: FastMail = Depends(get_mailer)
):
    """
    Send a password reset email to the user.

    Args:
        email: Address of the account to recover
        db: Database session
        mailer: Mail client

    Returns:
        Message: Success message

    Raises:
        NotFoundError: If no user has this email
        HTTPException: If the rate limit is exceeded or sending fails
    """
    logger.info(f"Password reset requested for: {email}")

    now = datetime.now()
    _check_rate_limit(email, now)

    user = user_service.get_user_by_email(db, email)
    reset_token = create_password_reset_token(user.email)

    try:
        await send_reset_password_email(mailer, user.email, reset_token)
    except Exception as e:
        logger.error(f"Failed to send password reset email to {email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send reset email. Please try again later."
        )

    # Only addresses of existing users get an entry
    reset_email_requests.setdefault(email.lower(), deque(maxlen=RESET_EMAIL_LIMIT)).append(now)
    return {"message": "Password recovery email sent"}


@router.post("/reset-password/", response_model=Message)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    Reset user password using the token from the recovery email.

    Raises:
        HTTPException: If the token is invalid or expired
        NotFoundError: If the user no longer exists
    """
    logger.info("Password reset attempt with token")

    try:
        payload = decode_token(request.token, expected_type=RESET_TOKEN_TYPE)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    email = payload["sub"]
    user = user_service.get_user_by_email(db, email)
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

    user_service.reset_current_user_password(db, email, request.new_password)
    return {"message": "Password updated successfully"}
