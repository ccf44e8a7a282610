"""Outgoing email for password recovery."""

import logging
from functools import lru_cache
from pathlib import Path
from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from adminpanel import config

logger = logging.getLogger(__name__)

TEMPLATE_FOLDER = Path(__file__).parent / "templates" / "email"


@lru_cache(maxsize=1)
def get_mailer() -> FastMail:
    """Build the mail client once, on first use."""
    mail_config = ConnectionConfig(
        MAIL_USERNAME=config.MAIL_FROM,
        MAIL_PASSWORD=config.MAIL_PASSWORD,
        MAIL_FROM=config.MAIL_FROM,
        MAIL_PORT=config.MAIL_PORT,
        MAIL_SERVER=config.MAIL_SERVER,
        MAIL_STARTTLS=config.MAIL_TLS,
        MAIL_SSL_TLS=config.MAIL_SSL,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True,
        SUPPRESS_SEND=1 if config.MAIL_SUPPRESS_SEND else 0,
        TEMPLATE_FOLDER=TEMPLATE_FOLDER,
    )
    return FastMail(mail_config)


async def send_reset_password_email(mailer: FastMail, email: str, token: str) -> None:
    """
    Email a password reset link carrying ``token`` to ``email``.

    Raises:
        Exception: Whatever the mail transport raises; callers map it to a 500.
    """
    reset_link = f"{config.URL_BASE_WEBSITE}/reset-password?token={token}"
    message = MessageSchema(
        subject=f"Reset Your Password - {config.NAME_APP}",
        recipients=[email],
        template_body={"reset_link": reset_link, "project_name": config.NAME_APP},
        subtype=MessageType.html,
    )
    await mailer.send_message(message, template_name="password_reset.html")
    logger.info(f"Password reset email sent to: {email}")
