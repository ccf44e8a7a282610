"""Environment configuration for AdminPanelAPI."""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

NAME_APP = os.getenv("NAME_APP", "AdminPanelAPI")
API_V1_PREFIX = "/api/v1"

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError("JWT_SECRET_KEY must be set in .env file")

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
# 60 minutes * 24 hours * 8 days
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "11520"))
RESET_TOKEN_EXPIRE_MINUTES = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "30"))

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./adminpanel.db")

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

# Seed superuser
EMAIL_SUPERUSER = os.getenv("EMAIL_SUPERUSER", "")
PASSWORD_SUPERUSER = os.getenv("PASSWORD_SUPERUSER", "")

# Object storage (S3 compatible)
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET")
STORAGE_ENDPOINT = os.getenv("STORAGE_ENDPOINT")
STORAGE_REGION = os.getenv("STORAGE_REGION")
STORAGE_ACCESS_KEY_ID = os.getenv("STORAGE_ACCESS_KEY_ID")
STORAGE_SECRET_ACCESS_KEY = os.getenv("STORAGE_SECRET_ACCESS_KEY")
STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL")
USE_IN_MEMORY_STORAGE = os.getenv("USE_IN_MEMORY_STORAGE", "False").lower() == "true"

# Email
MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
MAIL_TLS = os.getenv("MAIL_TLS", "True").lower() == "true"
MAIL_SSL = os.getenv("MAIL_SSL", "False").lower() == "true"
MAIL_SUPPRESS_SEND = os.getenv("MAIL_SUPPRESS_SEND", "False").lower() == "true"
URL_BASE_WEBSITE = os.getenv("URL_BASE_WEBSITE", "http://localhost:5173")
