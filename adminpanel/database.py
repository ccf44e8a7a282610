"""Database configuration and session management."""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from adminpanel.config import DATABASE_URL, EMAIL_SUPERUSER, PASSWORD_SUPERUSER
from adminpanel.models import Base, User

# Configure logging
logger = logging.getLogger(__name__)

logger.info(f"Database URL: {DATABASE_URL}")

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # Needed for SQLite

# Create engine
engine = create_engine(DATABASE_URL, connect_args=connect_args)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Initialize the database by creating all tables."""
    logger.info("Initializing database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def seed_superuser():
    """
    Create the superuser from environment variables on startup.

    Uses EMAIL_SUPERUSER and PASSWORD_SUPERUSER. Only creates the user if
    it doesn't already exist.
    """
    # Import here to avoid circular import
    from adminpanel.auth import hash_password

    logger.info("Checking superuser seed...")

    if not EMAIL_SUPERUSER:
        logger.warning("EMAIL_SUPERUSER not configured, skipping superuser seed")
        return

    if not PASSWORD_SUPERUSER:
        logger.warning("PASSWORD_SUPERUSER not configured, skipping superuser seed")
        return

    db = SessionLocal()
    try:
        existing_user = db.query(User).filter(User.email == EMAIL_SUPERUSER).first()
        if existing_user:
            logger.info(f"Superuser already exists: {EMAIL_SUPERUSER}")
            return

        superuser = User(
            email=EMAIL_SUPERUSER,
            full_name="Administrator",
            password_hash=hash_password(PASSWORD_SUPERUSER),
            is_superuser=True,
        )
        db.add(superuser)
        db.commit()

        logger.info(f"Superuser created successfully: {EMAIL_SUPERUSER}")

    except Exception as e:
        logger.error(f"Failed to seed superuser: {e}")
        db.rollback()
    finally:
        db.close()


def get_db():
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
