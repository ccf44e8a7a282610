import os

# Configuration is read at import time, so it must be in place before the app is imported
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("USE_IN_MEMORY_STORAGE", "true")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from adminpanel.auth import create_access_token
from adminpanel.database import get_db
from adminpanel.mail import get_mailer
from adminpanel.main import app
from adminpanel.models import Base
from adminpanel.routers import login
from adminpanel.schemas import UserCreate
from adminpanel.services import users as user_service
from adminpanel.storage import InMemoryStorageClient, get_storage

PASSWORD = "correct-horse-battery"


class FakeMailer:
    """Records messages instead of sending them."""

    def __init__(self):
        self.sent = []

    async def send_message(self, message, template_name=None):
        self.sent.append((message, template_name))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage():
    return InMemoryStorageClient()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(session_factory, storage, mailer):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_mailer] = lambda: mailer
    login.reset_email_requests.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(email=None, password=PASSWORD, full_name="Test User", is_superuser=False, is_active=True):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return user_service.create_user(
            db,
            UserCreate(
                email=email,
                password=password,
                full_name=full_name,
                is_superuser=is_superuser,
                is_active=is_active,
            ),
        )

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(email="alice@example.com")


@pytest.fixture
def superuser(make_user):
    return make_user(email="admin@example.com", full_name="Admin", is_superuser=True)


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}

    return _auth_headers


@pytest.fixture
def password():
    return PASSWORD
