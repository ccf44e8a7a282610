"""Database models for AdminPanelAPI."""

import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String, nullable=False, default="")
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    blogs = relationship("Blog", back_populates="author", cascade="all, delete-orphan")
    events = relationship("CalendarEvent", back_populates="user", cascade="all, delete-orphan")
    items = relationship("Item", back_populates="owner", cascade="all, delete-orphan")


class Blog(Base):
    """Blog post model, ordered per author by position."""

    __tablename__ = "blogs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    position = Column(Integer, nullable=False, default=0)
    status = Column(Boolean, nullable=False, default=False)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    author = relationship("User", back_populates="blogs")


class CalendarEvent(Base):
    """Calendar event model."""

    __tablename__ = "calendar_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    all_day = Column(Boolean, nullable=False, default=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="events")


class Item(Base):
    """Catalogue item model."""

    __tablename__ = "items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    language = Column(String, nullable=True, index=True)
    item_url = Column(String, nullable=True)
    category = Column(String, nullable=True)
    status = Column(Boolean, nullable=False, default=False)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="items")
    properties = relationship("Property", back_populates="item", uselist=False, cascade="all, delete-orphan")


class Property(Base):
    """Descriptive attributes of an item. All fields optional."""

    __tablename__ = "properties"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    height = Column(String, nullable=True)
    width = Column(String, nullable=True)
    weight = Column(String, nullable=True)
    color = Column(String, nullable=True)
    material = Column(String, nullable=True)
    brand = Column(String, nullable=True)
    size = Column(String, nullable=True)
    motif = Column(String, nullable=True)
    style = Column(String, nullable=True)
    item_id = Column(Uuid, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)

    item = relationship("Item", back_populates="properties")


class Media(Base):
    """Uploaded file stored in object storage.

    ``content_id`` points at the blog or item the file illustrates. It is not a
    foreign key because it may reference either table.
    """

    __tablename__ = "media"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    url = Column(String, nullable=False)
    type = Column(String, nullable=True)
    key = Column(String, nullable=False)
    content_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
