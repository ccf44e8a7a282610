"""Pydantic schemas for request and response validation."""

import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, field_validator, Field


# Auth Schemas
class UserLogin(BaseModel):
    """Schema for user login request."""

    email: str
    password: str

    @field_validator('password')
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        """Validate that password is not empty."""
        if not v or not v.strip():
            raise ValueError('Password cannot be empty')
        return v


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"


class Message(BaseModel):
    message: str


class ResetPasswordRequest(BaseModel):
    """Schema for reset password request."""

    token: str
    new_password: str = Field(min_length=8, max_length=40)


# User Schemas
class UserRegister(BaseModel):
    """Schema for public signup."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=40)
    full_name: Optional[str] = None


class UserCreate(UserRegister):
    """Schema for user creation by a superuser."""

    is_active: bool = True
    is_superuser: bool = False


class UserUpdateMe(BaseModel):
    """Partial profile update. Empty values leave the stored value untouched."""

    full_name: Optional[str] = Field(None, alias='fullName')
    email: Optional[EmailStr] = None

    @field_validator('email', mode='before')
    @classmethod
    def blank_email_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        populate_by_name = True


class UpdatePassword(BaseModel):
    current_password: str = Field(alias='currentPassword')
    new_password: str = Field(min_length=8, max_length=40, alias='newPassword')

    class Config:
        populate_by_name = True


class UserPublic(BaseModel):
    """Response-safe user projection; never carries the password hash."""

    id: uuid.UUID
    full_name: Optional[str] = None
    email: str
    is_active: bool
    is_superuser: bool

    class Config:
        from_attributes = True


class UsersPublic(BaseModel):
    data: List[UserPublic]
    count: int


# Blog Schemas
class BlogCreate(BaseModel):
    """Schema for blog creation request."""

    title: str
    content: str = ""
    position: int = 0
    status: bool = False


class BlogUpdate(BaseModel):
    """Schema for blog update request."""

    title: Optional[str] = None
    content: Optional[str] = None
    position: Optional[int] = None
    status: Optional[bool] = None


class BlogPublic(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    position: int
    status: bool
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BlogWithImages(BlogPublic):
    """Blog post together with the URLs of its media."""

    images: List[str] = []


class BlogsPublic(BaseModel):
    data: List[BlogWithImages]
    count: int


# Calendar Schemas
class CalendarEventCreate(BaseModel):
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    all_day: bool = False


class CalendarEventPublic(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str]
    start_time: datetime
    end_time: Optional[datetime]
    all_day: bool
    user_id: uuid.UUID

    class Config:
        from_attributes = True


class CalendarEventsPublic(BaseModel):
    data: List[CalendarEventPublic]
    count: int


# Item Schemas
class PropertyCreate(BaseModel):
    """Descriptive item attributes, all optional."""

    height: Optional[str] = None
    width: Optional[str] = None
    weight: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    motif: Optional[str] = None
    style: Optional[str] = None


class PropertyPublic(PropertyCreate):
    id: uuid.UUID
    item_id: uuid.UUID

    class Config:
        from_attributes = True


class ItemCreate(BaseModel):
    """Schema for item creation request."""

    title: str
    content: Optional[str] = None
    price: Optional[float] = None
    position: int = 0
    language: Optional[str] = None
    item_url: Optional[str] = None
    category: Optional[str] = None
    status: bool = False
    properties: Optional[PropertyCreate] = None


class ItemPublic(BaseModel):
    id: uuid.UUID
    title: str
    content: Optional[str] = None
    price: Optional[float] = None
    position: int
    language: Optional[str] = None
    item_url: Optional[str] = None
    category: Optional[str] = None
    status: bool
    owner_id: uuid.UUID
    properties: Optional[PropertyPublic] = None
    images: List[str] = []

    class Config:
        from_attributes = True


class ItemsPublic(BaseModel):
    data: List[ItemPublic]
    count: int


# Media Schemas
class MediaPublic(BaseModel):
    id: uuid.UUID
    url: str
    type: Optional[str] = None
    content_id: uuid.UUID

    class Config:
        from_attributes = True


class DeleteMediaRequest(BaseModel):
    image_url: str = Field(alias='imageUrl')

    class Config:
        populate_by_name = True
